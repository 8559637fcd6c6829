"""
Chat client module.

This module handles the client side of the line protocol: it sends the
lines a user submits and yields every line the server sends back.
"""

import asyncio
from typing import AsyncIterator, Optional

from common.constants import CONNECT_ATTEMPTS, CONNECT_DELAY_BASE, MAX_LINE_LENGTH
from common.protocol_definitions import encode_line, decode_line
from client.utils.logger import logger


class ChatClient:
    """Client-side chat connection."""
    
    def __init__(self, host: str, port: int):
        self.host = host
        self.port = port
        self.reader: Optional[asyncio.StreamReader] = None
        self.writer: Optional[asyncio.StreamWriter] = None
        self._write_lock = asyncio.Lock()
    
    @property
    def connected(self) -> bool:
        return self.writer is not None and not self.writer.is_closing()
    
    async def connect(self, retry_count: int = CONNECT_ATTEMPTS, base_delay: float = CONNECT_DELAY_BASE) -> bool:
        """Establish connection to the server with retry logic and exponential backoff."""
        attempt = 0
        
        while attempt < retry_count:
            try:
                self.reader, self.writer = await asyncio.open_connection(
                    self.host, self.port, limit=MAX_LINE_LENGTH
                )
                logger.log_connection(self.host, self.port, True)
                return True
            except OSError as e:
                attempt += 1
                logger.log_connection(self.host, self.port, False)
                logger.log_error("connection", e)
                
                if attempt < retry_count:
                    delay = base_delay * (2 ** (attempt - 1))  # Exponential backoff
                    logger.info(f"Retrying connection in {delay}s (attempt {attempt}/{retry_count})...")
                    await asyncio.sleep(delay)
        
        logger.error(f"Failed to connect after {retry_count} attempts")
        return False
    
    async def send_line(self, text: str) -> bool:
        """Send one line to the server."""
        if not self.connected:
            logger.error("Not connected to server")
            return False
        
        async with self._write_lock:
            try:
                self.writer.write(encode_line(text))
                await self.writer.drain()
            except (ConnectionError, OSError) as e:
                logger.log_error("send", e)
                return False
        logger.log_line_sent(text)
        return True
    
    async def lines(self) -> AsyncIterator[str]:
        """Yield every line received from the server until it disconnects."""
        while self.reader is not None:
            try:
                data = await self.reader.readline()
            except (asyncio.LimitOverrunError, ValueError) as e:
                logger.log_error("receive", e)
                return
            except (ConnectionError, OSError) as e:
                logger.error(f"Cannot read from connection: {e}")
                return
            if not data:
                logger.info("Server closed connection")
                return
            line = decode_line(data)
            logger.log_line_received(line)
            yield line
    
    async def finish_sending(self):
        """Half-close: tell the server no more lines follow, keep reading."""
        if not self.connected or not self.writer.can_write_eof():
            return
        try:
            self.writer.write_eof()
        except (ConnectionError, OSError) as e:
            logger.debug(f"Half-close failed: {e}")
    
    async def close(self):
        """Close the connection to the server."""
        if self.writer is None:
            return
        writer, self.writer = self.writer, None
        writer.close()
        try:
            await writer.wait_closed()
        except (ConnectionError, OSError) as e:
            logger.debug(f"Connection closed with error: {e}")
