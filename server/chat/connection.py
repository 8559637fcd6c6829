"""
Chat connection module.

This module wraps a single client socket: line reads, serialized
CRLF-terminated writes and idempotent close.
"""

import asyncio
from typing import Optional

from common.protocol_definitions import encode_line, decode_line
from server.utils.logger import logger


class ChatConnection:
    """One connected client."""
    
    def __init__(self, cid: int, reader: asyncio.StreamReader, writer: asyncio.StreamWriter,
                 registry, write_timeout: Optional[float] = None):
        self.cid = cid
        self.reader = reader
        self.writer = writer
        self.registry = registry
        self.write_timeout = write_timeout
        self.addr = writer.get_extra_info('peername')
        self.login = ''
        self._write_lock = asyncio.Lock()
        self._closed = False
    
    @property
    def closed(self) -> bool:
        return self._closed
    
    async def read_line(self) -> Optional[str]:
        """Read one line; returns None on EOF or read failure."""
        if self._closed:
            return None
        try:
            data = await self.reader.readline()
        except (asyncio.LimitOverrunError, ValueError) as e:
            logger.warning(f"Line too long from cid={self.cid}: {e}")
            return None
        except (ConnectionError, OSError) as e:
            logger.warning(f"Read error on cid={self.cid}: {e}")
            return None
        if not data:
            return None
        line = decode_line(data)
        logger.log_receive(self.cid, line)
        return line
    
    async def write_line(self, text: str) -> bool:
        """
        Send text followed by CRLF.

        Writes from the owning handler and from broadcasts are serialized
        per connection. A failed or stalled write closes the connection.
        """
        if self._closed:
            return False
        async with self._write_lock:
            if self._closed:
                return False
            try:
                self.writer.write(encode_line(text))
                if self.write_timeout is None:
                    await self.writer.drain()
                else:
                    await asyncio.wait_for(self.writer.drain(), self.write_timeout)
            except asyncio.TimeoutError:
                logger.warning(f"Write to cid={self.cid} stalled for {self.write_timeout}s, dropping connection")
            except (ConnectionError, OSError) as e:
                logger.warning(f"Write to cid={self.cid} failed: {e}")
            else:
                logger.log_send(self.cid, text)
                return True
        await self.close()
        return False
    
    async def close(self):
        """Close the socket and leave the registry; safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        self.registry.remove(self)
        self.writer.close()
        try:
            await self.writer.wait_closed()
        except (ConnectionError, OSError) as e:
            logger.debug(f"Socket for cid={self.cid} closed with error: {e}")
        logger.log_disconnect(self.addr, self.cid, self.login)
    
    def __repr__(self):
        return f"ChatConnection(cid={self.cid}, addr={self.addr}, login={self.login!r})"
