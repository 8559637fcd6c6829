#!/usr/bin/env python3
"""
Line Chat Client - Terminal Front-End

Prints every line received from the server and sends every line typed on
stdin.
"""

import asyncio
import sys
import os
import threading
from typing import Optional, TextIO

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from client.chat.chat_client import ChatClient
from client.utils.config import ClientConfig
from client.utils.logger import logger


class TerminalChat:
    """Terminal chat session bridging stdin/stdout and a ChatClient."""
    
    def __init__(self, config: ClientConfig, stdin: TextIO = None, stdout: TextIO = None):
        self.config = config
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout
        self.client = ChatClient(config.host, config.port)
        self._input: Optional[asyncio.Queue] = None
        self.linger = 2.0  # seconds to wait for replies after input ends
    
    def _read_input(self, loop: asyncio.AbstractEventLoop):
        """Feed stdin lines into the input queue; None marks EOF."""
        for line in self.stdin:
            loop.call_soon_threadsafe(self._input.put_nowait, line.rstrip('\r\n'))
        loop.call_soon_threadsafe(self._input.put_nowait, None)
    
    async def show_history(self):
        """Print received lines as they arrive."""
        async for line in self.client.lines():
            print(line, file=self.stdout, flush=True)
    
    async def send_input(self):
        """Send typed lines until stdin is exhausted."""
        while True:
            line = await self._input.get()
            if line is None:
                return
            if not await self.client.send_line(line):
                return
    
    async def run(self) -> bool:
        """Run until the server disconnects or input ends."""
        if not await self.client.connect(self.config.connect_attempts, self.config.connect_delay):
            return False
        
        loop = asyncio.get_running_loop()
        self._input = asyncio.Queue()
        # Daemon thread so a pending blocking read never holds up exit
        threading.Thread(target=self._read_input, args=(loop,), daemon=True).start()
        logger.show_interactive_mode_info()
        
        history_task = asyncio.create_task(self.show_history())
        input_task = asyncio.create_task(self.send_input())
        try:
            done, _ = await asyncio.wait({history_task, input_task}, return_when=asyncio.FIRST_COMPLETED)
            if input_task in done:
                # Input ended first: show the replies still in flight
                await self.client.finish_sending()
                try:
                    await asyncio.wait_for(history_task, timeout=self.linger)
                except asyncio.TimeoutError:
                    pass
        finally:
            input_task.cancel()
            history_task.cancel()
            await self.client.close()
            logger.info("Disconnected from server")
        return True


def run_terminal_client(server: str) -> int:
    """Run the terminal client against the given server address."""
    config = ClientConfig(server)
    chat = TerminalChat(config)
    try:
        connected = asyncio.run(chat.run())
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 0
    return 0 if connected else 1
