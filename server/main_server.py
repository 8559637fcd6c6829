#!/usr/bin/env python3
"""
Line Chat Server - Main Entry Point

This is the main entry point for the server application.
It owns the credential store and the connection registry and runs one
handler task per accepted connection.
"""

import argparse
import asyncio
import itertools
import logging
import sys
import os
from typing import Optional

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from common.constants import DEFAULT_LISTEN, DEFAULT_DB_PATH, WRITE_TIMEOUT
from server.chat.connection import ChatConnection
from server.chat.dispatcher import CommandDispatcher
from server.chat.registry import ConnectionRegistry
from server.store.credential_store import CredentialStore, StoreError
from server.utils.config import ServerConfig
from server.utils.logger import logger


class ChatServer:
    """Main server class tying the store, registry and dispatcher together."""
    
    def __init__(self, config: ServerConfig):
        self.config = config
        self.registry = ConnectionRegistry()
        self.store: Optional[CredentialStore] = None
        self.dispatcher: Optional[CommandDispatcher] = None
        self._server: Optional[asyncio.AbstractServer] = None
        self._stopping: Optional[asyncio.Event] = None
        self._cids = itertools.count(1)
    
    @property
    def port(self) -> int:
        """Port actually bound (useful when listening on port 0)."""
        return self._server.sockets[0].getsockname()[1]
    
    def get_next_cid(self) -> int:
        """Get the next connection id."""
        return next(self._cids)
    
    async def handle_client(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter):
        """Handle individual client connection."""
        conn = ChatConnection(self.get_next_cid(), reader, writer, self.registry,
                              write_timeout=self.config.write_timeout)
        self.registry.add(conn)
        logger.log_connection(conn.addr, conn.cid)
        
        try:
            while True:
                line = await conn.read_line()
                if line is None:
                    break
                if not await self.dispatcher.dispatch(conn, line):
                    break
        except asyncio.CancelledError:
            logger.info(f"Connection cancelled for cid={conn.cid}")
            raise
        except Exception as e:
            logger.log_error(f"handler for cid={conn.cid}", e)
        finally:
            await conn.close()
    
    async def start(self):
        """Open the store and start listening; returns once bound."""
        self.store = CredentialStore(self.config.db_path)
        self.dispatcher = CommandDispatcher(self.store, self.registry, self.config)
        try:
            self._server = await asyncio.start_server(
                self.handle_client,
                self.config.host,
                self.config.port,
                limit=self.config.max_line_length
            )
        except OSError:
            self.store.close()
            raise
        
        self._stopping = asyncio.Event()
        addr = ', '.join(str(sock.getsockname()) for sock in self._server.sockets)
        logger.info(f"Server listening on {addr}")
    
    async def serve_forever(self):
        """Serve until cancelled or stopped."""
        await self._stopping.wait()
    
    async def stop(self):
        """Close every connection, stop listening and close the store."""
        if self._stopping is not None:
            self._stopping.set()
        if self._server is not None:
            self._server.close()
        await self.registry.close_all()
        if self._server is not None:
            await self._server.wait_closed()
            self._server = None
        if self.store is not None:
            self.store.close()
        logger.info("Server stopped")
    
    async def run(self):
        """Start, serve and always shut down cleanly."""
        await self.start()
        try:
            await self.serve_forever()
        finally:
            await self.stop()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Line Chat Server')
    parser.add_argument('--listen', type=str, default=DEFAULT_LISTEN,
                       help=f'Address to listen on (default: {DEFAULT_LISTEN})')
    parser.add_argument('--db', type=str, default=DEFAULT_DB_PATH,
                       help=f'Credential database file (default: {DEFAULT_DB_PATH})')
    parser.add_argument('--logs-dir', type=str, default=None,
                       help='Directory for the chat log file (default: no file log)')
    parser.add_argument('--write-timeout', type=float, default=WRITE_TIMEOUT,
                       help=f'Seconds a client write may stall before it is dropped (default: {WRITE_TIMEOUT})')
    parser.add_argument('--legacy-login', action='store_true',
                       help='Use the password token as the session login after LOGIN')
    parser.add_argument('--verbose', action='store_true',
                       help='Log every line received and sent')
    return parser


def main(argv=None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    
    try:
        config = ServerConfig(
            listen=args.listen,
            db_path=args.db,
            logs_dir=args.logs_dir,
            log_level=logging.DEBUG if args.verbose else logging.INFO,
            write_timeout=args.write_timeout if args.write_timeout > 0 else None,
            legacy_login_name=args.legacy_login
        )
    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        return 2
    logger.configure(config.logs_dir, config.log_level)
    
    server = ChatServer(config)
    try:
        asyncio.run(server.run())
    except KeyboardInterrupt:
        logger.info("Server shutting down...")
    except (StoreError, OSError) as e:
        logger.error(f"Server failed to start: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
