"""
Command dispatcher module.

This module executes parsed client commands against the credential store
and the connection registry, replying to the originating connection or
broadcasting chat lines to everyone.
"""

import asyncio

from common.constants import Replies
from common.protocol_definitions import Command, CommandKind, parse_command, format_chat_line
from server.store.credential_store import CredentialStore, StoreError, UserExistsError
from server.chat.registry import ConnectionRegistry
from server.utils.config import ServerConfig
from server.utils.logger import logger


class CommandDispatcher:
    """Runs one client line at a time for a connection."""
    
    def __init__(self, store: CredentialStore, registry: ConnectionRegistry, config: ServerConfig):
        self.store = store
        self.registry = registry
        self.config = config
        self._handlers = {
            CommandKind.QUIT: self.handle_quit,
            CommandKind.LOGOUT: self.handle_logout,
            CommandKind.LISTALL: self.handle_list_all,
            CommandKind.LISTONLINE: self.handle_list_online,
            CommandKind.LOGIN: self.handle_login,
            CommandKind.REGISTER: self.handle_register,
            CommandKind.MESSAGE: self.handle_message,
        }
    
    async def dispatch(self, conn, line: str) -> bool:
        """Handle one line from conn. Returns False when the connection should end."""
        command = parse_command(line)
        handler = self._handlers[command.kind]
        try:
            return await handler(conn, command) is not False
        except StoreError as e:
            logger.log_error(f"{command.kind.value} for cid={conn.cid}", e)
            await conn.write_line(Replies.INTERNAL_ERROR)
            return True
    
    async def _run_store(self, fn, *args):
        """Run a blocking store call off the event loop."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, fn, *args)
    
    def _is_admin(self, conn) -> bool:
        return conn.login == self.config.admin_login
    
    async def handle_quit(self, conn, command: Command):
        await conn.write_line(Replies.BYE)
        await conn.close()
        return False
    
    async def handle_logout(self, conn, command: Command):
        conn.login = ''
        await conn.write_line(Replies.LOGGED_OUT)
    
    async def handle_list_all(self, conn, command: Command):
        if not self._is_admin(conn):
            await conn.write_line(Replies.NOT_ADMIN)
            return
        usernames = await self._run_store(self.store.list_usernames)
        await conn.write_line(Replies.ALL_USERS.format(' '.join(usernames)))
    
    async def handle_list_online(self, conn, command: Command):
        if not self._is_admin(conn):
            await conn.write_line(Replies.NOT_ADMIN)
            return
        logins = self.registry.snapshot_logins()
        await conn.write_line(Replies.ALL_USERS.format(' '.join(logins)))
    
    async def handle_login(self, conn, command: Command):
        if not command.has_credentials:
            await conn.write_line(Replies.CREDENTIALS_REQUIRED)
            return
        
        password = await self._run_store(self.store.lookup, command.username)
        if password is None:
            await conn.write_line(Replies.NO_SUCH_ACCOUNT)
            return
        if password != command.password:
            await conn.write_line(Replies.WRONG_PASSWORD)
            return
        
        conn.login = command.password if self.config.legacy_login_name else command.username
        # Logged by username even in legacy mode so passwords stay out of the log
        logger.log_login(command.username, conn.cid)
        await conn.write_line(Replies.LOGGED_IN)
    
    async def handle_register(self, conn, command: Command):
        if not command.has_credentials:
            await conn.write_line(Replies.CREDENTIALS_REQUIRED)
            return
        
        try:
            await self._run_store(self.store.create, command.username, command.password)
        except UserExistsError:
            await conn.write_line(Replies.USER_EXISTS)
            return
        
        conn.login = command.username
        logger.log_register(command.username, conn.cid)
        await conn.write_line(Replies.REGISTERED)
    
    async def handle_message(self, conn, command: Command):
        if not conn.login:
            await conn.write_line(Replies.NEED_LOGIN)
            return
        await self.broadcast(conn, command.text)
    
    async def broadcast(self, sender, message: str) -> int:
        """Send "<login>: <message>" to every connection, sender included."""
        chat_line = format_chat_line(sender.login, message)
        recipients = await self.registry.for_each(lambda conn: conn.write_line(chat_line))
        logger.log_chat(sender.login, sender.cid, message, recipients)
        return recipients
