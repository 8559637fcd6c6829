"""
Server configuration module.

This module handles server-side configuration settings.
"""

import logging
from typing import Optional

from common.constants import (
    DEFAULT_LISTEN, DEFAULT_DB_PATH, ADMIN_LOGIN, MAX_LINE_LENGTH, WRITE_TIMEOUT
)
from common.protocol_definitions import split_address


class ServerConfig:
    """Server configuration class."""
    
    def __init__(self, listen: str = DEFAULT_LISTEN, db_path: str = DEFAULT_DB_PATH,
                 logs_dir: Optional[str] = None, log_level: int = logging.INFO,
                 write_timeout: Optional[float] = WRITE_TIMEOUT, legacy_login_name: bool = False):
        self.listen = listen
        self.host, self.port = split_address(listen)
        self.db_path = db_path
        
        # Logging configuration
        self.logs_dir = logs_dir
        self.log_level = log_level
        
        # Connection settings
        self.max_line_length = MAX_LINE_LENGTH
        self.write_timeout = write_timeout  # None disables the timeout
        
        # Accounts
        self.admin_login = ADMIN_LOGIN
        # LOGIN historically stored the password token as the session login
        self.legacy_login_name = legacy_login_name
