"""
Server logging module.

This module handles server-side logging functionality.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from common.constants import CHAT_LOG_FILE


class ServerLogger:
    """Server logging class."""
    
    def __init__(self, logs_dir: Optional[str] = None, log_level: int = logging.INFO):
        self.logger = logging.getLogger('chat_server')
        self.chat_log_path: Optional[Path] = None
        self.configure(logs_dir, log_level)
    
    def configure(self, logs_dir: Optional[str] = None, log_level: int = logging.INFO):
        """(Re)build handlers; chat lines go to a file only when logs_dir is given."""
        self.logger.setLevel(log_level)
        
        # Remove existing handlers
        for handler in self.logger.handlers[:]:
            self.logger.removeHandler(handler)
        
        # Create console handler
        console_handler = logging.StreamHandler()
        console_handler.setLevel(log_level)
        
        # Create formatter
        formatter = logging.Formatter(
            '%(asctime)s [%(levelname)s] %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        console_handler.setFormatter(formatter)
        self.logger.addHandler(console_handler)
        
        if logs_dir:
            logs_path = Path(logs_dir)
            logs_path.mkdir(parents=True, exist_ok=True)
            self.chat_log_path = logs_path / CHAT_LOG_FILE
        else:
            self.chat_log_path = None
    
    def info(self, message: str):
        """Log info message."""
        self.logger.info(message)
    
    def error(self, message: str):
        """Log error message."""
        self.logger.error(message)
    
    def warning(self, message: str):
        """Log warning message."""
        self.logger.warning(message)
    
    def debug(self, message: str):
        """Log debug message."""
        self.logger.debug(message)
    
    def log_connection(self, addr, cid: int):
        """Log client connection."""
        self.info(f"New connection from {addr}, assigned cid={cid}")
    
    def log_disconnect(self, addr, cid: int, login: str):
        """Log client disconnect."""
        who = f"'{login}'" if login else "anonymous"
        self.info(f"Connection cid={cid} from {addr} ({who}) closed")
    
    def log_receive(self, cid: int, line: str):
        self.debug(f"Receiving (cid={cid}): {line}")
    
    def log_send(self, cid: int, line: str):
        self.debug(f"Sending (cid={cid}): {line}")
    
    def log_login(self, username: str, cid: int):
        """Log user login."""
        self.info(f"User '{username}' logged in on cid={cid}")
    
    def log_register(self, username: str, cid: int):
        """Log user registration."""
        self.info(f"User '{username}' registered on cid={cid}")
    
    def log_chat(self, login: str, cid: int, message: str, recipients: int):
        """Log chat message."""
        self.info(f"Chat from {login} (cid={cid}) to {recipients} connection(s): {message}")
        if self.chat_log_path is not None:
            self._write_to_file(self.chat_log_path, f"{datetime.now().isoformat()} | {login} | {message}")
    
    def log_error(self, operation: str, error: Exception):
        """Log error with operation context."""
        self.error(f"Error in {operation}: {error}")
    
    def _write_to_file(self, file_path: Path, content: str):
        """Write content to log file."""
        try:
            with open(file_path, 'a', encoding='utf-8') as f:
                f.write(content + '\n')
        except OSError as e:
            self.error(f"Failed to write to log file {file_path}: {e}")


# Global logger instance
logger = ServerLogger()
