"""
Shared constants for the line chat service.

This module contains all constants used across client and server components.
"""

# Network Configuration
DEFAULT_LISTEN = ':8080'
DEFAULT_SERVER_ADDRESS = ':8080'
DEFAULT_HOST = 'localhost'

# Wire format
LINE_TERMINATOR = '\r\n'
ENCODING = 'utf-8'
MAX_LINE_LENGTH = 64 * 1024  # StreamReader limit per line

# Timeouts
WRITE_TIMEOUT = 10.0  # seconds a single write may stall before the peer is dropped

# Credential storage
DEFAULT_DB_PATH = 'chat.db'
USERS_TABLE = 'users'

# Accounts
ADMIN_LOGIN = 'admin'

# Client connection retries
CONNECT_ATTEMPTS = 3
CONNECT_DELAY_BASE = 0.5  # seconds, doubled on every retry

# Logging
CHAT_LOG_FILE = 'chat_history.log'


# Command keywords
class Commands:
    QUIT = 'QUIT'
    LOGOUT = 'LOGOUT'
    LISTALL = 'LISTALL'
    LISTONLINE = 'LISTONLINE'
    LOGIN = 'LOGIN'
    REGISTER = 'REGISTER'


# Server replies
class Replies:
    BYE = 'Bye'
    LOGGED_OUT = 'Logged out'
    NOT_ADMIN = 'You are not admin'
    ALL_USERS = 'All users: {}'
    CREDENTIALS_REQUIRED = 'Login and password is required'
    NO_SUCH_ACCOUNT = 'No such account'
    WRONG_PASSWORD = 'Wrong password'
    LOGGED_IN = 'Logged in'
    USER_EXISTS = 'User already exists'
    REGISTERED = 'Registered'
    NEED_LOGIN = 'Need to login'
    INTERNAL_ERROR = 'Internal error'
