"""
Client configuration module.

This module handles client-side configuration settings.
"""

from common.constants import DEFAULT_SERVER_ADDRESS, DEFAULT_HOST, CONNECT_ATTEMPTS, CONNECT_DELAY_BASE
from common.protocol_definitions import split_address


class ClientConfig:
    """Client configuration class."""
    
    def __init__(self, server: str = DEFAULT_SERVER_ADDRESS, connect_attempts: int = CONNECT_ATTEMPTS,
                 connect_delay: float = CONNECT_DELAY_BASE):
        self.server = server
        self.host, self.port = split_address(server, default_host=DEFAULT_HOST)
        
        # Connection settings
        self.connect_attempts = connect_attempts
        self.connect_delay = connect_delay
    
