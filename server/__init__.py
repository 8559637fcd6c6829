"""
Server package for the line chat service.

This package contains all server-side functionality including:
- Connection handling and broadcast
- Command dispatch
- Credential storage
- Configuration and utilities
"""
