"""
Client package for the line chat service.

This package contains all client-side functionality including:
- The line-based chat connection
- Terminal and PyQt6 front-ends
- Configuration and utilities
"""
