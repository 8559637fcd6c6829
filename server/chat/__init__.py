"""
Chat module for server-side messaging functionality.

Handles:
- Per-client connections
- The live connection registry
- Command dispatch and chat broadcasting
"""
