"""
Chat module for client-side messaging functionality.

Handles:
- Connecting to the server
- Sending typed lines
- Streaming received lines to a front-end
"""
