#!/usr/bin/env python3
"""
Line Chat Server - Main Entry Point

Usage:
    python main_server.py

Optional arguments:
    --listen ADDR         Address to listen on (default: :8080)
    --db FILE             Credential database file (default: chat.db)
    --logs-dir DIR        Directory for the chat log file
    --write-timeout SECS  Drop clients whose writes stall this long (default: 10)
    --legacy-login        Use the password token as the login after LOGIN
    --verbose             Log every line received and sent
"""

import sys

from server.main_server import main


if __name__ == "__main__":
    sys.exit(main())
