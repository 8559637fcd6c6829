#!/usr/bin/env python3
"""
Line Chat Client - Main Entry Point

Usage:
    python main_client.py [--server ADDR] [--gui]

Modes:
    (default)    Terminal client: received lines on stdout, typed lines sent
    --gui        PyQt6 chat window (Esc closes it)
"""

import sys
import os
import argparse
import logging

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from common.constants import DEFAULT_SERVER_ADDRESS
from common.protocol_definitions import split_address


def main(argv=None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(description='Line Chat Client')
    parser.add_argument('--server', type=str, default=DEFAULT_SERVER_ADDRESS,
                       help=f'Server address (default: {DEFAULT_SERVER_ADDRESS})')
    parser.add_argument('--gui', action='store_true',
                       help='Run the PyQt6 chat window instead of the terminal client')
    parser.add_argument('--verbose', action='store_true',
                       help='Log every line sent and received')
    
    args = parser.parse_args(argv)
    try:
        split_address(args.server)
    except ValueError as e:
        parser.error(str(e))
    
    from client.utils.logger import logger
    logger.configure(logging.DEBUG if args.verbose else logging.INFO)
    
    if args.gui:
        from client.ui.client_gui import run_gui_client
        return run_gui_client(args.server)
    
    from client.main_client import run_terminal_client
    return run_terminal_client(args.server)


if __name__ == "__main__":
    sys.exit(main())
