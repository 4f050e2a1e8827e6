#!/usr/bin/env python3
"""
Main entry point for the duplex IRC client
"""

import sys

from ircduplex.main import run

if __name__ == "__main__":
    sys.exit(run())
