#!/usr/bin/env python3
"""tailer — Entry Point."""

import sys

from tailer.cli import main

if __name__ == "__main__":
    sys.exit(main())
