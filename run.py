#!/usr/bin/env python3
"""
Startup script; see ``spotmap.cli`` for the available commands.
"""

import sys

from spotmap.cli import main


if __name__ == "__main__":
    sys.exit(main())
