"""
Module execution entry point.

Allows running with: python -m vmt_cli
"""

import sys
from vmt_cli.main import main

if __name__ == "__main__":
    sys.exit(main())
