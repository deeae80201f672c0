"""
Module execution entry point.

Allows running with: python -m por_cli
"""

import sys
from por_cli.main import main

if __name__ == "__main__":
    sys.exit(main())
