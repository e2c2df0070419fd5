"""
Main entry point for running the package as a module.

Usage:
    python -m imgpipe run --project-root .
    python -m imgpipe report
"""

import sys
from .cli import main

if __name__ == '__main__':
    sys.exit(main())
