"""
Main entry point for the golf betting engine.
"""

import sys
from golfbets.cli import main

if __name__ == "__main__":
    sys.exit(main())
