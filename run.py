#!/usr/bin/env python3
"""
run.py - Main entry point for connect-N

Usage:
    python run.py play [--rows 6 --cols 7 --connect 4 --pieces P,C --first C]
    python run.py autoplay PCAABBC [--player P]
    python run.py benchmark [--iterations 1000]
"""

import os
import sys

# Add the project root to Python path to ensure imports work
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from connectn.interfaces.cli import main  # noqa: E402

if __name__ == "__main__":
    sys.exit(main())
