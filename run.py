#!/usr/bin/env python3
"""Run PlaceNotes application."""

import sys
import os

# Add the project directory to the path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from placenotes.launcher import main

if __name__ == "__main__":
    sys.exit(main())
