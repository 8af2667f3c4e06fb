#!/usr/bin/env python3
"""
Runner script for image rename split.
This makes it easy to run the tool with uv: uv run python run.py <args>
"""

import sys
from image_rename_split.cli import main

if __name__ == "__main__":
    sys.exit(main())
