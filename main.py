#!/usr/bin/env python3
"""
Entry point for the Flickr folder sync tool.
"""

import sys

from flickrsync.cli import main


if __name__ == "__main__":
    sys.exit(main())
