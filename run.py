#!/usr/bin/env python3
"""
Run Media Sniffer Server

Usage:
    python run.py
"""

import sys
import os

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), 'src'))

from media_sniffer.server import main

if __name__ == '__main__':
    main()
