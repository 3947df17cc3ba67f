#!/usr/bin/env python3
"""
Convenient entry point for the Curiosity CLI.

Usage:
    python run_cli.py [--base-url URL] [--model NAME] [--debug]
"""
import sys
from pathlib import Path

# Add project root to Python path
root_dir = Path(__file__).parent
sys.path.insert(0, str(root_dir))

from curiosity.clients.cli.main import main

if __name__ == "__main__":
    main()
