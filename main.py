#!/usr/bin/env python3
"""
Inertia Scanner launcher.

Usage:
    python main.py
    python main.py --config config/config.yaml --debug
"""

from inertia_scanner.main import main


if __name__ == "__main__":
    main()
