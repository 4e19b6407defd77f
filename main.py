#!/usr/bin/env python3
"""FocusClock — entry point.

Run with:
    python main.py
    python -m focusclock
"""

from focusclock.__main__ import main


if __name__ == "__main__":
    main()
