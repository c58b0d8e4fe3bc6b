#!/usr/bin/env python3
"""Meeetimer — entry point.

Run with:
    python main.py --minutes 20 --alert 600 --alert 300 --alert 60
    python -m meeetimer --preset 15
"""

from meeetimer.__main__ import app


if __name__ == "__main__":
    app()
