#!/usr/bin/env python3
"""Run pixiedust from a source checkout without installing it."""

import os
import sys

HERE = os.path.dirname(os.path.abspath(__file__))
SRC = os.path.join(HERE, "src")
if SRC not in sys.path:
    sys.path.insert(0, SRC)

from pixiedust.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
