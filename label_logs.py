#!/usr/bin/env python3
"""
label_logs.py — Label guard log entries for catalog evaluation.

Usage:
    python label_logs.py
    python label_logs.py --input logs/honestra_log.jsonl --output logs/honestra_labeled.jsonl
"""

from __future__ import annotations

import sys

from honestra.labeling import main

if __name__ == "__main__":
    sys.exit(main())
