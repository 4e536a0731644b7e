# ruff: noqa: INP001
"""Pytest configuration shared across backend tests."""

import os
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# Settings are read at import time; pin deterministic defaults regardless of shell env.
os.environ["STORAGE_BACKEND"] = "memory"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["CORS_ALLOW_ORIGIN"] = ""
os.environ["STATIC_DIR"] = str(ROOT / "tests" / "_missing_frontend")
os.environ["LOG_FORMAT"] = "text"
