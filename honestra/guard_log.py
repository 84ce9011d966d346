"""
Guard Log — JSONL record of guard calls

One line per guard call:
    {"timestamp": ..., "sessionId": ..., "userMessage": ..., "modelReply": ..., "honestra": {...}}

Written by the API when HONESTRA_GUARD_LOG is set; read back by the
labeling tool.
"""

from __future__ import annotations

import json
import logging
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterator, Optional, Union

logger = logging.getLogger(__name__)

DEFAULT_SESSION = "no-session"

_write_lock = threading.Lock()


def make_entry(
    model_reply: str,
    result: dict,
    session_id: Optional[str] = None,
    user_message: Optional[str] = None,
) -> dict:
    return {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "sessionId": session_id,
        "userMessage": user_message,
        "modelReply": model_reply,
        "honestra": result,
    }


def entry_key(entry: dict) -> str:
    """Stable identity of a log entry: timestamp + session id."""
    return f"{entry.get('timestamp', '')}::{entry.get('sessionId') or DEFAULT_SESSION}"


def append_entry(path: Union[str, Path], entry: dict) -> None:
    path = Path(path)
    line = json.dumps(entry, ensure_ascii=False)
    with _write_lock:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("a", encoding="utf-8") as fh:
            fh.write(line + "\n")


def read_entries(path: Union[str, Path]) -> Iterator[dict]:
    """Yield parsed entries. Malformed lines are logged and skipped."""
    path = Path(path)
    if not path.exists():
        return
    with path.open("r", encoding="utf-8") as fh:
        for lineno, line in enumerate(fh, start=1):
            line = line.strip()
            if not line:
                continue
            try:
                entry = json.loads(line)
            except json.JSONDecodeError as e:
                logger.warning("Skipping malformed line %d in %s: %s", lineno, path, e)
                continue
            if not isinstance(entry, dict):
                logger.warning("Skipping non-object line %d in %s", lineno, path)
                continue
            yield entry
