"""
Structured, thread-safe logging for the optimisation pipeline.

Every line carries a UTC timestamp, a level, a dotted event name and
key-value fields, e.g.::

    2025-01-01 12:00:00 | [INFO] | job.complete | file="public_dev/a.png" | worker="w2"

Lines are written through ``tqdm.write`` so they do not tear the backfill
progress bar. Worker ids are handed out lazily, one per pool thread, in the
order threads first log.
"""
import itertools
import threading
from datetime import datetime, timezone
from enum import Enum
from pathlib import PurePath
from typing import Any, Mapping

from tqdm import tqdm

SEPARATOR = " | "

_output_lock = threading.Lock()
_thread_state = threading.local()
_worker_numbers = itertools.count(1)
_numbers_lock = threading.Lock()


class LogLevel(Enum):
    TRACE = 0
    DEBUG = 1
    INFO = 2
    WARN = 3
    ERROR = 4


_threshold = LogLevel.INFO


def set_log_level(level: LogLevel) -> None:
    global _threshold
    _threshold = level


def get_log_level() -> LogLevel:
    return _threshold


def _render_value(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, PurePath):
        value = str(value)
    if isinstance(value, str):
        # one record per line
        value = value.replace("\r", "\\r").replace("\n", "\\n").replace('"', '\\"')
        return f'"{value}"'
    return str(value)


def _format_kv(fields: Mapping[str, Any]) -> str:
    """Render ``key=value`` pairs in insertion order."""
    return SEPARATOR.join(f"{key}={_render_value(value)}" for key, value in fields.items())


def get_worker_id() -> str:
    """Short id for the calling thread: ``main`` or ``w1``, ``w2``, ..."""
    if threading.current_thread() is threading.main_thread():
        return "main"
    worker_id = getattr(_thread_state, "worker_id", None)
    if worker_id is None:
        with _numbers_lock:
            worker_id = f"w{next(_worker_numbers)}"
        _thread_state.worker_id = worker_id
    return worker_id


def log(event: str, level: LogLevel = LogLevel.INFO, **fields) -> None:
    """
    Emit one structured line.

    Args:
        event: Dotted event name, e.g. ``job.complete`` or ``watch.deleted``.
        level: Lines below the current threshold are dropped.
        **fields: Key-value pairs appended after the event name. A
            ``worker`` field is added unless one is given.
    """
    if level.value < _threshold.value:
        return
    fields.setdefault("worker", get_worker_id())

    stamp = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")
    line = SEPARATOR.join((stamp, f"[{level.name}]", event, _format_kv(fields)))
    with _output_lock:
        tqdm.write(line)


def safe_print(*args, **kwargs) -> None:
    """Serialised ``print`` for human-readable banners; use ``log`` for anything greppable."""
    with _output_lock:
        print(*args, **kwargs, flush=True)
