import json
import os
from pathlib import Path
import contextvars
from typing import Any, Dict, Optional

from .logging import get_logger

logger = get_logger("medlink.event_log")

# Path to the JSONL conversation log; logging is disabled while it is None.
_env_path = os.environ.get("EVENT_LOG_PATH", "").strip()
_LOG_PATH: Optional[Path] = Path(_env_path) if _env_path else None

_current_turn_id: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar(
    "current_turn_id", default=None
)


def set_log_path(path: "str | Path | None") -> None:
    """Override the log file path (useful for tests). ``None`` disables logging."""
    global _LOG_PATH
    _LOG_PATH = Path(path) if path else None


def get_log_path() -> Optional[Path]:
    """Return the current log file path."""
    return _LOG_PATH


def set_turn_id(turn_id: Optional[str]) -> None:
    """Set the active turn identifier (the provider message id) for subsequent events."""
    _current_turn_id.set(turn_id)


def log_event(event: str, data: Dict[str, Any], *, turn_id: Optional[str] = None) -> None:
    """Append an event to the log as a JSON line.

    Parameters
    ----------
    event:
        Type of the event (e.g., "inbound", "step_transition").
    data:
        Arbitrary JSON-serializable payload.
    turn_id:
        Optional explicit turn identifier. If omitted, the previously set
        turn id (via :func:`set_turn_id`) is used.
    """
    if _LOG_PATH is None:
        return
    tid = turn_id if turn_id is not None else _current_turn_id.get()
    record = {"turn_id": tid, "event": event, **data}
    try:
        _LOG_PATH.parent.mkdir(parents=True, exist_ok=True)
        with _LOG_PATH.open("a", encoding="utf-8") as f:
            json.dump(record, f, ensure_ascii=False, default=str)
            f.write("\n")
    except OSError as e:
        # Write failures are logged, never raised
        logger.warning("Could not write event %s to %s: %s", event, _LOG_PATH, e)
