from __future__ import annotations

import logging
import sys
from pathlib import Path

_DEPVENDOR_HANDLER: logging.Handler | None = None
_CONFIGURED_TARGET: str | None = None
_JSON_MODE_NULL_HANDLER: logging.Handler | None = None

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _level_from_name(name: str) -> int:
    level = getattr(logging, str(name).upper(), None)
    return level if isinstance(level, int) else logging.INFO


def configure_logging(*, level: str = "WARNING", log_path: Path | None = None) -> None:
    """Install the depvendor log handler on the root logger.

    Logs go to ``log_path`` when given, otherwise to stderr. Idempotent
    per-process: calling again with the same target only updates the level.
    """
    global _DEPVENDOR_HANDLER, _CONFIGURED_TARGET

    target = str(Path(log_path).resolve()) if log_path is not None else "<stderr>"
    root = logging.getLogger()
    root.setLevel(_level_from_name(level))

    if _CONFIGURED_TARGET == target and _DEPVENDOR_HANDLER is not None:
        _DEPVENDOR_HANDLER.setLevel(_level_from_name(level))
        return

    # Replace the handler we installed earlier when switching targets.
    if _DEPVENDOR_HANDLER is not None:
        root.removeHandler(_DEPVENDOR_HANDLER)
        _DEPVENDOR_HANDLER.close()
        _DEPVENDOR_HANDLER = None

    handler: logging.Handler
    if log_path is not None:
        Path(target).parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(target, encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(_level_from_name(level))
    handler.setFormatter(logging.Formatter(_FORMAT))
    root.addHandler(handler)

    _DEPVENDOR_HANDLER = handler
    _CONFIGURED_TARGET = target


def reset_logging_for_tests() -> None:
    """Test-only: remove the handler installed by configure_logging."""
    global _DEPVENDOR_HANDLER, _CONFIGURED_TARGET, _JSON_MODE_NULL_HANDLER
    root = logging.getLogger()
    for handler in (_DEPVENDOR_HANDLER, _JSON_MODE_NULL_HANDLER):
        if handler is not None:
            root.removeHandler(handler)
            handler.close()
    _DEPVENDOR_HANDLER = None
    _CONFIGURED_TARGET = None
    root.setLevel(logging.WARNING)
    _JSON_MODE_NULL_HANDLER = None


def suppress_lastresort_in_json_mode() -> None:
    """Prevent stdlib logging's lastResort handler from polluting JSON output.

    Python's logging module emits WARNING+ records to stderr through the
    implicit ``lastResort`` handler when no handlers are configured. Installing
    a NullHandler on an otherwise handler-less root logger keeps ``--json``
    runs machine-readable without disabling logging levels.
    """
    global _JSON_MODE_NULL_HANDLER

    root = logging.getLogger()
    if root.handlers or _JSON_MODE_NULL_HANDLER is not None:
        return
    _JSON_MODE_NULL_HANDLER = logging.NullHandler()
    root.addHandler(_JSON_MODE_NULL_HANDLER)


__all__ = [
    "configure_logging",
    "reset_logging_for_tests",
    "suppress_lastresort_in_json_mode",
]
