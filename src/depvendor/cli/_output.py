"""Text and JSON rendering for depvendor commands.

Results go to stdout and errors to stderr in both modes, so ``--json`` output
can be piped straight into a JSON parser.
"""
from __future__ import annotations

import json
import sys
from typing import Any


class OutputFormatter:
    """Renders command results as plain text or as JSON documents."""

    def __init__(self, json_mode: bool = False, indent: int = 2):
        self.json_mode = json_mode
        self.indent = indent

    def _dump(self, data: Any) -> str:
        return json.dumps(data, indent=self.indent, default=str)

    def error(
        self,
        error: Exception | str,
        message: str | None = None,
        *,
        error_code: str = "error",
    ) -> None:
        """Report a failure on stderr.

        In JSON mode a ``{"error": ..., "message": ...}`` document is written;
        exceptions that carry a context (DepVendorError) add it as ``context``.
        """
        msg = message or str(error)
        if not self.json_mode:
            print(f"Error: {msg}", file=sys.stderr)
            return

        payload: dict[str, Any] = {"error": error_code, "message": msg}
        context = getattr(error, "context", None)
        if context:
            payload["context"] = context
        print(self._dump(payload), file=sys.stderr)

    def json_output(self, data: Any) -> None:
        print(self._dump(data))

    def text(self, message: str) -> None:
        print(message)

    def text_kv(self, key: str, value: Any, prefix: str = "  ") -> None:
        """Print ``key: value`` on one indented line; silent in JSON mode."""
        if not self.json_mode:
            print(f"{prefix}{key}: {value}")


__all__ = [
    "OutputFormatter",
]
