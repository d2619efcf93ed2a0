"""Per-resolution trace of human-readable steps."""

from __future__ import annotations

import threading
from typing import List, Optional


class TraceLog:
    """Append-only, lock-protected ordered list of trace lines."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._lines: List[str] = []
        self._closed = False

    def append(self, line: Optional[str]) -> None:
        """Add ``line`` unless it is blank or the trace has been closed."""
        if line is None or not line.strip():
            return
        with self._lock:
            if self._closed:
                return
            self._lines.append(line)

    def close(self) -> None:
        """Stop accepting lines; already recorded lines are kept."""
        with self._lock:
            self._closed = True

    def lines(self) -> List[str]:
        with self._lock:
            return list(self._lines)

    def render(self) -> str:
        return "\n".join(self.lines())


__all__ = ["TraceLog"]
