"""JSON-file key/value store for terminal-local state."""

from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


class LocalStateStore:
    """Keeps JSON blobs under well-known keys in a single file.

    The whole file is loaded once and rewritten after every mutation. A file
    that cannot be parsed is logged and treated as empty.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._lock = threading.RLock()
        self._data: dict[str, Any] = {}

    def load(self) -> None:
        with self._lock:
            self._data = self._read_file()

    def _read_file(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            logger.exception("[STATE] Could not parse %s; starting with empty state.", self.path)
            return {}
        if not isinstance(payload, dict):
            logger.error("[STATE] Unexpected root type in %s; starting with empty state.", self.path)
            return {}
        return payload

    def save(self) -> None:
        with self._lock:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
            tmp_path.write_text(json.dumps(self._data, ensure_ascii=False, indent=2), encoding="utf-8")
            tmp_path.replace(self.path)

    def get(self, key: str, default: Any = None) -> Any:
        with self._lock:
            return self._data.get(key, default)

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            self._data[key] = value
            self.save()

    def delete(self, key: str) -> None:
        with self._lock:
            if self._data.pop(key, None) is not None:
                self.save()
