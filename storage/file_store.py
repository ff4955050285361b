"""
File-based Durable Store

One JSON file per key inside a directory.
Human-readable, easy to inspect, no external dependencies.

DESIGN RULES:
- Whole-file replace (write temp, then rename)
- A missing file means an empty slot
"""

import logging
import os
import re
import tempfile
from pathlib import Path
from typing import Optional

from storage.store import DurableStore


logger = logging.getLogger(__name__)

_UNSAFE_KEY_CHARS = re.compile(r"[^A-Za-z0-9._-]")


class FileDurableStore(DurableStore):
    """
    Directory-backed durable store.

    Each key maps to <directory>/<key>.json. Writes go through a temporary
    file in the same directory so a crash never leaves a half-written slot.
    """

    DEFAULT_DIR = ".personalization"

    def __init__(self, directory: str | None = None):
        """
        Initialize file store.

        Args:
            directory: Storage directory. Defaults to '.personalization' in cwd.
        """
        self._directory = Path(directory or self.DEFAULT_DIR)

        # Ensure directory exists
        self._directory.mkdir(parents=True, exist_ok=True)

    @property
    def directory(self) -> Path:
        return self._directory

    def path_for(self, key: str) -> Path:
        """File path backing a key."""
        safe_key = _UNSAFE_KEY_CHARS.sub("_", key) or "_"
        return self._directory / f"{safe_key}.json"

    def get(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set(self, key: str, value: str) -> None:
        path = self.path_for(key)
        fd, tmp_name = tempfile.mkstemp(dir=self._directory, prefix=f".{path.stem}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(value)
            os.replace(tmp_name, path)
        except BaseException:
            # Leave no stray temp files behind, then let the caller decide
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise
        logger.debug(f"Wrote {len(value)} bytes to {path}")
