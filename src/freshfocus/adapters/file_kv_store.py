"""Local filesystem key-value store."""

import os
import re
import tempfile
from dataclasses import dataclass
from pathlib import Path

from freshfocus.services.inventory import KeyValueStore

_UNSAFE_KEY_CHARS = re.compile(r"[^A-Za-z0-9_.-]")


@dataclass
class FileKeyValueStore(KeyValueStore):
    """Stores each key as a JSON file under a data directory."""

    data_dir: Path

    def get(self, key: str) -> str | None:
        """Return the file contents for key, if the file exists."""
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set(self, key: str, value: str) -> None:
        """Write value atomically so readers never see a partial blob."""
        self.data_dir.mkdir(parents=True, exist_ok=True)
        path = self._path(key)
        fd, tmp = tempfile.mkstemp(prefix=".tmp-", dir=self.data_dir)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(value)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp, path)
        except BaseException:
            Path(tmp).unlink(missing_ok=True)
            raise

    def _path(self, key: str) -> Path:
        return self.data_dir / f"{_UNSAFE_KEY_CHARS.sub('_', key)}.json"
