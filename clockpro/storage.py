"""
Key/value persistence for preferences and the alarm
"""

import json
import logging
from pathlib import Path

from .config import CONFIG_FILE

logger = logging.getLogger(__name__)


class MemoryStore:
    """Store em memória (testes, ou quando não há disco)"""

    def __init__(self, data=None):
        self.data = dict(data or {})

    def get(self, key, default=None):
        return self.data.get(key, default)

    def set(self, key, value):
        self.data[key] = value

    def remove(self, key):
        self.data.pop(key, None)


class JsonFileStore(MemoryStore):
    """
    Gerencia persistência de configurações

    Keeps every key in one JSON object on disk. Read and write errors are
    logged and never raised: the in-memory copy keeps working either way.
    """

    def __init__(self, path=None):
        super().__init__()
        self.path = Path(path) if path else CONFIG_FILE
        self.data = self.load()

    def load(self):
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                loaded = json.load(f)
        except (OSError, ValueError):
            logger.exception(f"Failed to load {self.path}")
            return {}
        if not isinstance(loaded, dict):
            logger.error(f"Ignoring {self.path}: expected a JSON object")
            return {}
        return loaded

    def save(self):
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp, "w", encoding="utf-8") as f:
                json.dump(self.data, f, indent=2)
            tmp.replace(self.path)
        except OSError:
            logger.exception(f"Failed to save {self.path}")

    def set(self, key, value):
        super().set(key, value)
        self.save()

    def remove(self, key):
        if key in self.data:
            super().remove(key)
            self.save()
