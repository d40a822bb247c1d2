import json
import logging
import os
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


class MemoryStore:
    """Key-value store kept in a dict. Values are round-tripped through JSON."""

    def __init__(self, data: Optional[Dict[str, Any]] = None):
        self._data: Dict[str, str] = {}
        for key, value in (data or {}).items():
            self.set(key, value)

    def get(self, key: str, default=None):
        raw = self._data.get(key)
        return json.loads(raw) if raw is not None else default

    def set(self, key: str, value) -> None:
        self._data[key] = json.dumps(value, ensure_ascii=False)


class JsonFileStore:
    """Key-value store backed by a single JSON document on disk."""

    def __init__(self, filepath: str):
        self.filepath = filepath

    def _load(self) -> Dict[str, Any]:
        if not os.path.exists(self.filepath):
            return {}
        try:
            with open(self.filepath, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("could not read %s, starting empty: %s", self.filepath, e)
            return {}
        return data if isinstance(data, dict) else {}

    def get(self, key: str, default=None):
        return self._load().get(key, default)

    def set(self, key: str, value) -> None:
        data = self._load()
        data[key] = value
        folder = os.path.dirname(self.filepath)
        if folder and not os.path.exists(folder):
            os.makedirs(folder)
        with open(self.filepath, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=4)
