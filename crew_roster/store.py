# store.py
# Centralized data loading and saving utilities.
# The parsing core never touches storage; the GUI and snapshot service get a
# Store (get/set) handed to them.

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional, Protocol

import pandas as pd

log = logging.getLogger(__name__)

# Relative to the working directory (project root when run from the GUI)
DATA_DIR = Path("data")
STATE_FILE = "shared-state.json"


class Store(Protocol):
    def get(self, key: str) -> Any: ...

    def set(self, key: str, value: Any) -> None: ...


class MemoryStore:
    """In-process store, used by tests and when no data directory is wanted."""

    def __init__(self, initial: Optional[dict] = None):
        self._data = dict(initial or {})

    def get(self, key: str) -> Any:
        return self._data.get(key)

    def set(self, key: str, value: Any) -> None:
        self._data[key] = value


class JsonFileStore:
    """
    Key/value buckets kept in one JSON document. Loaded once, rewritten on
    every set(). A missing or unreadable file starts an empty state.
    """

    def __init__(self, path: Path | str | None = None):
        self.path = Path(path) if path else DATA_DIR / STATE_FILE
        self._data = self._load()

    def _load(self) -> dict:
        if not self.path.exists():
            log.info("No shared state file at %s, starting fresh", self.path)
            return {}
        try:
            with open(self.path, encoding="utf-8") as fh:
                data = json.load(fh)
        except (OSError, json.JSONDecodeError):
            log.exception("Could not read shared state from %s", self.path)
            return {}
        return data if isinstance(data, dict) else {}

    def get(self, key: str) -> Any:
        return self._data.get(key)

    def set(self, key: str, value: Any) -> None:
        self._data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as fh:
            json.dump(self._data, fh, indent=2, ensure_ascii=False)

    def all(self) -> dict:
        return dict(self._data)


def save_to_csv(records: list[dict], name: str, data_dir: Path | str = DATA_DIR) -> Path:
    """Save a list of dictionaries to a CSV in the data/ directory."""
    data_dir = Path(data_dir)
    data_dir.mkdir(parents=True, exist_ok=True)
    path = data_dir / name
    df = pd.DataFrame(records)
    df.to_csv(path, index=False, encoding="utf-8-sig")
    return path


def load_csv(name: str, data_dir: Path | str = DATA_DIR) -> pd.DataFrame:
    """Load a CSV from the data/ directory (all columns as text)."""
    path = Path(data_dir) / name
    if not path.exists():
        return pd.DataFrame()
    return pd.read_csv(path, dtype=str, encoding="utf-8-sig").fillna("")
