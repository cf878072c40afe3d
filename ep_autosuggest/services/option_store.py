"""OptionStore: JSON-backed registry of persisted site options.

Minimal helpers to keep values that must survive restarts:
- get(name): read an option, or a default when it was never stored
- update(name, value): persist an option
- get_or_create(name, factory): generate and persist a value once, then reuse it
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Dict, Optional

from ep_autosuggest.config import Config
from ep_autosuggest.utils.io_utils import read_json, write_json


logger = logging.getLogger(__name__)


class OptionStore:
    def __init__(self, path: Optional[str] = None, cfg: Config = Config):
        self.path = path or cfg.OPTIONS_PATH
        self._lock = threading.Lock()

    def _load(self) -> Dict[str, Any]:
        data = read_json(self.path, default=None)
        if not isinstance(data, dict):
            return {}
        return data

    def get(self, name: str, default: Any = None) -> Any:
        return self._load().get(name, default)

    def update(self, name: str, value: Any) -> None:
        with self._lock:
            data = self._load()
            data[name] = value
            write_json(self.path, data)

    def get_or_create(self, name: str, factory: Callable[[], Any]) -> Any:
        """Return the stored value for ``name``, generating it on first use."""
        with self._lock:
            data = self._load()
            if name in data:
                return data[name]
            value = factory()
            data[name] = value
            write_json(self.path, data)
        logger.info(f"Stored generated option '{name}' in {self.path}")
        return value
