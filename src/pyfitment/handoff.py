"""Persist a resolved vehicle and build the catalog navigation target."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from pathlib import Path
from typing import Protocol
from urllib.parse import quote

from pydantic import ValidationError

from pyfitment._constants import FITS_VEHICLES_FILTER, GARAGE_STORAGE_KEY
from pyfitment.config import FitmentConfig
from pyfitment.models.context import FitmentContext

_logger = logging.getLogger(__name__)


class LocalStorage(Protocol):
    """String key/value store with browser ``localStorage`` semantics."""

    def get_item(self, key: str) -> str | None:
        ...

    def set_item(self, key: str, value: str) -> None:
        ...

    def remove_item(self, key: str) -> None:
        ...


class MemoryStorage:
    """Process-local storage, mostly for tests and one-shot scripts."""

    def __init__(self) -> None:
        self._items: dict[str, str] = {}

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)


class JsonFileStorage:
    """Storage persisted as a flat JSON object in a single file.

    Every write rewrites the whole file; last writer wins.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    def _read(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        text = self._path.read_text(encoding="utf-8")
        if not text.strip():
            return {}
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            _logger.warning("Treating unreadable storage file %s as empty: %s", self._path, exc)
            return {}
        if not isinstance(data, dict):
            _logger.warning("Treating storage file %s as empty: not a JSON object", self._path)
            return {}
        return {str(k): str(v) for k, v in data.items()}

    def _write(self, items: dict[str, str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(items, indent=2, sort_keys=True), encoding="utf-8")

    def get_item(self, key: str) -> str | None:
        return self._read().get(key)

    def set_item(self, key: str, value: str) -> None:
        items = self._read()
        items[key] = value
        self._write(items)

    def remove_item(self, key: str) -> None:
        items = self._read()
        if items.pop(key, None) is not None:
            self._write(items)


def build_catalog_url(config: FitmentConfig, vehicle_id: str) -> str:
    """Catalog listing URL filtered to *vehicle_id*."""
    base = config.shop_url.rstrip("/")
    return f"{base}/collections/{config.destination_collection}?{FITS_VEHICLES_FILTER}={quote(vehicle_id, safe='')}"


def load_saved_context(storage: LocalStorage, key: str = GARAGE_STORAGE_KEY) -> FitmentContext | None:
    """Read the garage slot back; ``None`` if empty or unreadable."""
    raw = storage.get_item(key)
    if not raw:
        return None
    try:
        return FitmentContext.model_validate_json(raw)
    except ValidationError:
        _logger.warning("Ignoring unreadable garage vehicle under %r", key)
        return None


class FitmentHandoff:
    """Write the resolved vehicle to storage, then navigate to the catalog.

    *navigate* receives the catalog URL. It defaults to a no-op so callers
    that only need the URL can use the return value of :meth:`apply`.
    """

    def __init__(
        self,
        config: FitmentConfig,
        storage: LocalStorage,
        *,
        navigate: Callable[[str], None] | None = None,
    ) -> None:
        self._config = config
        self._storage = storage
        self._navigate = navigate

    def apply(self, context: FitmentContext) -> str:
        self._storage.set_item(self._config.storage_key, context.to_json())
        url = build_catalog_url(self._config, context.id)
        _logger.info("Vehicle %s resolved, navigating to %s", context.id, url)
        if self._navigate is not None:
            self._navigate(url)
        return url
