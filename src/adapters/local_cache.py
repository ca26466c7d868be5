"""Caché local en ficheros JSON (borradores de DPP).

Cada `storage_key` es un fichero `<data_dir>/<storage_key>.json` con un objeto
JSON; tras publicar un DPP se eliminan las claves indicadas.
"""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any, Sequence

from core.config import AppSettings

logger = logging.getLogger(__name__)

_UNSAFE = re.compile(r"[^A-Za-z0-9._-]+")


class JsonFileCache:
    """Implementa `LocalCache` sobre el sistema de ficheros."""

    def __init__(self, root: Path | None = None, settings: AppSettings | None = None) -> None:
        settings = settings or AppSettings()
        self.root = root or settings.resolved_data_dir()

    def path_for(self, storage_key: str) -> Path:
        name = _UNSAFE.sub("_", storage_key).strip("._") or "default"
        return self.root / f"{name}.json"

    def load(self, storage_key: str) -> dict[str, Any]:
        path = self.path_for(storage_key)
        if not path.exists():
            return {}
        data = json.loads(path.read_text(encoding="utf-8"))
        return data if isinstance(data, dict) else {}

    def save(self, storage_key: str, values: dict[str, Any]) -> Path:
        path = self.path_for(storage_key)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            json.dumps(values, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
            encoding="utf-8",
        )
        return path

    def delete_values(self, storage_key: str, keys: Sequence[str]) -> None:
        if not self.path_for(storage_key).exists():
            return
        values = self.load(storage_key)
        removed = [k for k in keys if values.pop(k, None) is not None]
        self.save(storage_key, values)
        logger.info("Removed %d cached value(s) from %s", len(removed), storage_key)
