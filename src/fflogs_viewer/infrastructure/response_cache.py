import json
import logging
import os
import shutil
import time
from hashlib import sha1
from pathlib import Path
from typing import Any


DEFAULT_CACHE_FORMAT_VERSION = "1"
_MANIFEST_FILENAME = "manifest.json"

logger = logging.getLogger(__name__)


class FileResponseCache:
    """One JSON file per cached response, wiped when the format version changes."""

    def __init__(self, root_dir: str | Path, *, format_version: str | None = None) -> None:
        self.root_dir = Path(root_dir)
        configured_version = str(format_version or DEFAULT_CACHE_FORMAT_VERSION).strip()
        self.format_version = configured_version or DEFAULT_CACHE_FORMAT_VERSION
        self._manifest_path = self.root_dir / _MANIFEST_FILENAME
        self._ensure_cache_version()

    def _ensure_cache_version(self) -> None:
        if self._read_manifest_version() == self.format_version and self.root_dir.exists():
            return

        if self.root_dir.exists():
            shutil.rmtree(self.root_dir, ignore_errors=True)
        self.root_dir.mkdir(parents=True, exist_ok=True)
        self._write_json(self._manifest_path, {"format_version": self.format_version, "updated_at": int(time.time())})

    def _read_manifest_version(self) -> str | None:
        payload = self._read_json(self._manifest_path)
        if payload is None:
            return None
        value = str(payload.get("format_version", "")).strip()
        return value or None

    @staticmethod
    def _read_json(path: Path) -> dict[str, Any] | None:
        if not path.exists():
            return None
        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            logger.warning("Ignoring unreadable cache file %s", path)
            return None
        return payload if isinstance(payload, dict) else None

    @staticmethod
    def _write_json(path: Path, payload: dict[str, Any]) -> None:
        tmp_path = path.with_suffix(".tmp")
        tmp_path.write_text(json.dumps(payload, ensure_ascii=False), encoding="utf-8")
        os.replace(tmp_path, path)

    def _path_for_key(self, cache_key: str) -> Path:
        return self.root_dir / f"{sha1(cache_key.encode('utf-8')).hexdigest()}.json"

    def set(self, cache_key: str, payload: dict[str, Any]) -> None:
        self._write_json(self._path_for_key(cache_key), {"stored_at": int(time.time()), "payload": payload})

    def get(self, cache_key: str, *, ttl_seconds: int | None) -> dict[str, Any] | None:
        envelope = self._read_json(self._path_for_key(cache_key))
        if envelope is None:
            return None
        payload = envelope.get("payload")
        if not isinstance(payload, dict):
            return None
        if ttl_seconds is None:
            return payload
        stored_at = envelope.get("stored_at")
        if not isinstance(stored_at, int):
            return None
        if int(time.time()) - stored_at <= max(0, int(ttl_seconds)):
            return payload
        return None

    def delete(self, cache_key: str) -> bool:
        path = self._path_for_key(cache_key)
        if not path.exists():
            return False
        path.unlink()
        return True
