# src/storage/history_store.py

"""JSON-file persistence for the per-region price history."""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, cast

from src.config.settings import Settings
from src.models.app_info import (
    DayBuckets,
    RegionStorageAppInfo,
    StorageAppInfo,
    TimeStorageAppInfo,
)
from src.storage.errors import HistoryStoreError

logger = logging.getLogger("appstore_discounts.storage")


def _decode_region(region: str, data: object) -> StorageAppInfo:
    """Turn ``{trackId: [[entry, ...], ...]}`` JSON into model objects."""
    if not isinstance(data, dict):
        msg = f"[{region}] history root must be an object"
        raise HistoryStoreError(msg)

    storage: StorageAppInfo = {}
    for track_id, raw_buckets in cast(dict[str, Any], data).items():
        if not isinstance(raw_buckets, list):
            msg = f"[{region}] history of {track_id} must be a list"
            raise HistoryStoreError(msg)
        buckets: DayBuckets = []
        try:
            for raw_bucket in cast(list[Any], raw_buckets):
                buckets.append([
                    TimeStorageAppInfo.from_dict(entry)
                    for entry in cast(list[dict[str, Any]], raw_bucket)
                ])
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            msg = f"[{region}] malformed history for {track_id}: {exc!r}"
            raise HistoryStoreError(msg) from exc
        storage[str(track_id)] = buckets
    return storage


def _encode_region(storage: StorageAppInfo) -> dict[str, Any]:
    return {
        track_id: [
            [entry.to_dict() for entry in bucket]
            for bucket in buckets
        ]
        for track_id, buckets in storage.items()
    }


class HistoryStore:
    """Reads and writes one ``<region>.json`` history file per region."""

    def __init__(self, storage_dir: Path | None = None) -> None:
        self.storage_dir: Path = storage_dir or Settings.STORAGE_DIR
        self.storage_dir.mkdir(parents=True, exist_ok=True)
        logger.debug(
            "HistoryStore initialised, storage_dir=%s", self.storage_dir,
        )

    def region_path(self, region: str) -> Path:
        return self.storage_dir / f"{region}.json"

    def load_region(self, region: str) -> StorageAppInfo:
        """Load one region; a missing file means no history yet."""
        path = self.region_path(region)
        if not path.exists():
            logger.info("[%s] No stored history at %s", region, path)
            return {}
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as exc:
            msg = f"[{region}] cannot read history {path}: {exc}"
            raise HistoryStoreError(msg) from exc
        return _decode_region(region, data)

    def load(self, regions: list[str]) -> RegionStorageAppInfo:
        """Load the history of every region in *regions*."""
        store: RegionStorageAppInfo = {
            region: self.load_region(region) for region in regions
        }
        logger.info(
            "Loaded history for %s",
            {region: len(apps) for region, apps in store.items()},
        )
        return store

    def save_region(self, region: str, storage: StorageAppInfo) -> Path:
        """Write one region atomically (temp file, then replace)."""
        path = self.region_path(region)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{region}.", suffix=".tmp", dir=self.storage_dir,
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(
                    _encode_region(storage), f,
                    ensure_ascii=False, indent=2,
                )
            os.replace(tmp_name, path)
        except OSError as exc:
            Path(tmp_name).unlink(missing_ok=True)
            msg = f"[{region}] cannot write history {path}: {exc}"
            raise HistoryStoreError(msg) from exc
        return path

    def save(self, store: RegionStorageAppInfo) -> list[Path]:
        """Persist every region in *store*; returns the written paths."""
        paths = [
            self.save_region(region, storage)
            for region, storage in store.items()
        ]
        logger.info("Saved history for %d regions", len(paths))
        return paths
