# src/storage/snapshot_loader.py

"""Loads the current per-region snapshot batch from a JSON file."""

import json
import logging
from pathlib import Path
from typing import Any, cast

from src.models.app_info import AppInfo, RegionAppInfo
from src.storage.errors import SnapshotLoadError

logger = logging.getLogger("appstore_discounts.snapshots")


def parse_region_app_info(
    data: object,
    regions: list[str],
) -> RegionAppInfo:
    """Convert decoded batch JSON into ``AppInfo`` lists per region.

    Regions outside *regions* are ignored.  Entries that are not
    objects or lack a usable ``trackId`` / ``price`` are logged and
    skipped so that one bad app does not fail the run.
    """
    if not isinstance(data, dict):
        msg = f"Snapshot batch must be an object, got {type(data).__name__}"
        raise SnapshotLoadError(msg)

    batch = cast(dict[str, Any], data)
    result: RegionAppInfo = {}
    for region in regions:
        raw_entries = batch.get(region)
        if raw_entries is None:
            continue
        if not isinstance(raw_entries, list):
            logger.warning(
                "[%s] Snapshot batch entry is not a list, skipping region",
                region,
            )
            continue

        app_infos: list[AppInfo] = []
        for idx, raw in enumerate(cast(list[Any], raw_entries)):
            if not isinstance(raw, dict):
                logger.warning(
                    "[%s] Skipping non-object snapshot #%d", region, idx,
                )
                continue
            try:
                app_infos.append(AppInfo.from_dict(raw))
            except (KeyError, TypeError, ValueError) as exc:
                logger.warning(
                    "[%s] Skipping malformed snapshot #%d: %r",
                    region,
                    idx,
                    exc,
                )
        result[region] = app_infos

    return result


def load_region_app_info(
    path: Path,
    regions: list[str],
) -> RegionAppInfo:
    """Read a ``{region: [appInfo, ...]}`` batch file.

    Raises ``FileNotFoundError`` when *path* is missing and
    ``SnapshotLoadError`` when it is not valid JSON.
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as exc:
        msg = f"Invalid snapshot batch {path}: {exc}"
        raise SnapshotLoadError(msg) from exc

    result = parse_region_app_info(data, regions)
    logger.info(
        "Loaded snapshot batch %s: %s",
        path,
        {region: len(apps) for region, apps in result.items()},
    )
    return result
