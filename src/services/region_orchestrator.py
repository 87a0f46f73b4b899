# src/services/region_orchestrator.py

"""Runs the history update and discount check across all regions."""

import logging

from src.models.app_info import (
    DiscountInfo,
    RegionAppInfo,
    RegionDiscountInfo,
    RegionStorageAppInfo,
    TimeStorageAppInfo,
)
from src.services.discount_detector import get_discounts
from src.services.history_updater import update_history

logger = logging.getLogger("appstore_discounts.orchestrator")


def calculate_latest_app_info(
    timestamp: int,
    regions: list[str],
    region_app_info: RegionAppInfo,
    region_storage_app_info: RegionStorageAppInfo,
    tz_name: str | None = None,
) -> RegionDiscountInfo:
    """Update stored history for every region and collect discounts.

    *region_storage_app_info* is mutated in place.  Every region in
    *regions* is a key of the result, even with no current snapshots.
    Apps missing from the current batch keep their history untouched.
    An app whose stored timestamp cannot be mapped to a day is logged
    and skipped; the other apps are still processed.
    """
    region_discount_info: RegionDiscountInfo = {}

    for region in regions:
        app_infos = region_app_info.get(region) or []
        discount_infos: list[DiscountInfo] = []
        storage_app_info = region_storage_app_info.setdefault(region, {})
        counts: dict[str, int] = {}

        for app_info in app_infos:
            track_key = str(app_info.track_id)
            new_entry = TimeStorageAppInfo.from_app_info(
                timestamp, app_info,
            )
            try:
                update = update_history(
                    timestamp,
                    new_entry,
                    storage_app_info.get(track_key),
                    tz_name,
                )
            except (OSError, OverflowError, ValueError) as exc:
                # Unmappable stored timestamp; history left as loaded
                logger.warning(
                    "[%s] Skipping %s (%s): %r",
                    region,
                    app_info.track_name,
                    track_key,
                    exc,
                )
                counts["skipped"] = counts.get("skipped", 0) + 1
                continue
            storage_app_info[track_key] = update.buckets
            counts[update.action] = counts.get(update.action, 0) + 1

            if not update.needs_discount_check:
                continue

            discounts = get_discounts(
                region, new_entry, update.previous,
            )
            if discounts:
                discount_infos.append(DiscountInfo(
                    app_info=app_info,
                    timestamp=timestamp,
                    discounts=discounts,
                ))
                logger.info(
                    "[%s] %s (%s): %d discount(s)",
                    region,
                    app_info.track_name,
                    track_key,
                    len(discounts),
                )

        logger.info(
            "[%s] Processed %d apps %s, %d discount events",
            region,
            len(app_infos),
            counts,
            len(discount_infos),
        )
        region_discount_info[region] = discount_infos

    return region_discount_info
