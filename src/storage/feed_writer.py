# src/storage/feed_writer.py

"""Writes one JSON Feed document of discount events per region."""

import json
import logging
import os
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from src.config.settings import Settings
from src.models.app_info import (
    PRICE_DISCOUNT,
    DiscountInfo,
    RegionDiscountInfo,
)
from src.services.dates import to_utc_iso
from src.storage.errors import FeedWriteError

logger = logging.getLogger("appstore_discounts.feeds")


def discount_lines(discount_info: DiscountInfo) -> list[str]:
    """One ``name: from → to`` line per discount, app price first."""
    price_lines: list[str] = []
    purchase_lines: list[str] = []
    for d in discount_info.discounts:
        line = f"{d.name}: {d.from_price} → {d.to_price}"
        if d.type == PRICE_DISCOUNT:
            price_lines.append(line)
        else:
            purchase_lines.append(line)
    return price_lines + purchase_lines


def build_item(discount_info: DiscountInfo) -> dict[str, Any]:
    """Build a single JSON Feed item for one discount event."""
    app = discount_info.app_info
    lines = discount_lines(discount_info)
    item: dict[str, Any] = {
        "id": f"{app.track_name}-{discount_info.timestamp}",
        "title": app.track_name,
        "url": app.track_view_url,
        "summary": "; ".join(lines),
        "content_text": "\n".join(lines),
        "date_published": to_utc_iso(discount_info.timestamp),
    }
    if app.artwork_url_60:
        item["image"] = app.artwork_url_60
    return item


class FeedWriter:
    """Renders and saves per-region discount feeds."""

    def __init__(self, feeds_dir: Path | None = None) -> None:
        self.feeds_dir: Path = feeds_dir or Settings.FEEDS_DIR
        self.feeds_dir.mkdir(parents=True, exist_ok=True)

    def build_feed(
        self,
        region: str,
        discount_infos: list[DiscountInfo],
        updated: datetime | None = None,
    ) -> dict[str, Any]:
        """Return a JSON Feed 1.1 document for *region*."""
        stamp = updated or datetime.now(tz=timezone.utc)
        return {
            "version": Settings.FEED_VERSION_URL,
            "title": f"AppStore Discounts（{region}）",
            "home_page_url": Settings.FEED_HOME_URL.format(region=region),
            "description": Settings.FEED_DESCRIPTION,
            "icon": Settings.FEED_ICON,
            "favicon": Settings.FEED_ICON,
            "_appstore_discounts": {
                "updated": stamp.isoformat(timespec="seconds"),
            },
            "items": [build_item(info) for info in discount_infos],
        }

    def write_feeds(
        self,
        region_discount_info: RegionDiscountInfo,
        updated: datetime | None = None,
    ) -> list[Path]:
        """Write ``<region>.json`` for every region; returns the paths.

        Every feed is staged to a temp file first and only then moved
        into place, so a failed write leaves the previous feeds intact.
        Raises ``FeedWriteError`` on any I/O failure.
        """
        staged: list[tuple[str, Path]] = []
        try:
            for region, discount_infos in region_discount_info.items():
                feed = self.build_feed(region, discount_infos, updated)
                fd, tmp_name = tempfile.mkstemp(
                    prefix=f".{region}.", suffix=".tmp", dir=self.feeds_dir,
                )
                staged.append((region, Path(tmp_name)))
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(feed, f, ensure_ascii=False, indent=2)

            paths: list[Path] = []
            for region, tmp_path in staged:
                filepath = self.feeds_dir / f"{region}.json"
                os.replace(tmp_path, filepath)
                logger.info(
                    "[%s] Wrote feed with %d items to %s",
                    region,
                    len(region_discount_info[region]),
                    filepath,
                )
                paths.append(filepath)
        except OSError as exc:
            for _, tmp_path in staged:
                tmp_path.unlink(missing_ok=True)
            msg = f"cannot write feeds to {self.feeds_dir}: {exc}"
            raise FeedWriteError(msg) from exc
        return paths
