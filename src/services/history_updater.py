# src/services/history_updater.py

"""Fold one new observation into an app's day-bucketed price history.

History for an app is a list of day buckets, newest day first; each
bucket lists that day's entries, newest first.  A new observation can:

* start the history (``created``),
* add an intra-day change to today's bucket (``appended``),
* repeat today's latest state and be dropped (``unchanged``),
* open a new day bucket (``new_day``).

Only ``new_day`` warrants a discount check, against the entry that was
newest before the update.
"""

import logging
from dataclasses import dataclass

from src.models.app_info import DayBuckets, TimeStorageAppInfo
from src.services.dates import get_date

logger = logging.getLogger("appstore_discounts.history")

CREATED = "created"
APPENDED = "appended"
UNCHANGED = "unchanged"
NEW_DAY = "new_day"


@dataclass
class HistoryUpdate:
    """Outcome of integrating one observation."""

    action: str
    buckets: DayBuckets
    previous: TimeStorageAppInfo | None = None

    @property
    def needs_discount_check(self) -> bool:
        """True only when a day boundary was crossed."""
        return self.action == NEW_DAY and self.previous is not None


def latest_entry(
    buckets: DayBuckets | None,
) -> TimeStorageAppInfo | None:
    """Newest stored entry (bucket 0, entry 0), if any."""
    if not buckets or not buckets[0]:
        return None
    return buckets[0][0]


def update_history(
    timestamp: int,
    new_entry: TimeStorageAppInfo,
    buckets: DayBuckets | None,
    tz_name: str | None = None,
) -> HistoryUpdate:
    """Integrate *new_entry* observed at *timestamp* into *buckets*.

    *buckets* is mutated in place; when it is ``None`` a new list is
    created and returned in ``HistoryUpdate.buckets``.
    """
    if buckets is None:
        buckets = []

    previous = latest_entry(buckets)

    if previous is None:
        # Drop an empty leading bucket left by a hand-edited store
        if buckets and not buckets[0]:
            buckets.pop(0)
        buckets.insert(0, [new_entry])
        return HistoryUpdate(action=CREATED, buckets=buckets)

    today = get_date(timestamp, tz_name)
    last_day = get_date(previous.timestamp, tz_name)

    if today == last_day:
        if previous.same_state_as(new_entry):
            return HistoryUpdate(
                action=UNCHANGED, buckets=buckets, previous=previous,
            )
        buckets[0].insert(0, new_entry)
        logger.debug(
            "Intra-day change on %s: %s -> %s",
            today,
            previous.formatted_price,
            new_entry.formatted_price,
        )
        return HistoryUpdate(
            action=APPENDED, buckets=buckets, previous=previous,
        )

    buckets.insert(0, [new_entry])
    return HistoryUpdate(
        action=NEW_DAY, buckets=buckets, previous=previous,
    )
