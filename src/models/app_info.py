# src/models/app_info.py

"""App Store snapshot and discount data models.

Field names are snake_case in Python; ``from_dict`` / ``to_dict`` map
them to the camelCase keys used by the iTunes lookup API and by the
persisted history files.
"""

from dataclasses import dataclass, field
from typing import Any

PRICE_DISCOUNT = "price"
IN_APP_PURCHASE_DISCOUNT = "inAppPurchase"

# Epoch ms of 9999-12-30T00:00Z; any zone offset still lands in year 9999
MAX_TIMESTAMP_MS = 253_402_128_000_000


def _str_list(value: Any) -> list[str]:
    """Coerce a JSON value to a list of strings (missing -> empty)."""
    if not isinstance(value, list):
        return []
    return [str(v) for v in value]


def _purchases(value: Any) -> dict[str, str]:
    """Coerce a JSON value to an ordered name -> price mapping."""
    if not isinstance(value, dict):
        return {}
    return {str(k): str(v) for k, v in value.items()}


@dataclass
class AppInfo:
    """One observed storefront snapshot of an application."""

    track_id: int
    track_name: str = ""
    track_view_url: str = ""
    price: float = 0.0
    formatted_price: str = ""
    in_app_purchases: dict[str, str] = field(
        default_factory=lambda: dict[str, str]()
    )
    description: str = ""
    artwork_url_60: str = ""
    screenshot_urls: list[str] = field(
        default_factory=lambda: list[str]()
    )
    ipad_screenshot_urls: list[str] = field(
        default_factory=lambda: list[str]()
    )
    appletv_screenshot_urls: list[str] = field(
        default_factory=lambda: list[str]()
    )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AppInfo":
        """Build from lookup-API JSON; unknown keys are ignored.

        Raises ``KeyError`` without ``trackId`` and ``ValueError`` /
        ``TypeError`` when ``trackId`` or ``price`` is not numeric.
        """
        return cls(
            track_id=int(data["trackId"]),
            track_name=str(data.get("trackName", "")),
            track_view_url=str(data.get("trackViewUrl", "")),
            price=float(data.get("price", 0.0)),
            formatted_price=str(data.get("formattedPrice", "")),
            in_app_purchases=_purchases(data.get("inAppPurchases")),
            description=str(data.get("description", "")),
            artwork_url_60=str(data.get("artworkUrl60", "")),
            screenshot_urls=_str_list(data.get("screenshotUrls")),
            ipad_screenshot_urls=_str_list(
                data.get("ipadScreenshotUrls")
            ),
            appletv_screenshot_urls=_str_list(
                data.get("appletvScreenshotUrls")
            ),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "trackId": self.track_id,
            "trackName": self.track_name,
            "trackViewUrl": self.track_view_url,
            "price": self.price,
            "formattedPrice": self.formatted_price,
            "inAppPurchases": dict(self.in_app_purchases),
            "description": self.description,
            "artworkUrl60": self.artwork_url_60,
            "screenshotUrls": list(self.screenshot_urls),
            "ipadScreenshotUrls": list(self.ipad_screenshot_urls),
            "appletvScreenshotUrls": list(self.appletv_screenshot_urls),
        }


@dataclass
class TimeStorageAppInfo:
    """The price-bearing part of a snapshot, as kept in history."""

    timestamp: int
    price: float
    formatted_price: str
    in_app_purchases: dict[str, str] = field(
        default_factory=lambda: dict[str, str]()
    )

    @classmethod
    def from_app_info(
        cls, timestamp: int, app_info: AppInfo,
    ) -> "TimeStorageAppInfo":
        """Reduce a full snapshot to its tracked fields."""
        return cls(
            timestamp=timestamp,
            price=app_info.price,
            formatted_price=app_info.formatted_price,
            in_app_purchases=dict(app_info.in_app_purchases),
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TimeStorageAppInfo":
        """Build from a stored entry.

        Raises ``ValueError`` when ``timestamp`` falls outside
        ``0..MAX_TIMESTAMP_MS`` and cannot be mapped to a calendar day.
        """
        timestamp = int(data["timestamp"])
        if not 0 <= timestamp <= MAX_TIMESTAMP_MS:
            msg = f"timestamp out of range: {timestamp}"
            raise ValueError(msg)
        return cls(
            timestamp=timestamp,
            price=float(data["price"]),
            formatted_price=str(data.get("formattedPrice", "")),
            in_app_purchases=_purchases(data.get("inAppPurchases")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "timestamp": self.timestamp,
            "price": self.price,
            "formattedPrice": self.formatted_price,
            "inAppPurchases": dict(self.in_app_purchases),
        }

    def tracked_fields(self) -> tuple[float, str, dict[str, str]]:
        """Fields compared when deciding whether state changed."""
        return (self.price, self.formatted_price, self.in_app_purchases)

    def same_state_as(self, other: "TimeStorageAppInfo") -> bool:
        """True when price, formatted price and purchases all match."""
        return self.tracked_fields() == other.tracked_fields()


@dataclass
class Discount:
    """A single detected price decrease."""

    type: str  # "price" or "inAppPurchase"
    type_name: str
    name: str
    from_price: str
    to_price: str

    def to_dict(self) -> dict[str, str]:
        return {
            "type": self.type,
            "typeName": self.type_name,
            "name": self.name,
            "from": self.from_price,
            "to": self.to_price,
        }


@dataclass
class DiscountInfo:
    """A reportable discount event for one app in one run."""

    app_info: AppInfo
    timestamp: int
    discounts: list[Discount]

    @property
    def track_name(self) -> str:
        return self.app_info.track_name

    def to_dict(self) -> dict[str, Any]:
        data = self.app_info.to_dict()
        data["timestamp"] = self.timestamp
        data["discounts"] = [d.to_dict() for d in self.discounts]
        return data


# region -> trackId -> day buckets (newest first) -> entries (newest first)
DayBuckets = list[list[TimeStorageAppInfo]]
StorageAppInfo = dict[str, DayBuckets]
RegionStorageAppInfo = dict[str, StorageAppInfo]
RegionAppInfo = dict[str, list[AppInfo]]
RegionDiscountInfo = dict[str, list[DiscountInfo]]
