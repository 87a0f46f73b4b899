# tests/test_app_info_model.py

"""Tests for the snapshot and discount dataclasses."""

import unittest

from src.models.app_info import (
    MAX_TIMESTAMP_MS,
    AppInfo,
    Discount,
    DiscountInfo,
    TimeStorageAppInfo,
)

_LOOKUP_JSON = {
    "trackId": 414478124,
    "trackName": "WeChat",
    "trackViewUrl": "https://apps.apple.com/cn/app/id414478124",
    "price": 0.0,
    "formattedPrice": "免费",
    "inAppPurchases": {"Sticker": "¥6.00"},
    "artworkUrl60": "https://example.com/60.png",
    "screenshotUrls": ["https://example.com/s1.png"],
    "bundleId": "com.tencent.xin",
}


class TestAppInfo(unittest.TestCase):
    """AppInfo conversion from lookup JSON."""

    def test_from_dict_maps_camel_case(self) -> None:
        """Known keys map onto snake_case fields."""
        app = AppInfo.from_dict(_LOOKUP_JSON)
        self.assertEqual(app.track_id, 414478124)
        self.assertEqual(app.track_name, "WeChat")
        self.assertEqual(app.formatted_price, "免费")
        self.assertEqual(app.in_app_purchases, {"Sticker": "¥6.00"})
        self.assertEqual(app.screenshot_urls, ["https://example.com/s1.png"])
        self.assertEqual(app.ipad_screenshot_urls, [])

    def test_from_dict_requires_track_id(self) -> None:
        """Missing trackId raises KeyError."""
        with self.assertRaises(KeyError):
            AppInfo.from_dict({"price": 1.0})

    def test_from_dict_rejects_bad_price(self) -> None:
        """A non-numeric price raises ValueError."""
        with self.assertRaises(ValueError):
            AppInfo.from_dict({"trackId": 1, "price": "abc"})

    def test_to_dict_ignores_unknown_keys(self) -> None:
        """Only modelled keys survive a conversion."""
        data = AppInfo.from_dict(_LOOKUP_JSON).to_dict()
        self.assertNotIn("bundleId", data)
        self.assertEqual(data["trackId"], 414478124)


class TestTimeStorageAppInfo(unittest.TestCase):
    """Reduced history entries."""

    def test_from_app_info_copies_tracked_fields(self) -> None:
        """Only price fields and the timestamp are kept."""
        app = AppInfo.from_dict(_LOOKUP_JSON)
        entry = TimeStorageAppInfo.from_app_info(1000, app)
        self.assertEqual(entry.timestamp, 1000)
        self.assertEqual(entry.price, 0.0)
        self.assertEqual(entry.in_app_purchases, {"Sticker": "¥6.00"})
        self.assertIsNot(entry.in_app_purchases, app.in_app_purchases)

    def test_same_state_ignores_timestamp(self) -> None:
        """Equality of state does not depend on when it was seen."""
        a = TimeStorageAppInfo(1, 6.0, "¥6", {"X": "¥1"})
        b = TimeStorageAppInfo(2, 6.0, "¥6", {"X": "¥1"})
        self.assertTrue(a.same_state_as(b))

    def test_same_state_detects_purchase_change(self) -> None:
        """A different purchase price is a different state."""
        a = TimeStorageAppInfo(1, 6.0, "¥6", {"X": "¥1"})
        b = TimeStorageAppInfo(1, 6.0, "¥6", {"X": "¥2"})
        self.assertFalse(a.same_state_as(b))

    def test_from_dict_rejects_out_of_range_timestamp(self) -> None:
        """Timestamps that cannot map to a calendar day are rejected."""
        for bad in (10**20, -1, MAX_TIMESTAMP_MS + 1):
            with self.subTest(timestamp=bad):
                with self.assertRaises(ValueError):
                    TimeStorageAppInfo.from_dict(
                        {"timestamp": bad, "price": 1.0},
                    )

    def test_from_dict_accepts_boundaries(self) -> None:
        """0 and MAX_TIMESTAMP_MS are both valid."""
        for ok in (0, MAX_TIMESTAMP_MS):
            with self.subTest(timestamp=ok):
                entry = TimeStorageAppInfo.from_dict(
                    {"timestamp": ok, "price": 1.0},
                )
                self.assertEqual(entry.timestamp, ok)

    def test_dict_uses_persisted_keys(self) -> None:
        """to_dict / from_dict use the stored camelCase keys."""
        entry = TimeStorageAppInfo(5, 1.0, "¥1", {"A": "¥3"})
        data = entry.to_dict()
        self.assertEqual(
            sorted(data),
            ["formattedPrice", "inAppPurchases", "price", "timestamp"],
        )
        self.assertEqual(TimeStorageAppInfo.from_dict(data), entry)


class TestDiscountInfo(unittest.TestCase):
    """DiscountInfo serialisation."""

    def test_to_dict_merges_app_and_discounts(self) -> None:
        """The event carries app fields, timestamp and discounts."""
        info = DiscountInfo(
            app_info=AppInfo.from_dict(_LOOKUP_JSON),
            timestamp=42,
            discounts=[Discount("price", "应用价格", "价格", "¥6", "¥1")],
        )
        data = info.to_dict()
        self.assertEqual(data["trackName"], "WeChat")
        self.assertEqual(data["timestamp"], 42)
        self.assertEqual(
            data["discounts"][0],
            {
                "type": "price",
                "typeName": "应用价格",
                "name": "价格",
                "from": "¥6",
                "to": "¥1",
            },
        )
        self.assertEqual(info.track_name, "WeChat")


if __name__ == "__main__":
    unittest.main()
