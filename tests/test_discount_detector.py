# tests/test_discount_detector.py

"""Tests for discount detection between two snapshots."""

import unittest

from src.models.app_info import (
    IN_APP_PURCHASE_DISCOUNT,
    PRICE_DISCOUNT,
    TimeStorageAppInfo,
)
from src.services.discount_detector import get_discounts


def _entry(
    price: float,
    formatted_price: str,
    purchases: dict[str, str] | None = None,
) -> TimeStorageAppInfo:
    """Create a snapshot entry at a fixed timestamp."""
    return TimeStorageAppInfo(
        timestamp=1_721_448_000_000,
        price=price,
        formatted_price=formatted_price,
        in_app_purchases=dict(purchases or {}),
    )


class TestPriceDiscounts(unittest.TestCase):
    """App price comparisons."""

    def test_no_old_snapshot_yields_nothing(self) -> None:
        """A cold start is never a discount."""
        new = _entry(0.0, "Free", {"Pro": "¥1"})
        self.assertEqual(get_discounts("cn", new, None), [])

    def test_price_drop(self) -> None:
        """100 -> 2 gives exactly one price discount."""
        old = _entry(100.0, "¥100")
        new = _entry(2.0, "¥2")
        discounts = get_discounts("cn", new, old)
        self.assertEqual(len(discounts), 1)
        d = discounts[0]
        self.assertEqual(d.type, PRICE_DISCOUNT)
        self.assertEqual(d.from_price, "¥100")
        self.assertEqual(d.to_price, "¥2")
        self.assertEqual(d.type_name, "应用价格")
        self.assertEqual(d.name, "价格")

    def test_price_increase_ignored(self) -> None:
        """Higher prices are not discounts."""
        old = _entry(2.0, "¥2")
        new = _entry(100.0, "¥100")
        self.assertEqual(get_discounts("cn", new, old), [])

    def test_equal_price_ignored_despite_format_change(self) -> None:
        """Formatted-string changes alone do not count."""
        old = _entry(6.0, "¥6")
        new = _entry(6.0, "¥6.00")
        self.assertEqual(get_discounts("cn", new, old), [])

    def test_drop_to_free(self) -> None:
        """Dropping to 0 is a discount even with a 'Free' label."""
        old = _entry(30.0, "¥30")
        new = _entry(0.0, "Free")
        discounts = get_discounts("cn", new, old)
        self.assertEqual(len(discounts), 1)
        self.assertEqual(discounts[0].to_price, "Free")

    def test_labels_follow_region(self) -> None:
        """US discounts use the English labels."""
        old = _entry(4.99, "$4.99")
        new = _entry(0.99, "$0.99")
        d = get_discounts("us", new, old)[0]
        self.assertEqual(d.type_name, "App Price")
        self.assertEqual(d.name, "Price")

    def test_label_override(self) -> None:
        """Caller-supplied labels win over the region table."""
        old = _entry(4.99, "$4.99")
        new = _entry(0.99, "$0.99")
        d = get_discounts(
            "us", new, old, price_type_name="Sticker price",
        )[0]
        self.assertEqual(d.type_name, "Sticker price")


class TestInAppPurchaseDiscounts(unittest.TestCase):
    """In-app-purchase comparisons."""

    def test_purchase_drop(self) -> None:
        """A cheaper purchase yields an inAppPurchase discount."""
        old = _entry(0.0, "Free", {"年度 SVIP": "¥99"})
        new = _entry(0.0, "Free", {"年度 SVIP": "¥50"})
        discounts = get_discounts("cn", new, old)
        self.assertEqual(len(discounts), 1)
        d = discounts[0]
        self.assertEqual(d.type, IN_APP_PURCHASE_DISCOUNT)
        self.assertEqual(d.name, "年度 SVIP")
        self.assertEqual(d.type_name, "App 内购买项目")
        self.assertEqual((d.from_price, d.to_price), ("¥99", "¥50"))

    def test_new_only_purchase_ignored(self) -> None:
        """A purchase without prior record is never a discount."""
        old = _entry(0.0, "Free", {"Monthly": "¥18"})
        new = _entry(0.0, "Free", {"Monthly": "¥18", "Lifetime": "¥1"})
        self.assertEqual(get_discounts("cn", new, old), [])

    def test_unparseable_purchase_ignored(self) -> None:
        """A sentinel on either side skips the comparison."""
        old = _entry(0.0, "Free", {"A": "Free", "B": "¥10"})
        new = _entry(0.0, "Free", {"A": "¥0", "B": "Gratis"})
        self.assertEqual(get_discounts("cn", new, old), [])

    def test_purchase_increase_ignored(self) -> None:
        """A pricier purchase is not reported."""
        old = _entry(0.0, "Free", {"Pro": "¥6"})
        new = _entry(0.0, "Free", {"Pro": "¥12"})
        self.assertEqual(get_discounts("cn", new, old), [])

    def test_order_follows_new_mapping(self) -> None:
        """Price first, then purchases in the new mapping's order."""
        old = _entry(12.0, "¥12", {"B": "¥30", "A": "¥20"})
        new = _entry(6.0, "¥6", {"A": "¥10", "B": "¥15"})
        discounts = get_discounts("cn", new, old)
        self.assertEqual(
            [(d.type, d.name) for d in discounts],
            [
                (PRICE_DISCOUNT, "价格"),
                (IN_APP_PURCHASE_DISCOUNT, "A"),
                (IN_APP_PURCHASE_DISCOUNT, "B"),
            ],
        )

    def test_unknown_region_uses_default_label(self) -> None:
        """Regions without a label fall back to the default."""
        old = _entry(0.0, "Free", {"Pro": "€5"})
        new = _entry(0.0, "Free", {"Pro": "€3"})
        d = get_discounts("de", new, old)[0]
        self.assertEqual(d.type_name, "In-App Purchases")


if __name__ == "__main__":
    unittest.main()
