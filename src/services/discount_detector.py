# src/services/discount_detector.py

"""Compare two snapshots of one app and list its price decreases."""

import logging

from src.config.settings import (
    get_in_app_purchases_text,
    get_price_name,
    get_price_text,
)
from src.models.app_info import (
    IN_APP_PURCHASE_DISCOUNT,
    PRICE_DISCOUNT,
    Discount,
    TimeStorageAppInfo,
)
from src.services.price_parser import is_parsed, parse_price

logger = logging.getLogger("appstore_discounts.discounts")


def get_discounts(
    region: str,
    new_info: TimeStorageAppInfo,
    old_info: TimeStorageAppInfo | None = None,
    price_type_name: str | None = None,
    in_app_purchase_type_name: str | None = None,
) -> list[Discount]:
    """Return the discounts between *old_info* and *new_info*.

    The app price is compared as the raw numeric ``price``; in-app
    purchases are compared by parsing their formatted prices, and only
    for names that already existed in *old_info*.  Category labels
    default to the region tables in Settings.
    """
    discounts: list[Discount] = []

    if old_info is None:
        return discounts

    if old_info.price > new_info.price:
        discounts.append(Discount(
            type=PRICE_DISCOUNT,
            type_name=price_type_name or get_price_text(region),
            name=get_price_name(region),
            from_price=old_info.formatted_price,
            to_price=new_info.formatted_price,
        ))

    purchases_label = (
        in_app_purchase_type_name or get_in_app_purchases_text(region)
    )
    old_purchases = old_info.in_app_purchases

    for name, formatted_price in new_info.in_app_purchases.items():
        old_formatted_price = old_purchases.get(name)
        if not old_formatted_price:
            continue

        old_price = parse_price(old_formatted_price)
        price = parse_price(formatted_price)
        if not (is_parsed(old_price) and is_parsed(price)):
            logger.debug(
                "[%s] Skipping unparseable purchase '%s': %r -> %r",
                region,
                name,
                old_formatted_price,
                formatted_price,
            )
            continue

        if old_price > price:
            discounts.append(Discount(
                type=IN_APP_PURCHASE_DISCOUNT,
                type_name=purchases_label,
                name=name,
                from_price=old_formatted_price,
                to_price=formatted_price,
            ))

    return discounts
