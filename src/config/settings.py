# src/config/settings.py

"""Central configuration for the appstore_discounts tracker."""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


def _env_list(name: str, default: str) -> list[str]:
    """Split a comma-separated environment variable into a list."""
    raw = os.getenv(name, default)
    return [item.strip() for item in raw.split(",") if item.strip()]


class Settings:
    """Central configuration for the appstore_discounts tracker."""

    # --- Regions ---
    SUPPORTED_REGIONS: list[str] = ["cn", "hk", "mo", "tw", "us", "tr"]
    REGIONS: list[str] = _env_list(
        "APPSTORE_REGIONS", ",".join(SUPPORTED_REGIONS)
    )

    # --- Day boundaries ---
    TIMEZONE: str = os.getenv("APPSTORE_TIMEZONE", "Asia/Shanghai")
    DATE_FORMAT: str = "%Y-%m-%d"

    # --- Labels (per region) ---
    REGION_IN_APP_PURCHASES_TEXT: dict[str, str] = {
        "cn": "App 内购买项目",
        "hk": "App 內購買",
        "mo": "App 內購買",
        "tw": "App 內購買",
        "us": "In-App Purchases",
        "tr": "Uygulama İçi Satın Almalar",
    }
    REGION_PRICE_TEXT: dict[str, str] = {
        "cn": "应用价格",
        "hk": "應用程式價格",
        "mo": "應用程式價格",
        "tw": "App 價格",
        "us": "App Price",
        "tr": "Uygulama Fiyatı",
    }
    REGION_PRICE_NAME: dict[str, str] = {
        "cn": "价格",
        "hk": "價格",
        "mo": "價格",
        "tw": "價格",
        "us": "Price",
        "tr": "Fiyat",
    }
    DEFAULT_IN_APP_PURCHASES_TEXT: str = "In-App Purchases"
    DEFAULT_PRICE_TEXT: str = "App Price"
    DEFAULT_PRICE_NAME: str = "Price"

    # --- Feeds ---
    FEED_VERSION_URL: str = "https://jsonfeed.org/version/1.1"
    FEED_HOME_URL: str = "https://apps.apple.com/{region}/app"
    FEED_ICON: str = (
        "https://s3.bmp.ovh/imgs/2024/07/20/491487aec936222a.png"
    )
    FEED_DESCRIPTION: str = (
        "AppStore Discounts - price drops of tracked apps"
    )

    # --- Paths ---
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent
    DATA_DIR: Path = Path(
        os.getenv("APPSTORE_DATA_DIR", str(BASE_DIR / "data"))
    )
    STORAGE_DIR: Path = DATA_DIR / "storage"
    FEEDS_DIR: Path = DATA_DIR / "feeds"
    LOGS_DIR: Path = BASE_DIR / "logs"
    MAX_LOG_FILES: int = 30             # Run logs kept on disk


def get_in_app_purchases_text(region: str) -> str:
    """Return the in-app-purchase category label for *region*."""
    return Settings.REGION_IN_APP_PURCHASES_TEXT.get(
        region, Settings.DEFAULT_IN_APP_PURCHASES_TEXT
    )


def get_price_text(region: str) -> str:
    """Return the app-price category label for *region*."""
    return Settings.REGION_PRICE_TEXT.get(
        region, Settings.DEFAULT_PRICE_TEXT
    )


def get_price_name(region: str) -> str:
    """Return the item name used for app-price discounts in *region*."""
    return Settings.REGION_PRICE_NAME.get(
        region, Settings.DEFAULT_PRICE_NAME
    )
