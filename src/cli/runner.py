# src/cli/runner.py

"""Headless tracker run: load, update history, write feeds."""

import json
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from src.config.settings import Settings
from src.models.app_info import PRICE_DISCOUNT, RegionDiscountInfo
from src.services.dates import get_date, now_timestamp
from src.services.region_orchestrator import calculate_latest_app_info
from src.storage.errors import StorageError
from src.storage.feed_writer import FeedWriter
from src.storage.history_store import HistoryStore
from src.storage.snapshot_loader import load_region_app_info

logger = logging.getLogger("appstore_discounts.cli")

# Stderr console for status messages so stdout stays clean for JSON
_err = Console(stderr=True)


def resolve_regions(region_csv: str | None) -> list[str]:
    """Map a comma-separated region list to validated region codes.

    Returns ``Settings.REGIONS`` when *region_csv* is ``None``.
    Raises ``SystemExit`` on unknown codes.
    """
    if region_csv is None:
        return list(Settings.REGIONS)

    requested = [
        r.strip().lower() for r in region_csv.split(",") if r.strip()
    ]
    unknown = [r for r in requested if r not in Settings.SUPPORTED_REGIONS]
    if unknown:
        valid = ", ".join(Settings.SUPPORTED_REGIONS)
        _err.print(
            f"[red]Unknown region(s): {', '.join(unknown)}[/red]"
        )
        _err.print(f"[dim]Available: {valid}[/dim]")
        raise SystemExit(1)

    return requested


def discounts_to_dicts(
    region_discount_info: RegionDiscountInfo,
) -> dict[str, list[dict[str, object]]]:
    """Serialise discount events to plain dicts for JSON output."""
    return {
        region: [info.to_dict() for info in infos]
        for region, infos in region_discount_info.items()
    }


def _print_table(region_discount_info: RegionDiscountInfo) -> None:
    """Render a Rich table of this run's discounts to stdout."""
    table = Table(
        title="App Store Discounts",
        show_lines=True,
        title_style="bold cyan",
    )
    table.add_column("Region", style="magenta", width=6)
    table.add_column("App", max_width=40)
    table.add_column("Item", max_width=40)
    table.add_column("From", justify="right", style="dim")
    table.add_column("To", justify="right", style="green")

    for region, infos in region_discount_info.items():
        for info in infos:
            for d in info.discounts:
                item = (
                    d.type_name if d.type == PRICE_DISCOUNT
                    else f"{d.type_name}: {d.name}"
                )
                table.add_row(
                    region,
                    escape(info.track_name[:40]),
                    escape(item),
                    d.from_price,
                    d.to_price,
                )

    Console().print(table)


def run_update(
    input_path: str,
    region_csv: str | None = None,
    timestamp: int | None = None,
    storage_dir: str | None = None,
    feeds_dir: str | None = None,
    output_format: str = "table",
    dry_run: bool = False,
) -> int:
    """Run one tracker pass and return an exit code (0=ok, 1=fail)."""
    regions = resolve_regions(region_csv)
    run_at = timestamp if timestamp is not None else now_timestamp()

    _err.print(
        f"[bold]Updating:[/bold] {', '.join(regions)}  "
        f"[dim]day={get_date(run_at)} tz={Settings.TIMEZONE}[/dim]"
    )

    try:
        store = HistoryStore(Path(storage_dir) if storage_dir else None)
        region_app_info = load_region_app_info(Path(input_path), regions)
        region_storage_app_info = store.load(regions)
    except (StorageError, OSError) as exc:
        logger.error("Load failed: %s", exc, exc_info=True)
        _err.print(f"[red]Load failed: {escape(str(exc))}[/red]")
        return 1

    region_discount_info = calculate_latest_app_info(
        run_at, regions, region_app_info, region_storage_app_info,
    )
    total = sum(len(infos) for infos in region_discount_info.values())

    if dry_run:
        _err.print("[yellow]Dry run: history and feeds not written[/yellow]")
    else:
        # Feeds first: history saved without its feed would hide the
        # day's discounts from every later run
        try:
            writer = FeedWriter(Path(feeds_dir) if feeds_dir else None)
            for path in writer.write_feeds(region_discount_info):
                _err.print(f"[dim]Feed → {escape(str(path))}[/dim]")
            store.save(region_storage_app_info)
        except (StorageError, OSError) as exc:
            logger.error("Save failed: %s", exc, exc_info=True)
            _err.print(f"[red]Save failed: {escape(str(exc))}[/red]")
            return 1

    _err.print(f"[green]✓ {total} discount event(s)[/green]")

    if output_format == "json":
        json.dump(
            discounts_to_dicts(region_discount_info),
            sys.stdout,
            ensure_ascii=False,
            indent=2,
        )
        sys.stdout.write("\n")
    elif total:
        _print_table(region_discount_info)

    return 0
