# src/config/logging_config.py

"""Per-run logging for appstore_discounts.

Every tracker run writes to its own file under ``logs/``
(``run_YYYYmmdd_HHMMSS.log``).  The ``appstore_discounts`` logger is the
parent of every module logger, so history updates, detected discounts
and storage errors for a run all end up in that single file.  Only
warnings and errors are echoed to stderr unless ``verbose`` is set.

Old run logs beyond ``Settings.MAX_LOG_FILES`` are pruned, oldest first.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path

from src.config.settings import Settings

LOGGER_NAME = "appstore_discounts"

_FILE_FORMAT = (
    "%(asctime)s | %(levelname)-8s | %(name)s | "
    "%(module)s:%(funcName)s:%(lineno)d | %(message)s"
)

_CONSOLE_FORMAT = "%(asctime)s | %(levelname)-8s | %(message)s"

_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _prune_old_logs(logs_dir: Path, keep: int) -> None:
    """Delete the oldest ``run_*.log`` files beyond *keep*."""
    run_logs = sorted(logs_dir.glob("run_*.log"))
    stale_logs = run_logs[:-keep] if keep > 0 else run_logs
    for stale in stale_logs:
        try:
            stale.unlink()
        except OSError:
            # A log held open elsewhere is left for the next run
            continue


def setup_logging(
    logs_dir: Path | None = None,
    verbose: bool = False,
) -> Path:
    """Attach file and console handlers to the project logger.

    Args:
        logs_dir: Directory for run logs (defaults to ``Settings.LOGS_DIR``).
        verbose: Echo INFO records to stderr instead of WARNING+.

    Returns:
        The path of the log file for this run.
    """
    target_dir = logs_dir or Settings.LOGS_DIR
    target_dir.mkdir(parents=True, exist_ok=True)

    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = target_dir / f"run_{stamp}.log"

    project_logger = logging.getLogger(LOGGER_NAME)
    project_logger.setLevel(logging.DEBUG)

    # Already configured in this process (tests, repeated CLI calls)
    if project_logger.handlers:
        return log_file

    _prune_old_logs(target_dir, Settings.MAX_LOG_FILES - 1)

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter(_FILE_FORMAT, datefmt=_DATE_FORMAT)
    )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.INFO if verbose else logging.WARNING)
    console_handler.setFormatter(
        logging.Formatter(_CONSOLE_FORMAT, datefmt=_DATE_FORMAT)
    )

    project_logger.addHandler(file_handler)
    project_logger.addHandler(console_handler)

    project_logger.info("Run log opened at %s", log_file)
    return log_file
