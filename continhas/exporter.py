"""Write the ledger report to a CSV file."""

import asyncio
from datetime import datetime
from pathlib import Path

import structlog

from continhas.domain.export import SEPARATOR, report_frame
from continhas.domain.models import CONTINHAS, AppProfile, YearData

logger = structlog.get_logger()


def export_filename(now: datetime) -> str:
    """Build the report file name (e.g., "financas_2025-03-01_142530.csv")."""
    return f"financas_{now.strftime('%Y-%m-%d_%H%M%S')}.csv"


def unique_path(directory: Path, filename: str) -> Path:
    """Return a path in ``directory`` that does not exist yet.

    Appends _1, _2, ... to the stem when ``filename`` is taken.
    """
    path = directory / filename
    counter = 1
    while path.exists():
        path = directory / f"{Path(filename).stem}_{counter}{Path(filename).suffix}"
        counter += 1
    return path


def export_report(
    years: list[YearData],
    directory: Path,
    profile: AppProfile = CONTINHAS,
    now: datetime | None = None,
) -> Path | None:
    """Write the report as UTF-8 with a byte order mark.

    Args:
        years: Full ledger snapshot.
        directory: Directory to write into (created if missing).
        profile: App profile deciding labels and the due-day column.
        now: Timestamp for the file name. If None, uses the current time.

    Returns:
        Path of the written file, or None if it could not be written.
    """
    now = now or datetime.now()

    try:
        directory.mkdir(parents=True, exist_ok=True)
        path = unique_path(directory, export_filename(now))
        report_frame(years, profile).to_csv(
            path,
            sep=SEPARATOR,
            index=False,
            lineterminator="\n",
            encoding="utf-8-sig",
        )
    except OSError as e:
        logger.error("export_failed", directory=str(directory), error=str(e))
        return None

    logger.info("report_exported", path=str(path))
    return path


async def export_report_async(
    years: list[YearData],
    directory: Path,
    profile: AppProfile = CONTINHAS,
    now: datetime | None = None,
) -> Path | None:
    """Run ``export_report`` in a worker thread."""
    return await asyncio.to_thread(export_report, years, directory, profile, now)
