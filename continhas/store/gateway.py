"""Persistence gateway: the ledger and settings on top of a blob store.

Saving and loading are best effort. Failures are logged and never reach the
caller: a failed save leaves the in-memory ledger as it was. A ledger that
cannot be decoded loads as an empty one; a store that cannot be read at all
loads as None, so the caller knows not to write over data it never saw.
"""

import sqlite3

import structlog

from continhas.domain.models import NotificationSettings, YearData
from continhas.store.blobs import BlobStore
from continhas.store.codec import (
    CodecError,
    decode_settings,
    decode_years,
    encode_settings,
    encode_years,
)

logger = structlog.get_logger()

YEARS_KEY = "finance_years_data"
SETTINGS_KEY = "finance_notification_settings"

# OSError covers an unreachable database directory
STORE_ERRORS = (sqlite3.Error, OSError)


class PersistenceGateway:
    """Serialize the ledger and notification settings to a blob store."""

    def __init__(self, store: BlobStore) -> None:
        self.store = store

    def save_years(self, years: list[YearData]) -> bool:
        """Persist the full ledger.

        Returns:
            True if the ledger was written.
        """
        try:
            self.store.set(YEARS_KEY, encode_years(years))
        except (CodecError, *STORE_ERRORS) as e:
            logger.error("ledger_save_failed", error=str(e))
            return False
        logger.debug("ledger_saved", years=len(years))
        return True

    def load_years(self) -> list[YearData] | None:
        """Load the ledger.

        Returns:
            The stored years, an empty list when nothing usable is stored, or
            None when the store could not be read.
        """
        try:
            blob = self.store.get(YEARS_KEY)
        except STORE_ERRORS as e:
            logger.error("ledger_unreadable", error=str(e))
            return None

        if blob is None:
            return []

        try:
            years = decode_years(blob)
        except CodecError as e:
            logger.error("ledger_load_failed", error=str(e))
            return []

        logger.debug("ledger_loaded", years=len(years))
        return years

    def save_settings(self, settings: NotificationSettings) -> bool:
        """Persist notification settings.

        Returns:
            True if the settings were written.
        """
        try:
            self.store.set(SETTINGS_KEY, encode_settings(settings))
        except (CodecError, *STORE_ERRORS) as e:
            logger.error("settings_save_failed", error=str(e))
            return False
        return True

    def load_settings(self) -> NotificationSettings:
        """Load notification settings, or the defaults."""
        try:
            blob = self.store.get(SETTINGS_KEY)
        except STORE_ERRORS as e:
            logger.error("settings_load_failed", error=str(e))
            return NotificationSettings()

        if blob is None:
            return NotificationSettings()

        try:
            return decode_settings(blob)
        except CodecError as e:
            logger.error("settings_load_failed", error=str(e))
            return NotificationSettings()

    def delete_all_data(self) -> None:
        """Remove the stored ledger. Settings are kept."""
        try:
            self.store.delete(YEARS_KEY)
        except STORE_ERRORS as e:
            logger.error("ledger_delete_failed", error=str(e))
