"""Tests for continhas.store: schema, blob stores, codec and gateway."""

import sqlite3
from dataclasses import asdict
from pathlib import Path

import pytest

from continhas.domain.models import (
    Expense,
    ExpenseCategory,
    Money,
    NotificationSettings,
    PaymentStatus,
    YearData,
)
from continhas.store.blobs import MemoryBlobStore, SqliteBlobStore
from continhas.store.codec import CodecError, decode_settings, decode_years, encode_settings, encode_years
from continhas.store.gateway import SETTINGS_KEY, YEARS_KEY, PersistenceGateway
from continhas.store.schema import database_exists, init_database


def sample_ledger() -> list[YearData]:
    year = YearData.create(2025)
    year.months[0].income = Money(500000)
    year.months[0].expenses.extend(
        [
            Expense(
                name="Aluguel",
                value=Money(150000),
                category=ExpenseCategory.HOUSING,
                status=PaymentStatus.PAID,
                due_day=5,
            ),
            Expense(name="Café ☕", value=Money(1250), category=ExpenseCategory.FOOD),
        ]
    )
    return [year, YearData.create(2024)]


class FailingStore:
    """Blob store whose every call fails."""

    def get(self, key: str) -> bytes | None:
        raise sqlite3.OperationalError("disk I/O error")

    def set(self, key: str, blob: bytes) -> None:
        raise sqlite3.OperationalError("disk I/O error")

    def delete(self, key: str) -> None:
        raise sqlite3.OperationalError("disk I/O error")


class TestInitDatabase:
    """Tests for init_database."""

    def test_creates_tables(self, tmp_path: Path) -> None:
        """Should create the blobs and reminders tables."""
        db_path = tmp_path / "nested" / "continhas.db"
        init_database(db_path)

        assert database_exists(db_path)
        conn = sqlite3.connect(db_path)
        try:
            tables = {row[0] for row in conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'")}
        finally:
            conn.close()
        assert {"blobs", "reminders"} <= tables

    def test_blobs_columns(self, tmp_path: Path) -> None:
        """Should declare the update timestamp on the blobs table."""
        db_path = tmp_path / "continhas.db"
        init_database(db_path)

        conn = sqlite3.connect(db_path)
        try:
            columns = [row[1] for row in conn.execute("PRAGMA table_info(blobs)")]
        finally:
            conn.close()
        assert columns == ["key", "value", "updated_at"]

    def test_idempotent(self, tmp_path: Path) -> None:
        """Should run twice without error."""
        db_path = tmp_path / "continhas.db"
        init_database(db_path)
        init_database(db_path)


class TestSqliteBlobStore:
    """Tests for SqliteBlobStore."""

    def test_set_get_delete(self, tmp_path: Path) -> None:
        """Should store, overwrite and remove blobs by key."""
        db_path = tmp_path / "continhas.db"
        init_database(db_path)
        store = SqliteBlobStore(db_path)

        assert store.get("k") is None
        store.set("k", b"one")
        store.set("k", b"two")
        assert store.get("k") == b"two"

        store.delete("k")
        assert store.get("k") is None

    def test_missing_schema_raises(self, tmp_path: Path) -> None:
        """Should surface sqlite errors to the caller."""
        store = SqliteBlobStore(tmp_path / "empty.db")
        with pytest.raises(sqlite3.Error):
            store.get("k")


class TestCodec:
    """Tests for the JSON codec."""

    def test_ledger_round_trip(self) -> None:
        """Should rebuild every field, ids included."""
        ledger = sample_ledger()

        decoded = decode_years(encode_years(ledger))

        assert [asdict(year) for year in decoded] == [asdict(year) for year in ledger]

    def test_empty_ledger(self) -> None:
        """Should round trip an empty ledger."""
        assert decode_years(encode_years([])) == []

    def test_accepts_label_values(self) -> None:
        """Should decode categories and statuses stored as labels."""
        blob = (
            b'[{"id": "y", "year": 2025, "months": [{"id": "m", "month": 1, "year": 2025, "income": 0,'
            b' "expenses": [{"id": "e", "name": "CNPJ", "value": 100, "category": "Empresa",'
            b' "status": "Atrasado", "due_day": null}]}]}]'
        )

        expense = decode_years(blob)[0].months[0].expenses[0]

        assert expense.category is ExpenseCategory.BUSINESS
        assert expense.status is PaymentStatus.OVERDUE

    @pytest.mark.parametrize("blob", [b"not json", b"{}", b'[{"year": 2025}]', b"\xff\xfe"])
    def test_invalid_ledger(self, blob: bytes) -> None:
        """Should raise CodecError for malformed documents."""
        with pytest.raises(CodecError):
            decode_years(blob)

    def test_settings_round_trip(self) -> None:
        """Should keep both settings fields."""
        settings = NotificationSettings(is_enabled=True, due_day=20)
        assert decode_settings(encode_settings(settings)) == settings

    def test_settings_defaults_missing_fields(self) -> None:
        """Should fill absent fields with defaults."""
        assert decode_settings(b'{"is_enabled": true}') == NotificationSettings(is_enabled=True, due_day=5)

    @pytest.mark.parametrize("blob", [b"[1, 2]", b'{"due_day": 0}', b'{"due_day": 40}'])
    def test_invalid_settings(self, blob: bytes) -> None:
        """Should raise CodecError for a non-object document or an impossible due day."""
        with pytest.raises(CodecError):
            decode_settings(blob)


class TestPersistenceGateway:
    """Tests for PersistenceGateway."""

    def test_round_trip_on_sqlite(self, tmp_path: Path) -> None:
        """Should load what it saved from the database."""
        db_path = tmp_path / "continhas.db"
        init_database(db_path)
        gateway = PersistenceGateway(SqliteBlobStore(db_path))
        ledger = sample_ledger()

        assert gateway.save_years(ledger) is True
        assert gateway.save_settings(NotificationSettings(is_enabled=True)) is True

        assert [asdict(y) for y in gateway.load_years()] == [asdict(y) for y in ledger]
        assert gateway.load_settings() == NotificationSettings(is_enabled=True)

    def test_defaults_when_empty(self) -> None:
        """Should return an empty ledger and default settings."""
        gateway = PersistenceGateway(MemoryBlobStore())

        assert gateway.load_years() == []
        assert gateway.load_settings() == NotificationSettings()

    def test_corrupt_blobs_fall_back(self) -> None:
        """Should fall back to defaults when stored data cannot be decoded."""
        store = MemoryBlobStore()
        store.set(YEARS_KEY, b"garbage")
        store.set(SETTINGS_KEY, b"garbage")
        gateway = PersistenceGateway(store)

        assert gateway.load_years() == []
        assert gateway.load_settings() == NotificationSettings()

    def test_out_of_range_due_day_falls_back(self) -> None:
        """Should load default settings when the stored due day is impossible."""
        store = MemoryBlobStore()
        store.set(SETTINGS_KEY, b'{"is_enabled": true, "due_day": 0}')

        assert PersistenceGateway(store).load_settings() == NotificationSettings()

    def test_store_failures_swallowed(self) -> None:
        """Should report failure without raising."""
        gateway = PersistenceGateway(FailingStore())

        assert gateway.save_years(sample_ledger()) is False
        assert gateway.save_settings(NotificationSettings()) is False
        assert gateway.load_years() is None
        assert gateway.load_settings() == NotificationSettings()
        gateway.delete_all_data()

    def test_delete_all_keeps_settings(self) -> None:
        """Should remove the ledger but not the settings."""
        gateway = PersistenceGateway(MemoryBlobStore())
        gateway.save_years(sample_ledger())
        gateway.save_settings(NotificationSettings(is_enabled=True))

        gateway.delete_all_data()

        assert gateway.load_years() == []
        assert gateway.load_settings().is_enabled is True
