"""Tests for continhas.exporter file output."""

import asyncio
from datetime import datetime
from pathlib import Path

from continhas.domain.models import FINANCE_APP, Expense, ExpenseCategory, Money, PaymentStatus, YearData
from continhas.exporter import export_filename, export_report, export_report_async, unique_path

NOW = datetime(2025, 3, 1, 14, 25, 30)


def ledger() -> list[YearData]:
    year = YearData.create(2025)
    march = year.months[2]
    march.income = Money(500000)
    march.expenses.append(
        Expense(name="A", value=Money(120050), category=ExpenseCategory.HOUSING, status=PaymentStatus.PAID, due_day=10)
    )
    return [year]


class TestExportFilename:
    """Tests for export_filename and unique_path."""

    def test_timestamped_name(self) -> None:
        """Should embed the date and time."""
        assert export_filename(NOW) == "financas_2025-03-01_142530.csv"

    def test_free_name_unchanged(self, tmp_path: Path) -> None:
        """Should keep a name nobody uses."""
        assert unique_path(tmp_path, "report.csv") == tmp_path / "report.csv"

    def test_suffix_on_collision(self, tmp_path: Path) -> None:
        """Should append a counter until the name is free."""
        (tmp_path / "report.csv").write_text("x")
        (tmp_path / "report_1.csv").write_text("x")

        assert unique_path(tmp_path, "report.csv") == tmp_path / "report_2.csv"


class TestExportReport:
    """Tests for export_report."""

    def test_writes_bom_and_rows(self, tmp_path: Path) -> None:
        """Should write UTF-8 with a byte order mark."""
        path = export_report(ledger(), tmp_path / "out", now=NOW)

        assert path == tmp_path / "out" / "financas_2025-03-01_142530.csv"
        data = path.read_bytes()
        assert data.startswith(b"\xef\xbb\xbf")
        lines = data.decode("utf-8-sig").splitlines()
        assert lines == [
            "Ano;Mes;Entrada;Total Gastos;Saldo;Conta;Valor;Categoria;Status;Vencimento",
            "2025;Março;5000,00;1200,50;3799,50;A;1200,50;Moradia;Pago;Dia 10",
        ]

    def test_second_export_does_not_overwrite(self, tmp_path: Path) -> None:
        """Should pick a new name when exporting twice in the same second."""
        first = export_report(ledger(), tmp_path, now=NOW)
        second = export_report(ledger(), tmp_path, now=NOW)

        assert first is not None and second is not None
        assert first != second
        assert second.name == "financas_2025-03-01_142530_1.csv"

    def test_profile_layout(self, tmp_path: Path) -> None:
        """Should follow the profile's columns."""
        path = export_report(ledger(), tmp_path, FINANCE_APP, now=NOW)

        assert path is not None
        header = path.read_text(encoding="utf-8-sig").splitlines()[0]
        assert not header.endswith("Vencimento")

    def test_unwritable_directory(self, tmp_path: Path) -> None:
        """Should return None when the directory cannot be created."""
        blocker = tmp_path / "file"
        blocker.write_text("x")

        assert export_report(ledger(), blocker, now=NOW) is None

    def test_async_variant(self, tmp_path: Path) -> None:
        """Should produce the same file from a worker thread."""
        path = asyncio.run(export_report_async(ledger(), tmp_path, now=NOW))

        assert path is not None
        assert path.exists()
