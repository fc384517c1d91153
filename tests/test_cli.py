"""End-to-end tests for the continhas CLI."""

from collections.abc import Iterator
from pathlib import Path

import pytest
import structlog
from typer.testing import CliRunner

from continhas.cli import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    return tmp_path


@pytest.fixture(autouse=True)
def reset_structlog() -> Iterator[None]:
    yield
    structlog.reset_defaults()


def invoke(*args: str, input: str | None = None):
    return runner.invoke(app, list(args), input=input)


class TestLedgerCommands:
    """Tests for the month and expense commands."""

    def test_month_flow(self, tmp_path: Path) -> None:
        """Should create a year, fill a month and show it."""
        assert "Created 2025" in invoke("year", "2025").output
        assert invoke("income", "5.000,00", "-m", "2025-03").exit_code == 0

        result = invoke("add", "Aluguel", "1200,50", "-c", "housing", "-d", "10", "-m", "2025-03")
        assert result.exit_code == 0
        assert "Aluguel" in result.output

        result = invoke("month", "-m", "2025-03")
        assert result.exit_code == 0
        assert "Março 2025" in result.output
        assert "Moradia" in result.output
        assert "R$ 3.799,50" in result.output

    def test_existing_year(self) -> None:
        """Should not recreate a year."""
        invoke("year", "2025")
        assert "already exists" in invoke("year", "2025").output

    def test_missing_year(self) -> None:
        """Should exit with a hint when the year is not tracked."""
        result = invoke("month", "-m", "1999-01")

        assert result.exit_code == 1
        assert "continhas year 1999" in result.output

    def test_invalid_month(self) -> None:
        """Should reject a malformed --month."""
        assert invoke("month", "-m", "march").exit_code == 1

    def test_invalid_expense(self) -> None:
        """Should refuse a zero value."""
        invoke("year", "2025")
        result = invoke("add", "Luz", "0", "-m", "2025-03")

        assert result.exit_code == 1
        assert "greater than zero" in result.output

    def test_pay_edit_delete(self) -> None:
        """Should change and remove expenses by their displayed number."""
        invoke("year", "2025")
        invoke("add", "Luz", "150", "-m", "2025-03")

        assert "Pago" in invoke("pay", "1", "-m", "2025-03").output
        assert "Energia" in invoke("edit", "1", "--name", "Energia", "-m", "2025-03").output
        assert invoke("edit", "2", "--name", "X", "-m", "2025-03").exit_code == 1
        assert "Nothing deleted" in invoke("delete", "5", "-m", "2025-03").output
        assert "Deleted Energia" in invoke("delete", "1", "-m", "2025-03").output
        assert "Nenhuma conta" in invoke("month", "-m", "2025-03").output

    def test_copy_previous_month(self) -> None:
        """Should copy last month's expenses as pending."""
        invoke("year", "2025")
        invoke("add", "Internet", "99,90", "-s", "paid", "-m", "2025-02")

        assert "Copied 1 expense(s)" in invoke("copy", "-m", "2025-03").output
        assert "Pendente" in invoke("month", "-m", "2025-03").output

    def test_summary(self) -> None:
        """Should render the yearly table and totals."""
        invoke("year", "2025")
        invoke("income", "1000", "-m", "2025-01")

        result = invoke("summary", "-y", "2025")

        assert result.exit_code == 0
        assert "Resumo 2025" in result.output
        assert "R$ 1.000,00" in result.output


class TestExportCommand:
    """Tests for the export command."""

    def test_writes_file(self, tmp_path: Path) -> None:
        """Should write one CSV file into the output directory."""
        invoke("year", "2025")
        invoke("add", "Luz", "150", "-m", "2025-03")
        out = tmp_path / "out"

        result = invoke("export", "-o", str(out))

        assert result.exit_code == 0
        [path] = list(out.glob("financas_*.csv"))
        assert "Luz;150,00" in path.read_text(encoding="utf-8-sig")


class TestAdminCommands:
    """Tests for init, config and reset."""

    def test_init_then_refuse(self) -> None:
        """Should initialize once and refuse a second time without --force."""
        assert invoke("init").exit_code == 0
        assert invoke("init").exit_code == 1
        assert invoke("init", "--force").exit_code == 0

    def test_config_set_and_show(self) -> None:
        """Should set a valid option and reject unknown ones."""
        assert invoke("config", "profile", "financeapp").exit_code == 0
        assert "financeapp" in invoke("config").output
        assert invoke("config", "profile", "bogus").exit_code == 1
        assert invoke("config", "colour", "blue").exit_code == 1

    def test_reset(self) -> None:
        """Should drop every year after confirmation."""
        invoke("year", "1999")

        assert "Cancelled" in invoke("reset", input="n\n").output
        assert "1999" in invoke("years").output

        result = invoke("reset", "--yes")
        assert result.exit_code == 0
        assert "1999" not in invoke("years").output


class TestNotifyCommands:
    """Tests for reminder settings."""

    def test_enable_and_show(self) -> None:
        """Should persist the enabled flag."""
        assert "enabled" in invoke("notify", "--enable").output
        assert "enabled" in invoke("notify").output

    def test_invalid_day(self) -> None:
        """Should reject a day outside 1-31."""
        assert invoke("notify", "--day", "40").exit_code == 1

    def test_global_profile_schedules_monthly(self) -> None:
        """Should list the monthly reminder under the financeapp profile."""
        invoke("config", "profile", "financeapp")
        invoke("notify", "--enable", "--day", "7")

        result = invoke("reminders", "--all")

        assert result.exit_code == 0
        assert "Lembrete" in result.output
        assert "↻" in result.output
