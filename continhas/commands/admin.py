"""Admin commands for init, backup, reset and configuration."""

import shutil
import sqlite3
import sys
from datetime import datetime
from pathlib import Path

import typer

from continhas.commands.common import console, load_context
from continhas.config import create_default_config, get_config_path, load_config_or_default, set_option
from continhas.store.schema import get_db_path, init_database


def backup_command(
    output_dir: str | None = None,
) -> None:
    """Backup database and configuration files."""
    db_path = get_db_path()
    config_path = get_config_path()

    # Check if files exist
    if not db_path.exists():
        console.print("[red]Database not found. Run 'continhas init' first.[/red]", style="bold")
        sys.exit(1)

    # Determine backup directory
    if output_dir:
        backup_dir = Path(output_dir).expanduser()
    else:
        backup_dir = Path.home() / ".continhas" / "backups"

    # Create timestamp for backup
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")

    db_backup = backup_dir / f"continhas_{timestamp}.db"
    config_backup = backup_dir / f"config_{timestamp}.toml"

    try:
        backup_dir.mkdir(parents=True, exist_ok=True)

        shutil.copy2(db_path, db_backup)
        console.print(f"[green]✓[/green] Database backed up to: {db_backup}")

        if config_path.exists():
            shutil.copy2(config_path, config_backup)
            console.print(f"[green]✓[/green] Config backed up to: {config_backup}")

        console.print("\n[green]Backup complete![/green]", style="bold")
        console.print(f"[dim]Backup directory: {backup_dir}[/dim]")

    except OSError as e:
        console.print(f"[red]Backup failed: {e}[/red]", style="bold")
        sys.exit(1)


def init_command(force: bool = False) -> None:
    """Initialize continhas database and configuration."""
    db_path = get_db_path()
    config_path = get_config_path()

    db_exists = db_path.exists()
    config_exists = config_path.exists()

    # Guard: refuse to overwrite without force flag
    if not force and (db_exists or config_exists):
        console.print("[red]Initialization failed:[/red]", style="bold")
        if db_exists:
            console.print(f"  Database already exists: {db_path}")
        if config_exists:
            console.print(f"  Config already exists: {config_path}")
        console.print("\n[yellow]Use 'continhas init --force' to overwrite[/yellow]")
        sys.exit(1)

    try:
        if force and db_exists:
            db_path.unlink()

        console.print(f"[cyan]Initializing database at {db_path}...[/cyan]")
        init_database(db_path)
        console.print("[green]✓[/green] Database initialized")

        console.print(f"[cyan]Creating config file at {config_path}...[/cyan]")
        create_default_config(config_path)
        console.print("[green]✓[/green] Config file created (permissions: 600)")

        console.print("\n[green]Initialization complete![/green]", style="bold")
        console.print(f"[dim]Database: {db_path}[/dim]")
        console.print(f"[dim]Config: {config_path}[/dim]")

    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)
    except OSError as e:
        console.print(f"[red]Filesystem error: {e}[/red]", style="bold")
        sys.exit(1)


def reset_command(yes: bool = False) -> None:
    """Delete all ledger data and start over with the current year."""
    if not yes and not typer.confirm("Delete ALL years, months and expenses?", default=False):
        console.print("[dim]Cancelled[/dim]")
        return

    context = load_context()
    year_data = context.repository.delete_all()
    console.print(f"[green]✓[/green] All data deleted. Started {year_data.year} with 12 empty months.")


def config_command(key: str | None = None, value: str | None = None) -> None:
    """Show configuration, or set one option."""
    config_path = get_config_path()

    if key is None:
        for option, current in load_config_or_default(config_path).items():
            console.print(f"  [cyan]{option}[/cyan] = {current!r}")
        return

    if value is None:
        console.print(f"[red]Missing value for '{key}'[/red]")
        sys.exit(1)

    try:
        set_option(key, value, config_path)
    except (KeyError, ValueError) as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)
    except OSError as e:
        console.print(f"[red]Filesystem error: {e}[/red]", style="bold")
        sys.exit(1)

    console.print(f"[green]✓[/green] {key} = {value!r}")
