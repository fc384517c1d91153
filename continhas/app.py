"""Process-start wiring: build the repository and its collaborators once."""

from dataclasses import dataclass
from pathlib import Path

from continhas.config import load_config_or_default, resolve_export_dir, resolve_profile
from continhas.domain.models import AppProfile
from continhas.ledger import LedgerRepository
from continhas.notifications import SqliteReminderScheduler, policy_for
from continhas.store.blobs import SqliteBlobStore
from continhas.store.gateway import PersistenceGateway
from continhas.store.schema import get_db_path, init_database


@dataclass
class AppContext:
    """Everything a command needs, constructed once per invocation."""

    repository: LedgerRepository
    scheduler: SqliteReminderScheduler
    profile: AppProfile
    export_dir: Path


def build_context(db_path: Path | None = None, config_path: Path | None = None) -> AppContext:
    """Load configuration and the ledger.

    Args:
        db_path: Database file. If None, uses default location.
        config_path: Config file. If None, uses default location.

    Raises:
        sqlite3.Error: If the database schema cannot be created.
        ValueError: If the configured profile is unknown.
    """
    if db_path is None:
        db_path = get_db_path()

    config = load_config_or_default(config_path)
    profile = resolve_profile(config)

    # Idempotent, so a missing database is created on first use
    init_database(db_path)

    scheduler = SqliteReminderScheduler(db_path)
    repository = LedgerRepository.load(
        PersistenceGateway(SqliteBlobStore(db_path)),
        scheduler,
        policy_for(profile),
    )
    return AppContext(
        repository=repository,
        scheduler=scheduler,
        profile=profile,
        export_dir=resolve_export_dir(config),
    )
