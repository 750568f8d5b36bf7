import os
import sys

from alembic import context
from sqlalchemy import pool

# ------------------------------------------------------------
# Projekt-Root in sys.path eintragen, damit "motri" importierbar ist
# ------------------------------------------------------------
BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if BASE_DIR not in sys.path:
    sys.path.insert(0, BASE_DIR)

from motri.core.config import Settings
from motri.db.database import Base, Database, init_models

# Alle Models importieren, damit Alembic sie kennt
init_models()

config = context.config

# WICHTIG: KEIN fileConfig() aufrufen, Logging kommt aus der App-Konfiguration
target_metadata = Base.metadata


def _database() -> Database:
    url = config.get_main_option("sqlalchemy.url") or Settings().DB_URL
    return Database(url)


def run_migrations_offline() -> None:
    """Migrationen ohne DB-Verbindung (offline)."""
    url = config.get_main_option("sqlalchemy.url") or Settings().DB_URL
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        compare_type=True,
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Migrationen mit echter DB-Verbindung (online)."""
    connectable = _database().engine

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            compare_type=True,
            poolclass=pool.NullPool,
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
