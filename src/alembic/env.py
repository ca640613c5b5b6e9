from sqlalchemy import create_engine, pool
from sqlmodel import SQLModel

from alembic import context
from src.oroya.core.config import get_settings

# Import all models for metadata
from src.oroya.models import (  # noqa: F401
    ApiLog,
    Entity,
    EntityField,
    EntityRelationship,
    FieldFile,
    FileRecord,
    Project,
)

config = context.config

target_metadata = SQLModel.metadata


def get_url() -> str:
    """Get sync database URL (drop the async driver)."""
    url = config.attributes.get("database_url") or get_settings().database_url
    return url.replace("+aiosqlite", "")


def run_migrations_offline() -> None:
    """Run migrations in 'offline' mode."""
    context.configure(
        url=get_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        render_as_batch=True,
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Run migrations in 'online' mode with sync engine.

    SQLite ALTER TABLE support is limited, so batch mode is used to let
    Alembic recreate tables when needed.
    """
    connectable = create_engine(get_url(), poolclass=pool.NullPool)

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            compare_type=True,
            render_as_batch=True,
        )
        with context.begin_transaction():
            context.run_migrations()

    connectable.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
