"""Reusable migration runner for both production and tests."""

import asyncio
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from alembic import command
from alembic.config import Config

ALEMBIC_INI = Path(__file__).resolve().parents[4] / "alembic.ini"


def get_alembic_config(database_url: str | None = None) -> Config:
    """Build the Alembic config, optionally pointing at another database."""
    alembic_cfg = Config(str(ALEMBIC_INI))
    if database_url:
        alembic_cfg.attributes["database_url"] = database_url
    return alembic_cfg


def run_migrations_sync(database_url: str | None = None) -> None:
    """Run Alembic migrations synchronously up to head."""
    command.upgrade(get_alembic_config(database_url), "head")


async def run_migrations_async(database_url: str | None = None) -> None:
    """Run Alembic migrations from async context.

    Uses ThreadPoolExecutor to avoid event loop conflicts with Alembic.
    """
    loop = asyncio.get_running_loop()
    with ThreadPoolExecutor() as pool:
        await loop.run_in_executor(pool, run_migrations_sync, database_url)
