"""
Bars API - Alembic Migration Environment
=========================================

What:  Runs the `users` / `bars` schema migrations for the Bars API.
How:   The target database is whatever `DATABASE_URL` points the app at
       (bars_api.config.settings), so migrations and the running service
       can never disagree. Online runs go through an async engine because
       the app's drivers (asyncpg, aiosqlite) are async-only.
Who:   `alembic upgrade head` from the backend/ directory.

SQLite note:
    SQLite cannot ALTER most constraints in place (the bars.owner_id
    foreign key, the unique index on users.token), so SQLite runs use
    Alembic's batch mode, which rebuilds the table instead.
"""

import asyncio
from logging.config import fileConfig

from alembic import context
from sqlalchemy import pool
from sqlalchemy.ext.asyncio import async_engine_from_config

from bars_api.config import settings
from bars_api.database import Base
# Registers User and Bar on Base.metadata for autogenerate
from bars_api.models import Bar, User  # noqa: F401

config = context.config
config.set_main_option("sqlalchemy.url", settings.database_url)

if config.config_file_name is not None:
    fileConfig(config.config_file_name)


def _configure(**kwargs) -> None:
    context.configure(
        target_metadata=Base.metadata,
        render_as_batch=settings.is_sqlite,
        compare_type=True,
        **kwargs,
    )


def run_migrations_offline() -> None:
    """Print the bars/users DDL as SQL instead of applying it."""
    _configure(
        url=settings.database_url,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def _apply(connection) -> None:
    _configure(connection=connection)
    with context.begin_transaction():
        context.run_migrations()


async def _apply_with_async_engine() -> None:
    # One-shot connection; the app's pool settings don't apply here
    engine = async_engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    try:
        async with engine.connect() as connection:
            await connection.run_sync(_apply)
    finally:
        await engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(_apply_with_async_engine())
