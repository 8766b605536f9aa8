"""
Alembic Migration Environment
===============================

What:  Runs the books schema migrations against the configured database.
How:   The URL comes from bookshelf settings (DATABASE_URL), never from
       alembic.ini. Online migrations reuse bookshelf.database.build_engine
       with a NullPool, so migrations see the same engine options as the
       service. SQLite targets run in batch mode, since SQLite cannot ALTER
       most column properties in place.
"""

import asyncio
from logging.config import fileConfig

from sqlalchemy import pool
from sqlalchemy.engine import Connection, make_url

from alembic import context

from bookshelf.config import settings
from bookshelf.database import Base, build_engine

# Registers the books table on Base.metadata for --autogenerate
from bookshelf.models.book import Book  # noqa: F401

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata

database_url = settings.database_url
render_as_batch = make_url(database_url).get_backend_name() == "sqlite"


def run_migrations_offline() -> None:
    """Emit migration SQL to stdout without connecting to the database."""
    context.configure(
        url=database_url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        compare_type=True,
        render_as_batch=render_as_batch,
    )

    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection: Connection) -> None:
    # compare_type lets autogenerate see column widening such as INTEGER → BIGINT
    context.configure(
        connection=connection,
        target_metadata=target_metadata,
        compare_type=True,
        render_as_batch=render_as_batch,
    )

    with context.begin_transaction():
        context.run_migrations()


async def run_async_migrations() -> None:
    """Connect with the service's async engine and apply pending migrations."""
    engine = build_engine(database_url, poolclass=pool.NullPool)

    async with engine.connect() as connection:
        await connection.run_sync(do_run_migrations)

    await engine.dispose()


def run_migrations_online() -> None:
    asyncio.run(run_async_migrations())


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
