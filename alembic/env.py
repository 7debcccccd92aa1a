import asyncio
from logging.config import fileConfig

from alembic import context
from sqlalchemy.engine import Connection

import fixwise.maintenance.models  # noqa: F401
import fixwise.user.models  # noqa: F401
from fixwise.base.db import engine
from fixwise.base.models import BaseDbModel

if context.config.config_file_name is not None:
    fileConfig(context.config.config_file_name)

target_metadata = BaseDbModel.metadata


def run_migrations_offline() -> None:
    context.configure(
        url=engine.url.render_as_string(hide_password=False),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def _run_migrations(connection: Connection) -> None:
    context.configure(connection=connection, target_metadata=target_metadata)
    with context.begin_transaction():
        context.run_migrations()


async def run_migrations_online() -> None:
    async with engine.connect() as connection:
        await connection.run_sync(_run_migrations)
    await engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_migrations_online())
