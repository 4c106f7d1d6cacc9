"""Alembic environment for the payment database."""

from logging.config import fileConfig

from sqlalchemy import pool

from alembic import context

from payinit.common.config import settings
from payinit.common.db import Base, make_engine
from payinit.services.payment.models import Payment  # noqa: F401  registers the table

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def run_migrations_offline() -> None:
    """Run migrations in 'offline' mode - generates SQL script."""
    context.configure(
        url=settings.database_url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Run migrations against the configured DATABASE_URL."""
    connectable = make_engine(poolclass=pool.NullPool)

    with connectable.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata)

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
