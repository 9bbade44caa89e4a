from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlmodel import SQLModel

from receipt_processor.config import AppSettings

# register the receipts table on SQLModel.metadata
import receipt_processor.models  # noqa: F401


def create_engine_from_settings(app_settings: AppSettings) -> AsyncEngine:
    """Creates the async engine backing the receipt store.

    Args:
        app_settings (AppSettings): Settings holding `database_url` and optional
            `database_options` passed to the driver as `connect_args`.

    Returns:
        AsyncEngine: A new engine with its own connection pool.
    """
    return create_async_engine(
        app_settings.database_url, connect_args=app_settings.database_options or {}
    )


async def create_db_and_tables(engine: AsyncEngine) -> None:
    """Creates database tables based on SQLModel metadata.

    This asynchronous function connects to the database using the given engine,
    starts a transaction, and then synchronously creates all tables defined in
    `SQLModel.metadata`. This is typically used during application startup.
    """
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
