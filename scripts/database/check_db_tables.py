#!/usr/bin/env python3
"""Report which points-schema tables are present in DATABASE_URL."""

import asyncio
import os
import sys

# Add project root to path
project_root = os.path.dirname(
    os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
)
sys.path.insert(0, project_root)

from libs.common.config import get_settings
from libs.common.logging import configure_logging, get_logger
from libs.db.base import Base
from services.points_service import models as _points_models  # noqa: F401
from sqlalchemy import inspect
from sqlalchemy.engine import make_url
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncConnection, create_async_engine

logger = get_logger(__name__)

REQUIRED_TABLES = frozenset(Base.metadata.tables)


def missing_tables(table_names) -> list[str]:
    """Required tables absent from ``table_names``, sorted."""
    return sorted(REQUIRED_TABLES - set(table_names))


async def fetch_table_names(conn: AsyncConnection) -> list[str]:
    def get_tables(sync_conn):
        inspector = inspect(sync_conn)
        return inspector.get_table_names()

    return await conn.run_sync(get_tables)


async def check_tables() -> int:
    """Return 0 when every table exists, 1 otherwise."""
    settings = get_settings()
    masked_url = make_url(settings.DATABASE_URL).render_as_string(hide_password=True)
    logger.info("Connecting to: %s", masked_url)

    engine = create_async_engine(settings.DATABASE_URL, echo=False)
    try:
        async with engine.connect() as conn:
            tables = await fetch_table_names(conn)
    except OperationalError as e:
        logger.error("Could not connect to %s: %s", masked_url, e)
        return 1
    finally:
        await engine.dispose()

    for table in sorted(tables):
        logger.info("- %s", table)

    missing = missing_tables(tables)
    if missing:
        logger.warning("Missing tables: %s", ", ".join(missing))
        return 1

    logger.info("All points tables are present.")
    return 0


if __name__ == "__main__":
    configure_logging()
    sys.exit(asyncio.run(check_tables()))
