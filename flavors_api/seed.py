"""
Flavors API — Schema Initializer
=================================

What:  Drops, recreates and seeds the flavors table.
When:  Only when asked: `flavors-api reset-db`, or at boot with
       RESET_DB_ON_STARTUP=true. Every reset wipes all stored flavors.
How:   One transaction on the given engine: DROP TABLE IF EXISTS,
       CREATE TABLE, then a single multi-row INSERT of the seed rows.
       A single attempt; no retry.
"""

import logging
from typing import List, Tuple

from sqlalchemy import insert
from sqlalchemy.ext.asyncio import AsyncEngine

from flavors_api.database import Base
from flavors_api.models.flavor import Flavor

logger = logging.getLogger(__name__)

SEED_FLAVORS: List[Tuple[str, bool]] = [
    ("Vanilla", True),
    ("Chocolate", False),
    ("Strawberry", True),
    ("Mint Chocolate", False),
]


async def create_schema(engine: AsyncEngine) -> None:
    """Creates the flavors table if it is missing. Existing rows are kept."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all, tables=[Flavor.__table__])
    logger.info("Ensured 'flavors' table exists.")


async def reset_schema(engine: AsyncEngine) -> int:
    """
    Destructively rebuild the flavors table and insert the seed rows.

    Returns:
        Number of seed rows inserted.

    Raises:
        Whatever the driver raises; callers decide whether that is fatal.
    """
    logger.info("Setting up the database...")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all, tables=[Flavor.__table__])
        await conn.run_sync(Base.metadata.create_all, tables=[Flavor.__table__])
        logger.info("Created 'flavors' table successfully.")

        await conn.execute(
            insert(Flavor.__table__).values(
                [{"name": name, "is_favorite": fav} for name, fav in SEED_FLAVORS]
            )
        )
    logger.info("Seeded 'flavors' table with %d rows.", len(SEED_FLAVORS))
    return len(SEED_FLAVORS)


async def initialize_on_startup(engine: AsyncEngine) -> bool:
    """
    Boot-time wrapper around `reset_schema`.

    Failures are logged and swallowed so the server still starts; requests
    may then fail against a missing or partial table.

    Returns:
        True when the reset completed.
    """
    try:
        await reset_schema(engine)
    except Exception as e:
        logger.error("Error setting up the database: %s", e, exc_info=True)
        return False
    return True
