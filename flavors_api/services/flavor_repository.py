"""
Flavors API — Flavor Repository
================================

What:  The five flavor operations, each a single parameterized statement.
Why:   Keeps SQL out of the route handlers and translates store failures
       into typed application errors.
How:   Every method takes the request's AsyncSession explicitly; nothing in
       this module holds a connection between calls.

Statements:
    list_all   SELECT * FROM flavors ORDER BY id
    get_by_id  SELECT * FROM flavors WHERE id = :id
    create     INSERT INTO flavors (...) VALUES (...) RETURNING *
    update     UPDATE flavors SET name, is_favorite, updated_at = now()
               WHERE id = :id RETURNING *
    delete     DELETE FROM flavors WHERE id = :id RETURNING id

Error translation:
    no matching row                     → NotFoundError
    IntegrityError / DataError          → ValidationError
    connection lost / refused           → StoreUnavailableError
    any other SQLAlchemyError           → DatabaseError (action-specific message)

No transaction spans two operations and there is no version check:
concurrent updates to one id are last-write-wins at the store.
"""

import logging
from typing import List, NoReturn

from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.exc import (
    DataError,
    DBAPIError,
    DisconnectionError,
    IntegrityError,
    InterfaceError,
    SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import AsyncSession

from flavors_api.exceptions import (
    DatabaseError,
    NotFoundError,
    StoreUnavailableError,
    ValidationError,
)
from flavors_api.models.flavor import Flavor
from flavors_api.schemas.flavor import FlavorResponse

logger = logging.getLogger(__name__)


def _is_connection_failure(exc: BaseException) -> bool:
    if isinstance(exc, (OSError, InterfaceError, DisconnectionError)):
        return True
    return isinstance(exc, DBAPIError) and exc.connection_invalidated


def _raise_store_error(exc: Exception, action: str, **context) -> NoReturn:
    """
    Maps a driver/ORM exception onto the application hierarchy and raises it.

    `action` is the client-facing message used for generic failures,
    e.g. "Failed to update flavor".
    """
    context["original_error"] = type(exc).__name__
    if _is_connection_failure(exc):
        logger.error("Store unavailable during '%s': %s", action, exc)
        raise StoreUnavailableError(context=context) from exc
    if isinstance(exc, (IntegrityError, DataError)):
        logger.warning("Store rejected data during '%s': %s", action, exc)
        raise ValidationError(message="Invalid flavor data", context=context) from exc
    logger.error("Database error during '%s': %s", action, exc, exc_info=True)
    raise DatabaseError(message=action, context=context) from exc


class FlavorRepository:
    """
    Stateless data-access object for the flavors table.

    Each method issues exactly one statement on the session it is handed and
    returns Pydantic response models, never live ORM instances.
    """

    async def list_all(self, db: AsyncSession) -> List[FlavorResponse]:
        try:
            result = await db.execute(select(Flavor).order_by(Flavor.id))
            rows = result.scalars().all()
        except (SQLAlchemyError, OSError) as e:
            _raise_store_error(e, "Failed to fetch flavors")
        return [FlavorResponse.model_validate(row) for row in rows]

    async def get_by_id(self, db: AsyncSession, flavor_id: int) -> FlavorResponse:
        """
        Fetch one flavor.

        Raises:
            NotFoundError: no row has this id (→ 404)
        """
        try:
            result = await db.execute(select(Flavor).where(Flavor.id == flavor_id))
            row = result.scalar_one_or_none()
        except (SQLAlchemyError, OSError) as e:
            _raise_store_error(e, "Failed to fetch flavor", flavor_id=flavor_id)

        if row is None:
            raise NotFoundError(resource_id=flavor_id)
        return FlavorResponse.model_validate(row)

    async def create(
        self,
        db: AsyncSession,
        name: str,
        is_favorite: bool = False,
    ) -> FlavorResponse:
        """
        Insert a flavor and return it with its store-assigned id and timestamps.

        Both timestamps come from the same `now()` evaluation, so a fresh row
        always has created_at == updated_at.
        """
        now = func.now()
        stmt = (
            insert(Flavor)
            .values(name=name, is_favorite=is_favorite, created_at=now, updated_at=now)
            .returning(Flavor)
        )
        try:
            result = await db.execute(stmt)
            row = result.scalar_one()
        except (SQLAlchemyError, OSError) as e:
            _raise_store_error(e, "Failed to create flavor")

        logger.info("Created flavor %s (%r)", row.id, row.name)
        return FlavorResponse.model_validate(row)

    async def update(
        self,
        db: AsyncSession,
        flavor_id: int,
        name: str,
        is_favorite: bool = False,
    ) -> FlavorResponse:
        """
        Replace name and is_favorite on one row and refresh updated_at.

        created_at is never part of the SET clause.

        Raises:
            NotFoundError: no row has this id (→ 404)
        """
        stmt = (
            update(Flavor)
            .where(Flavor.id == flavor_id)
            .values(name=name, is_favorite=is_favorite, updated_at=func.now())
            .returning(Flavor)
            .execution_options(synchronize_session=False)
        )
        try:
            result = await db.execute(stmt)
            row = result.scalar_one_or_none()
        except (SQLAlchemyError, OSError) as e:
            _raise_store_error(e, "Failed to update flavor", flavor_id=flavor_id)

        if row is None:
            raise NotFoundError(resource_id=flavor_id)
        logger.info("Updated flavor %s", flavor_id)
        return FlavorResponse.model_validate(row)

    async def delete(self, db: AsyncSession, flavor_id: int) -> None:
        """
        Remove one row.

        Raises:
            NotFoundError: no row had this id (→ 404)
        """
        stmt = (
            delete(Flavor)
            .where(Flavor.id == flavor_id)
            .returning(Flavor.id)
            .execution_options(synchronize_session=False)
        )
        try:
            result = await db.execute(stmt)
            deleted_id = result.scalar_one_or_none()
        except (SQLAlchemyError, OSError) as e:
            _raise_store_error(e, "Failed to delete flavor", flavor_id=flavor_id)

        if deleted_id is None:
            raise NotFoundError(resource_id=flavor_id)
        logger.info("Deleted flavor %s", flavor_id)


# ── Singleton Instance ────────────────────────────────────────────────────
# Stateless; the session (the only stateful handle) is passed per call
flavor_repository = FlavorRepository()
