import logging
from contextlib import asynccontextmanager
from typing import Any

from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from pharmacy.errors import ErrorType
from pharmacy.exceptions import AppException, invalid_input, not_found

logger = logging.getLogger(__name__)


@asynccontextmanager
async def unit_of_work(session: AsyncSession, action: str):
    """Run one operation in one transaction.

    Commits when the block exits normally and rolls back on any exception.
    Driver and ORM errors are re-raised as STORE_FAILURE; AppException
    passes through unchanged.
    """
    try:
        async with session.begin():
            yield session
    except SQLAlchemyError as e:
        logger.error(f"Failed to {action}: {e}")
        raise AppException(ErrorType.STORE_FAILURE, f"Failed to {action}") from e


async def get_or_404(session: AsyncSession, model: type, obj_id: int, label: str) -> Any:
    obj = await session.get(model, obj_id, populate_existing=True)
    if obj is None:
        raise not_found(f"{label} with id {obj_id} not found", id=obj_id)
    return obj


def apply_updates(obj: Any, changes: BaseModel) -> dict[str, Any]:
    """Copy the fields the client actually sent onto obj."""
    values = changes.model_dump(exclude_unset=True)
    for field, value in values.items():
        if value is None and not obj.__table__.c[field].nullable:
            raise invalid_input(f"{field} cannot be null", field=field)
    for field, value in values.items():
        setattr(obj, field, value)
    return values


def like_pattern(term: str) -> str:
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"
