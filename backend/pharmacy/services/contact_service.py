"""
Customers and suppliers: plain single-row CRUD over the same contact fields.
"""
import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from pharmacy.models import Customer, Supplier
from pharmacy.schemas.contact import ContactCreate, ContactUpdate
from pharmacy.services.common import apply_updates, get_or_404, like_pattern, unit_of_work

logger = logging.getLogger(__name__)

ContactModel = type[Customer] | type[Supplier]


async def create_contact(session: AsyncSession, model: ContactModel, data: ContactCreate):
    contact = model(**data.model_dump())
    async with unit_of_work(session, f"create {model.__name__.lower()}"):
        session.add(contact)
        await session.flush()

    logger.info(f"{model.__name__} {contact.id} created: {contact.name}")
    return contact


async def list_contacts(session: AsyncSession, model: ContactModel, search: str | None = None) -> list:
    stmt = select(model).order_by(model.name, model.id)
    if search:
        stmt = stmt.where(model.name.ilike(like_pattern(search), escape="\\"))

    async with unit_of_work(session, f"list {model.__tablename__}"):
        result = await session.execute(stmt.execution_options(populate_existing=True))
        return list(result.scalars())


async def get_contact(session: AsyncSession, model: ContactModel, contact_id: int):
    async with unit_of_work(session, f"get {model.__name__.lower()}"):
        return await get_or_404(session, model, contact_id, model.__name__)


async def update_contact(session: AsyncSession, model: ContactModel, contact_id: int, changes: ContactUpdate):
    """Partial update; an empty body returns the row unchanged."""
    async with unit_of_work(session, f"update {model.__name__.lower()}"):
        contact = await get_or_404(session, model, contact_id, model.__name__)
        updated = apply_updates(contact, changes)

    if updated:
        logger.info(f"{model.__name__} {contact_id} updated: {', '.join(sorted(updated))}")
    return contact
