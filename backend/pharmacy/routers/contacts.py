"""Customer and supplier routes share one contact shape."""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from pharmacy.db.database import get_session
from pharmacy.models import Customer, Supplier
from pharmacy.schemas.contact import ContactCreate, ContactResponse, ContactUpdate
from pharmacy.services import contact_service


def build_contact_router(model, prefix: str, tag: str) -> APIRouter:
    router = APIRouter(prefix=prefix, tags=[tag])

    @router.post("", response_model=ContactResponse, status_code=201)
    async def create(request: ContactCreate, session: AsyncSession = Depends(get_session)):
        return await contact_service.create_contact(session, model, request)

    @router.get("", response_model=list[ContactResponse])
    async def list_all(search: str | None = None, session: AsyncSession = Depends(get_session)):
        return await contact_service.list_contacts(session, model, search=search)

    @router.get("/{contact_id}", response_model=ContactResponse)
    async def get(contact_id: int, session: AsyncSession = Depends(get_session)):
        return await contact_service.get_contact(session, model, contact_id)

    @router.patch("/{contact_id}", response_model=ContactResponse)
    async def update(contact_id: int, request: ContactUpdate, session: AsyncSession = Depends(get_session)):
        return await contact_service.update_contact(session, model, contact_id, request)

    return router


customers_router = build_contact_router(Customer, "/api/v1/customers", "customers")
suppliers_router = build_contact_router(Supplier, "/api/v1/suppliers", "suppliers")
