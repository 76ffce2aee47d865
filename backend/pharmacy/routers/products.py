from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from pharmacy.db.database import get_session
from pharmacy.schemas.product import ProductCreate, ProductResponse, ProductUpdate
from pharmacy.services import product_service

router = APIRouter(prefix="/api/v1/products", tags=["products"])


@router.post("", response_model=ProductResponse, status_code=201)
async def create_product(request: ProductCreate, session: AsyncSession = Depends(get_session)):
    return await product_service.create_product(session, request)


@router.get("", response_model=list[ProductResponse])
async def list_products(
    include_expired: bool = False,
    low_stock_threshold: int | None = None,
    low_stock_only: bool = False,
    session: AsyncSession = Depends(get_session)
):
    return await product_service.list_products(
        session,
        include_expired=include_expired,
        low_stock_threshold=low_stock_threshold,
        low_stock_only=low_stock_only
    )


@router.get("/{product_id}", response_model=ProductResponse)
async def get_product(product_id: int, session: AsyncSession = Depends(get_session)):
    return await product_service.get_product(session, product_id)


@router.patch("/{product_id}", response_model=ProductResponse)
async def update_product(product_id: int, request: ProductUpdate, session: AsyncSession = Depends(get_session)):
    return await product_service.update_product(session, product_id, request)
