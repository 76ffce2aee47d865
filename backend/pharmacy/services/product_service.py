import logging
from datetime import date

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from pharmacy.config import Config
from pharmacy.exceptions import invalid_input
from pharmacy.models import Product
from pharmacy.schemas.product import ProductCreate, ProductUpdate
from pharmacy.services.common import apply_updates, get_or_404, unit_of_work

logger = logging.getLogger(__name__)


def _check_expiration(expiration_date: date) -> None:
    if Config.EXPIRY_CHECK_ENABLED and expiration_date < date.today():
        raise invalid_input("Expiration date must be in the future", expiration_date=expiration_date)


async def create_product(session: AsyncSession, data: ProductCreate) -> Product:
    _check_expiration(data.expiration_date)

    product = Product(**data.model_dump())
    async with unit_of_work(session, "create product"):
        session.add(product)
        await session.flush()

    logger.info(f"Product {product.id} created: {product.name} (stock {product.current_stock})")
    return product


async def list_products(
    session: AsyncSession,
    include_expired: bool = False,
    low_stock_threshold: int | None = None,
    low_stock_only: bool = False
) -> list[Product]:
    """Products ordered by name.

    Expired products are hidden unless include_expired is set. With
    low_stock_only and a threshold, only products below the threshold are
    returned.
    """
    stmt = select(Product).order_by(Product.name, Product.id)

    if not include_expired:
        stmt = stmt.where(Product.expiration_date >= date.today())
    if low_stock_only and low_stock_threshold is not None:
        stmt = stmt.where(Product.current_stock < low_stock_threshold)

    async with unit_of_work(session, "list products"):
        result = await session.execute(stmt.execution_options(populate_existing=True))
        return list(result.scalars())


async def get_product(session: AsyncSession, product_id: int) -> Product:
    async with unit_of_work(session, "get product"):
        return await get_or_404(session, Product, product_id, "Product")


async def update_product(session: AsyncSession, product_id: int, changes: ProductUpdate) -> Product:
    async with unit_of_work(session, "update product"):
        product = await get_or_404(session, Product, product_id, "Product")
        updated = apply_updates(product, changes)

    if updated:
        logger.info(f"Product {product_id} updated: {', '.join(sorted(updated))}")
    return product
