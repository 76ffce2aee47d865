"""
Reference validation and stock mutation for order workflows.

Every function here runs inside the caller's transaction so the validating
reads and the stock decrement see the same state.
"""
import logging
from typing import Iterable

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from pharmacy.errors import ErrorType
from pharmacy.exceptions import AppException
from pharmacy.models import Customer, Product

logger = logging.getLogger(__name__)

PRODUCT_NOT_FOUND = "Product with id {id} not found"
PRODUCT_DOES_NOT_EXIST = "Product with id {id} does not exist"


def insufficient_stock(product: Product, requested: int) -> AppException:
    return AppException(
        ErrorType.INSUFFICIENT_STOCK,
        f"Insufficient stock for product {product.name}. "
        f"Available: {product.current_stock}, Required: {requested}",
        {
            "product_id": product.id,
            "product_name": product.name,
            "available": product.current_stock,
            "requested": requested,
        }
    )


async def load_products(
    session: AsyncSession,
    product_ids: Iterable[int],
    lock: bool = False
) -> dict[int, Product]:
    """Fetch the distinct products in one query, keyed by id.

    With lock=True the rows are read FOR UPDATE in ascending id order, so two
    orders touching the same products always lock them in the same order.
    """
    ids = sorted(set(product_ids))
    if not ids:
        return {}

    stmt = (
        select(Product)
        .where(Product.id.in_(ids))
        .order_by(Product.id)
        .execution_options(populate_existing=True)
    )
    if lock:
        stmt = stmt.with_for_update()

    result = await session.execute(stmt)
    return {product.id: product for product in result.scalars()}


async def require_products(
    session: AsyncSession,
    product_ids: list[int],
    missing_message: str = PRODUCT_NOT_FOUND,
    lock: bool = True
) -> dict[int, Product]:
    """Fail on the first id, in input order, that has no product row."""
    products = await load_products(session, product_ids, lock=lock)
    for product_id in product_ids:
        if product_id not in products:
            raise AppException(
                ErrorType.REFERENCE_NOT_FOUND,
                missing_message.format(id=product_id),
                {"product_id": product_id}
            )
    return products


async def require_stock(session: AsyncSession, requested: dict[int, int]) -> dict[int, Product]:
    """Check existence and stock for {product_id: total requested quantity}."""
    products = await require_products(session, list(requested), PRODUCT_NOT_FOUND)
    for product_id, quantity in requested.items():
        product = products[product_id]
        if product.current_stock < quantity:
            raise insufficient_stock(product, quantity)
    return products


async def require_customer(session: AsyncSession, customer_id: int | None) -> Customer | None:
    if customer_id is None:
        return None

    customer = await session.get(Customer, customer_id)
    if customer is None:
        raise AppException(
            ErrorType.REFERENCE_NOT_FOUND,
            f"Customer with id {customer_id} not found",
            {"customer_id": customer_id}
        )
    return customer


async def decrement_stock(session: AsyncSession, product_id: int, quantity: int) -> None:
    """Relative, guarded decrement: stock = stock - quantity WHERE stock >= quantity."""
    stmt = (
        update(Product)
        .where(Product.id == product_id, Product.current_stock >= quantity)
        .values(current_stock=Product.current_stock - quantity)
    )
    result = await session.execute(stmt)
    if result.rowcount == 1:
        return

    # Stock moved since validation
    product = await session.get(Product, product_id, populate_existing=True)
    if product is None:
        raise AppException(
            ErrorType.REFERENCE_NOT_FOUND,
            PRODUCT_NOT_FOUND.format(id=product_id),
            {"product_id": product_id}
        )
    logger.warning(f"Stock guard rejected decrement of {quantity} for product {product_id}")
    raise insufficient_stock(product, quantity)
