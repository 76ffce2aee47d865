"""
Sales transactions: atomic creation with stock decrement, plus read paths.
"""
import logging
from typing import Any, Iterable

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from pharmacy.exceptions import AppException, not_found
from pharmacy.models import SalesTransaction, SalesTransactionItem
from pharmacy.services.common import unit_of_work
from pharmacy.services.inventory import decrement_stock, require_customer, require_stock
from pharmacy.services.order_builder import build_sale

logger = logging.getLogger(__name__)


async def create_sales_transaction(
    session: AsyncSession,
    customer_id: int | None,
    items: Iterable[Any]
) -> SalesTransaction:
    """Create a sale and its items and take the sold quantities out of stock.

    Validation runs again inside the write transaction, against row-locked
    products, so nothing decided by an earlier read is trusted. Either the
    transaction row, every item row and every stock decrement commit
    together, or none of them do.

    Raises:
        AppException: INVALID_INPUT, REFERENCE_NOT_FOUND, INSUFFICIENT_STOCK
        or STORE_FAILURE.
    """
    order = build_sale(items)

    try:
        async with unit_of_work(session, "create sales transaction"):
            await require_customer(session, customer_id)
            await require_stock(session, order.quantities_by_product())

            transaction = SalesTransaction(
                total_amount=order.total,
                customer_id=customer_id,
                items=[
                    SalesTransactionItem(
                        product_id=line.product_id,
                        quantity=line.quantity,
                        unit_price=line.unit_price,
                        subtotal=line.subtotal
                    )
                    for line in order.lines
                ]
            )
            session.add(transaction)
            await session.flush()  # Get IDs

            for line in order.lines:
                await decrement_stock(session, line.product_id, line.quantity)
    except AppException as e:
        logger.warning(f"Sales transaction rejected: {e.message}")
        raise

    logger.info(
        f"Sales transaction {transaction.id} committed: "
        f"{len(order.lines)} item(s), total {order.total}"
    )
    return transaction


async def list_sales_transactions(
    session: AsyncSession,
    customer_id: int | None = None
) -> list[SalesTransaction]:
    """Newest first."""
    stmt = select(SalesTransaction).order_by(
        SalesTransaction.transaction_date.desc(),
        SalesTransaction.id.desc()
    )
    if customer_id is not None:
        stmt = stmt.where(SalesTransaction.customer_id == customer_id)

    async with unit_of_work(session, "list sales transactions"):
        result = await session.execute(stmt)
        return list(result.scalars())


async def get_sales_transaction(session: AsyncSession, transaction_id: int) -> SalesTransaction:
    stmt = (
        select(SalesTransaction)
        .where(SalesTransaction.id == transaction_id)
        .options(selectinload(SalesTransaction.items))
        .execution_options(populate_existing=True)
    )
    async with unit_of_work(session, "get sales transaction"):
        transaction = (await session.execute(stmt)).scalar_one_or_none()

    if transaction is None:
        raise not_found(f"Sales transaction with id {transaction_id} not found", id=transaction_id)
    return transaction
