from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from pharmacy.db.database import get_session
from pharmacy.schemas.sale import SalesTransactionCreate, SalesTransactionDetail, SalesTransactionResponse
from pharmacy.services import sales_service

router = APIRouter(prefix="/api/v1/sales-transactions", tags=["sales"])


@router.post("", response_model=SalesTransactionResponse, status_code=201)
async def create_sales_transaction(
    request: SalesTransactionCreate,
    session: AsyncSession = Depends(get_session)
):
    return await sales_service.create_sales_transaction(session, request.customer_id, request.items)


@router.get("", response_model=list[SalesTransactionResponse])
async def list_sales_transactions(
    customer_id: int | None = None,
    session: AsyncSession = Depends(get_session)
):
    return await sales_service.list_sales_transactions(session, customer_id=customer_id)


@router.get("/{transaction_id}", response_model=SalesTransactionDetail)
async def get_sales_transaction(transaction_id: int, session: AsyncSession = Depends(get_session)):
    return await sales_service.get_sales_transaction(session, transaction_id)
