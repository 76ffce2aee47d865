from pydantic import BaseModel, Field
from pharmacy.schemas.common import MoneyOut, ORMModel, PositiveMoney, UtcDatetime


class SaleItemCreate(BaseModel):
    product_id: int
    quantity: int = Field(gt=0)
    unit_price: PositiveMoney


class SalesTransactionCreate(BaseModel):
    customer_id: int | None = None
    items: list[SaleItemCreate] = Field(min_length=1)


class SalesTransactionItemResponse(ORMModel):
    id: int
    transaction_id: int
    product_id: int
    quantity: int
    unit_price: MoneyOut
    subtotal: MoneyOut
    created_at: UtcDatetime


class SalesTransactionResponse(ORMModel):
    id: int
    transaction_date: UtcDatetime
    total_amount: MoneyOut
    customer_id: int | None = None
    created_at: UtcDatetime


class SalesTransactionDetail(SalesTransactionResponse):
    items: list[SalesTransactionItemResponse]
