from datetime import date
from pydantic import BaseModel, Field
from pharmacy.schemas.common import MoneyOut, NonEmptyStr, ORMModel, PositiveMoney, UtcDatetime


class ProductCreate(BaseModel):
    name: NonEmptyStr
    current_stock: int = Field(ge=0)
    selling_price: PositiveMoney
    purchase_price: PositiveMoney
    expiration_date: date


class ProductUpdate(BaseModel):
    name: NonEmptyStr | None = None
    current_stock: int | None = Field(default=None, ge=0)
    selling_price: PositiveMoney | None = None
    purchase_price: PositiveMoney | None = None
    expiration_date: date | None = None


class ProductResponse(ORMModel):
    id: int
    name: str
    current_stock: int
    selling_price: MoneyOut
    purchase_price: MoneyOut
    expiration_date: date
    created_at: UtcDatetime
