from pydantic import BaseModel, Field
from pharmacy.schemas.common import EMAIL_PATTERN, NonEmptyStr, ORMModel, UtcDatetime


class ContactCreate(BaseModel):
    name: NonEmptyStr
    phone: str | None = Field(default=None, max_length=50)
    email: str | None = Field(default=None, max_length=255, pattern=EMAIL_PATTERN)
    address: str | None = None


class ContactUpdate(BaseModel):
    name: NonEmptyStr | None = None
    phone: str | None = Field(default=None, max_length=50)
    email: str | None = Field(default=None, max_length=255, pattern=EMAIL_PATTERN)
    address: str | None = None


class ContactResponse(ORMModel):
    id: int
    name: str
    phone: str | None = None
    email: str | None = None
    address: str | None = None
    created_at: UtcDatetime


# Customers and suppliers carry the same contact fields
CustomerCreate = ContactCreate
CustomerUpdate = ContactUpdate
CustomerResponse = ContactResponse
SupplierCreate = ContactCreate
SupplierUpdate = ContactUpdate
SupplierResponse = ContactResponse
