from datetime import date
from pydantic import BaseModel, Field
from pharmacy.schemas.common import NonEmptyStr, ORMModel, UtcDatetime


class PrescriptionMedicineCreate(BaseModel):
    product_id: int
    dosage: NonEmptyStr
    instructions: str | None = None


class PrescriptionCreate(BaseModel):
    patient_name: NonEmptyStr
    doctor_name: NonEmptyStr
    prescription_date: date
    medicines: list[PrescriptionMedicineCreate] = Field(min_length=1)


class PrescriptionUpdate(BaseModel):
    patient_name: NonEmptyStr | None = None
    doctor_name: NonEmptyStr | None = None
    prescription_date: date | None = None


class PrescriptionMedicineResponse(ORMModel):
    id: int
    prescription_id: int
    product_id: int
    dosage: str
    instructions: str | None = None
    created_at: UtcDatetime


class PrescriptionResponse(ORMModel):
    id: int
    patient_name: str
    doctor_name: str
    prescription_date: date
    created_at: UtcDatetime


class PrescriptionDetail(PrescriptionResponse):
    medicines: list[PrescriptionMedicineResponse]
