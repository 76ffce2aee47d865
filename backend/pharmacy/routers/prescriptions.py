from datetime import date

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from pharmacy.db.database import get_session
from pharmacy.schemas.prescription import (
    PrescriptionCreate,
    PrescriptionDetail,
    PrescriptionResponse,
    PrescriptionUpdate,
)
from pharmacy.services import prescription_service

router = APIRouter(prefix="/api/v1/prescriptions", tags=["prescriptions"])


@router.post("", response_model=PrescriptionResponse, status_code=201)
async def create_prescription(request: PrescriptionCreate, session: AsyncSession = Depends(get_session)):
    return await prescription_service.create_prescription(
        session,
        request.patient_name,
        request.doctor_name,
        request.prescription_date,
        request.medicines
    )


@router.get("", response_model=list[PrescriptionResponse])
async def list_prescriptions(
    patient_name: str | None = None,
    doctor_name: str | None = None,
    start_date: date | None = None,
    end_date: date | None = None,
    session: AsyncSession = Depends(get_session)
):
    return await prescription_service.list_prescriptions(
        session,
        patient_name=patient_name,
        doctor_name=doctor_name,
        start_date=start_date,
        end_date=end_date
    )


@router.get("/{prescription_id}", response_model=PrescriptionDetail)
async def get_prescription(prescription_id: int, session: AsyncSession = Depends(get_session)):
    return await prescription_service.get_prescription(session, prescription_id)


@router.patch("/{prescription_id}", response_model=PrescriptionResponse)
async def update_prescription(
    prescription_id: int,
    request: PrescriptionUpdate,
    session: AsyncSession = Depends(get_session)
):
    return await prescription_service.update_prescription(session, prescription_id, request)
