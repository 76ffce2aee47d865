"""
Prescriptions: atomic creation with their medicine lines, listing and updates.
"""
import logging
from datetime import date
from typing import Any, Iterable

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from pharmacy.exceptions import AppException, not_found
from pharmacy.models import Prescription, PrescriptionMedicine
from pharmacy.schemas.prescription import PrescriptionUpdate
from pharmacy.services.common import apply_updates, get_or_404, like_pattern, unit_of_work
from pharmacy.services.inventory import PRODUCT_DOES_NOT_EXIST, require_products
from pharmacy.services.order_builder import check_prescription

logger = logging.getLogger(__name__)


async def create_prescription(
    session: AsyncSession,
    patient_name: str,
    doctor_name: str,
    prescription_date: date,
    medicines: Iterable[Any]
) -> Prescription:
    """Create a prescription together with all of its medicines.

    Referenced products are checked once, inside the write transaction.
    Stock is not touched.

    Raises:
        AppException: INVALID_INPUT, REFERENCE_NOT_FOUND or STORE_FAILURE.
    """
    medicines = check_prescription(patient_name, doctor_name, medicines)

    try:
        async with unit_of_work(session, "create prescription"):
            await require_products(
                session,
                [medicine.product_id for medicine in medicines],
                PRODUCT_DOES_NOT_EXIST
            )

            prescription = Prescription(
                patient_name=patient_name,
                doctor_name=doctor_name,
                prescription_date=prescription_date,
                medicines=[
                    PrescriptionMedicine(
                        product_id=medicine.product_id,
                        dosage=medicine.dosage,
                        instructions=medicine.instructions
                    )
                    for medicine in medicines
                ]
            )
            session.add(prescription)
            await session.flush()
    except AppException as e:
        logger.warning(f"Prescription rejected: {e.message}")
        raise

    logger.info(f"Prescription {prescription.id} committed with {len(medicines)} medicine(s)")
    return prescription


async def list_prescriptions(
    session: AsyncSession,
    patient_name: str | None = None,
    doctor_name: str | None = None,
    start_date: date | None = None,
    end_date: date | None = None
) -> list[Prescription]:
    """Case-insensitive partial name matches, inclusive date range, newest first."""
    stmt = select(Prescription)

    if patient_name:
        stmt = stmt.where(Prescription.patient_name.ilike(like_pattern(patient_name), escape="\\"))
    if doctor_name:
        stmt = stmt.where(Prescription.doctor_name.ilike(like_pattern(doctor_name), escape="\\"))
    if start_date:
        stmt = stmt.where(Prescription.prescription_date >= start_date)
    if end_date:
        stmt = stmt.where(Prescription.prescription_date <= end_date)

    stmt = stmt.order_by(Prescription.prescription_date.desc(), Prescription.id.desc())

    async with unit_of_work(session, "list prescriptions"):
        result = await session.execute(stmt)
        return list(result.scalars())


async def get_prescription(session: AsyncSession, prescription_id: int) -> Prescription:
    stmt = (
        select(Prescription)
        .where(Prescription.id == prescription_id)
        .options(selectinload(Prescription.medicines))
        .execution_options(populate_existing=True)
    )
    async with unit_of_work(session, "get prescription"):
        prescription = (await session.execute(stmt)).scalar_one_or_none()

    if prescription is None:
        raise not_found(f"Prescription with id {prescription_id} not found", id=prescription_id)
    return prescription


async def update_prescription(
    session: AsyncSession,
    prescription_id: int,
    changes: PrescriptionUpdate
) -> Prescription:
    async with unit_of_work(session, "update prescription"):
        prescription = await get_or_404(session, Prescription, prescription_id, "Prescription")
        updated = apply_updates(prescription, changes)

    if updated:
        logger.info(f"Prescription {prescription_id} updated: {', '.join(sorted(updated))}")
    return prescription
