from pharmacy.models.product import Product
from pharmacy.models.contact import Customer, Supplier
from pharmacy.models.sale import SalesTransaction, SalesTransactionItem
from pharmacy.models.prescription import Prescription, PrescriptionMedicine

__all__ = [
    "Product",
    "Customer",
    "Supplier",
    "SalesTransaction",
    "SalesTransactionItem",
    "Prescription",
    "PrescriptionMedicine",
]
