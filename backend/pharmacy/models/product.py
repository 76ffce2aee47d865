from sqlalchemy import Column, Integer, String, Numeric, Date, DateTime, CheckConstraint, func
from sqlalchemy.orm import relationship
from pharmacy.db.database import Base, utcnow


class Product(Base):
    __tablename__ = "products"
    __table_args__ = (
        CheckConstraint("current_stock >= 0", name="ck_products_current_stock_non_negative"),
    )

    id = Column(Integer, primary_key=True)
    name = Column(String(255), nullable=False)
    current_stock = Column(Integer, nullable=False, default=0)
    selling_price = Column(Numeric(10, 2), nullable=False)
    purchase_price = Column(Numeric(10, 2), nullable=False)
    expiration_date = Column(Date, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now())

    # Relationships
    sale_items = relationship("SalesTransactionItem", back_populates="product")
    prescription_medicines = relationship("PrescriptionMedicine", back_populates="product")
