from sqlalchemy import Column, Integer, Numeric, ForeignKey, DateTime, CheckConstraint, func
from sqlalchemy.orm import relationship
from pharmacy.db.database import Base, utcnow


class SalesTransaction(Base):
    __tablename__ = "sales_transactions"

    id = Column(Integer, primary_key=True)
    transaction_date = Column(DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now())
    total_amount = Column(Numeric(10, 2), nullable=False)
    # NULL for walk-in customers
    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now())

    # Relationships
    customer = relationship("Customer", back_populates="sales_transactions")
    items = relationship(
        "SalesTransactionItem",
        back_populates="transaction",
        cascade="all, delete-orphan",
        order_by="SalesTransactionItem.id"
    )


class SalesTransactionItem(Base):
    __tablename__ = "sales_transaction_items"
    __table_args__ = (
        CheckConstraint("quantity > 0", name="ck_sales_transaction_items_quantity_positive"),
    )

    id = Column(Integer, primary_key=True)
    transaction_id = Column(Integer, ForeignKey("sales_transactions.id", ondelete="CASCADE"), nullable=False)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False)
    quantity = Column(Integer, nullable=False)
    unit_price = Column(Numeric(10, 2), nullable=False)
    subtotal = Column(Numeric(10, 2), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now())

    # Relationships
    transaction = relationship("SalesTransaction", back_populates="items")
    product = relationship("Product", back_populates="sale_items")
