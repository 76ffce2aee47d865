import asyncio
import logging
from datetime import date, timedelta
from decimal import Decimal
from sqlalchemy import select
from pharmacy.db.database import Database, db
from pharmacy.models import Product, Customer, Supplier

logger = logging.getLogger(__name__)


# Sample products: (name, stock, selling price, purchase price, shelf life in days)
PRODUCTS_DATA = [
    ("Amoxicillin 500mg", 120, Decimal("12.50"), Decimal("8.10"), 540),
    ("Paracetamol 500mg", 300, Decimal("3.25"), Decimal("1.40"), 900),
    ("Ibuprofen 400mg", 180, Decimal("5.00"), Decimal("2.75"), 720),
    ("Cetirizine 10mg", 90, Decimal("7.25"), Decimal("3.90"), 600),
    ("Omeprazole 20mg", 75, Decimal("9.80"), Decimal("5.20"), 480),
    ("Metformin 850mg", 150, Decimal("6.40"), Decimal("3.10"), 730),
    ("Salbutamol Inhaler", 25, Decimal("18.90"), Decimal("11.00"), 365),
    ("Vitamin D3 1000IU", 200, Decimal("4.75"), Decimal("2.05"), 1000),
]

CUSTOMERS_DATA = [
    ("John Doe", "555-0101", "john.doe@example.com", "12 Elm Street"),
    ("Maria Garcia", "555-0102", "maria.garcia@example.com", None),
    ("Walk-in Regular", None, None, None),
]

SUPPLIERS_DATA = [
    ("MedSupply Wholesale", "555-0201", "orders@medsupply.example.com", "Industrial Park 4"),
    ("PharmaDistrib Ltd", "555-0202", "sales@pharmadistrib.example.com", "Harbour Road 17"),
]


async def seed_database(database: Database = db) -> bool:
    """Fill an empty database with sample data. Returns False if data exists."""
    await database.create_tables()

    session = await database.session()
    async with session:
        async with session.begin():
            # Check if data exists
            result = await session.execute(select(Product).limit(1))
            if result.scalar():
                logger.info("Database already seeded")
                return False

            today = date.today()
            for name, stock, selling, purchase, shelf_days in PRODUCTS_DATA:
                session.add(Product(
                    name=name,
                    current_stock=stock,
                    selling_price=selling,
                    purchase_price=purchase,
                    expiration_date=today + timedelta(days=shelf_days)
                ))

            for name, phone, email, address in CUSTOMERS_DATA:
                session.add(Customer(name=name, phone=phone, email=email, address=address))

            for name, phone, email, address in SUPPLIERS_DATA:
                session.add(Supplier(name=name, phone=phone, email=email, address=address))

    logger.info(
        f"Database seeded: {len(PRODUCTS_DATA)} products, "
        f"{len(CUSTOMERS_DATA)} customers, {len(SUPPLIERS_DATA)} suppliers"
    )
    return True


async def main():
    await seed_database()
    await db.disconnect()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    asyncio.run(main())
