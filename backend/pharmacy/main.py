import logging
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from pharmacy.config import Config
from pharmacy.db.database import db
from pharmacy.routers import contacts, health, prescriptions, products, sales
from pharmacy.exceptions import (
    AppException,
    app_exception_handler,
    generic_exception_handler,
    validation_exception_handler,
)

# Configure logging
logging.basicConfig(
    level=Config.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await db.connect()
    if Config.CREATE_TABLES:
        await db.create_tables()
    yield
    await db.disconnect()


app = FastAPI(
    title="Pharmacy Back-Office API",
    version="1.0.0",
    description="Products, customers, suppliers, sales transactions and prescriptions",
    lifespan=lifespan
)

# Register exception handlers
app.add_exception_handler(AppException, app_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, generic_exception_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=Config.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(health.router)
app.include_router(products.router)
app.include_router(contacts.customers_router)
app.include_router(contacts.suppliers_router)
app.include_router(sales.router)
app.include_router(prescriptions.router)
