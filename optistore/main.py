import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, status
from optistore.core.db import init_db, close_db
from optistore.api.v1.sales import router as sales_router
from optistore.api.v1.inventory import router as inventory_router
from optistore.api.v1.categories import router as categories_router
from optistore.api.v1.audits import router as audits_router
from optistore.api.v1.customers import router as customers_router
from optistore.api.v1.expenses import router as expenses_router
from optistore.core.config import PROJECT_NAME, VERSION
from optistore.core.exception_handlers import setup_exception_handlers

log = logging.getLogger("uvicorn")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handles startup and shutdown events."""
    log.info(f"Starting {PROJECT_NAME} v{VERSION}...")
    await init_db()  # Connect to DB and generate schemas
    yield
    await close_db()
    log.info(f"{PROJECT_NAME} stopped.")

app = FastAPI(
    title=PROJECT_NAME,
    version=VERSION,
    lifespan=lifespan,
    # Configure API documentation and paths
    docs_url="/docs",
    redoc_url="/redoc"
)

# Include routers for modular API structure
app.include_router(sales_router, prefix="/api/v1/sales", tags=["Sales"])
app.include_router(inventory_router, prefix="/api/v1/inventory", tags=["Inventory"])
app.include_router(categories_router, prefix="/api/v1/categories", tags=["Categories"])
app.include_router(audits_router, prefix="/api/v1/audits", tags=["Stock Audits"])
app.include_router(customers_router, prefix="/api/v1/customers", tags=["Customers"])
app.include_router(expenses_router, prefix="/api/v1/expenses", tags=["Payroll and Bills"])


setup_exception_handlers(app)

@app.get("/health", status_code=status.HTTP_200_OK)
async def health_check():
    """Simple health check endpoint."""
    return {"status": "ok", "app_name": PROJECT_NAME}
