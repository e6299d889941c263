from tortoise import Tortoise
from optistore.core.config import DB_URL, GENERATE_SCHEMAS, LOG_LEVEL
import logging

# Set logging level for Tortoise ORM
logging.getLogger('tortoise').setLevel(LOG_LEVEL)
log = logging.getLogger("optistore.db")

# Define all models modules for the ORM
MODELS_MODULES = [
    "optistore.models.company",
    "optistore.models.inventory",
    "optistore.models.sale",
    "optistore.models.audit",
    "optistore.models.expense",
]


async def init_db(db_url: str = DB_URL, generate_schemas: bool = GENERATE_SCHEMAS):
    """Initializes the Tortoise ORM connection and generates schemas."""
    try:
        await Tortoise.init(
            db_url=db_url,
            modules={"models": MODELS_MODULES},
            use_tz=True,
            timezone="UTC",
        )
        if generate_schemas:
            await Tortoise.generate_schemas()
        log.info("Database connection established.")
    except Exception:
        log.exception(f"FATAL ERROR: Could not connect to database at {db_url}.")
        # Re-raise to prevent the application from starting without a database
        raise


async def close_db():
    """Closes all database connections."""
    await Tortoise.close_connections()
    log.info("Database connections closed.")
