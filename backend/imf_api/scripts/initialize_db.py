import asyncio
import logging
import subprocess
import sys
from sqlalchemy import inspect
from imf_api.database import engine, Base
from alembic.config import Config
from alembic import command

# Import all models to register them with Base.metadata
# This must happen before create_all() is called
from imf_api.models import Gadget, User  # noqa: F401

# Setup logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

BASELINE_REVISION = "0001_initial"


async def initialize_db():
    """
    Initialize the database for production.
    If the database is empty, it creates all tables and stamps Alembic to the baseline.
    Either way, it then runs migrations to reach head.
    """
    logger.info("Starting database initialization...")

    is_fresh_install = False
    async with engine.begin() as conn:
        # Use the 'gadgets' table as a marker for a previous install
        def check_if_fresh(sync_conn):
            inspector = inspect(sync_conn)
            return "gadgets" not in inspector.get_table_names()

        is_fresh_install = await conn.run_sync(check_if_fresh)
        logger.info("Is fresh install? %s", is_fresh_install)

        if is_fresh_install:
            logger.info("No 'gadgets' table detected. Creating baseline schema...")
            await conn.run_sync(Base.metadata.create_all)
            logger.info("All tables created successfully.")

    # Alembic runs outside the transaction block so it can see the committed tables
    if is_fresh_install:
        logger.info("Stamping database with baseline revision '%s'...", BASELINE_REVISION)
        try:
            subprocess.run([sys.executable, "-m", "alembic", "stamp", BASELINE_REVISION], check=True)
        except (subprocess.CalledProcessError, FileNotFoundError) as e:
            logger.warning("Failed to stamp via subprocess, trying internal: %s", e)
            alembic_cfg = Config("alembic.ini")
            await asyncio.to_thread(command.stamp, alembic_cfg, BASELINE_REVISION)

    logger.info("Running migrations to reach latest 'head'...")
    try:
        subprocess.run([sys.executable, "-m", "alembic", "upgrade", "head"], check=True)
    except (subprocess.CalledProcessError, FileNotFoundError) as e:
        logger.warning("Failed to upgrade via subprocess, trying internal: %s", e)
        alembic_cfg = Config("alembic.ini")
        await asyncio.to_thread(command.upgrade, alembic_cfg, "head")

    await engine.dispose()
    logger.info("Database initialization complete!")

if __name__ == "__main__":
    asyncio.run(initialize_db())
