"""
Database initialization script for PostgreSQL
Creates the products and inventory_history tables if they do not exist
"""
import logging
import sys

from app.database import create_db_engine, init_db as create_tables

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def init_db():
    """Initialize database with all tables"""
    engine = create_db_engine()
    try:
        logger.info("Creating all database tables...")
        if not create_tables(engine):
            return False
        logger.info("Database initialization complete!")
        logger.info("You can now start the FastAPI server.")
        return True
    finally:
        engine.dispose()


if __name__ == "__main__":
    sys.exit(0 if init_db() else 1)
