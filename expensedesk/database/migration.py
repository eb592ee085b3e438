from sqlalchemy import inspect
from expensedesk.database.database import engine, Base
from expensedesk.database.models.record import Record
import logging

logger = logging.getLogger(__name__)

def has_table(table_name: str) -> bool:
    """Check if the database already has a table"""
    try:
        return inspect(engine).has_table(table_name)
    except Exception as e:
        logger.error(f"Failed to inspect table {table_name}: {e}")
        return False

def create_tables_if_not_exist():
    """Create tables if they don't exist"""
    try:
        Base.metadata.create_all(bind=engine)
        logger.info("Database tables created/verified")
    except Exception as e:
        logger.error(f"Error creating tables: {e}")
        raise

def run_migration():
    """Run complete database migration"""
    logger.info("Starting database migration...")
    created = not has_table(Record.__tablename__)
    create_tables_if_not_exist()
    if created:
        logger.info(f"Created record table {Record.__tablename__}")
    logger.info("Database migration completed!")
