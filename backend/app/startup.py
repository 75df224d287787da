"""
Application startup validation and initialization.

This module performs startup checks and creates missing tables
so that the application is ready before serving requests.
"""

import logging
from typing import List, Tuple
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from core.config import settings
from core.database import engine, Base

logger = logging.getLogger(__name__)


def configure_startup_logging():
    """Configure logging for the process"""
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    if settings.log_sql_queries:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO)


class StartupValidator:
    """Validates application startup requirements"""

    def __init__(self):
        self.errors: List[str] = []
        self.warnings: List[str] = []

    def check_database_connection(self) -> bool:
        try:
            with engine.connect() as conn:
                conn.execute(text("SELECT 1")).fetchone()
            logger.info("Database connection successful")
            return True
        except SQLAlchemyError as e:
            self.errors.append(f"Database connection failed: {e}")
            return False

    def create_tables(self) -> bool:
        """Create tables that do not exist yet; existing ones are left as they are."""
        # Registers every model with Base.metadata
        import modules.auth.models  # noqa: F401
        import modules.loyalty.models  # noqa: F401
        import modules.reservations.models  # noqa: F401
        import modules.announcements.models  # noqa: F401

        try:
            Base.metadata.create_all(bind=engine)
            return True
        except SQLAlchemyError as e:
            self.errors.append(f"Could not create tables: {e}")
            return False

    def check_pins(self) -> bool:
        if not settings.admin_pin_configured:
            self.warnings.append("ADMIN_PIN is not set - admin panel login will answer 500")
        if not settings.clients_pin_configured:
            self.warnings.append("CLIENTS_PIN is not set - staff view unlock will answer 500")
        return True

    def validate_all(self) -> Tuple[bool, List[str], List[str]]:
        """Run all validation checks"""
        checks = [
            ("Database Connection", self.check_database_connection),
            ("Database Tables", self.create_tables),
            ("Access PINs", self.check_pins),
        ]

        all_passed = True
        for check_name, check_func in checks:
            logger.info(f"Running check: {check_name}")
            if not check_func():
                all_passed = False

        return all_passed, self.errors, self.warnings


def run_startup_checks() -> Tuple[bool, List[str]]:
    """Run all startup validation checks"""
    logger.info("=" * 60)
    logger.info("Starting Milkshake Bar backend")
    logger.info(f"Environment: {settings.environment}")
    logger.info("=" * 60)

    validator = StartupValidator()
    passed, errors, warnings = validator.validate_all()

    for warning in warnings:
        logger.warning(f"  {warning}")
    for error in errors:
        logger.error(f"  {error}")

    if passed:
        logger.info("All startup checks passed")
    else:
        logger.warning(f"Starting in {settings.environment} mode despite errors")

    return passed, warnings
