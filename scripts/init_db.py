#!/usr/bin/env python3
"""
Database initialization script for the delivery ETA backend.

This script handles:
- Database creation (for PostgreSQL)
- Running Alembic migrations
- Optional demo data seeding (store, delivery rules, holidays, templates)

Usage:
    python scripts/init_db.py [--seed-data] [--check-only] [--print-token SHOP]
"""

import os
import sys
import argparse
import json
import subprocess
from datetime import date
from pathlib import Path

# add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from app.core.config import settings
from app.db.session import engine, session_scope
from sqlalchemy import create_engine, text
import logging

# configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

DEMO_SHOP = "etaly-demo.myshopify.com"

BUILT_IN_TEMPLATES = [
    {
        "template_key": "standard_delivery_range",
        "name": "Standard Delivery Range",
        "message": "Delivery in {eta_min}-{eta_max} business days",
        "tone_default": "info",
    },
    {
        "template_key": "cutoff_time_warning",
        "name": "Cutoff Time Warning",
        "message": "Order within {countdown} for delivery by {eta_date}",
        "tone_default": "warning",
    },
    {
        "template_key": "ships_today",
        "name": "Ships Today Message",
        "message": "Ships today if ordered before {cutoff_time}",
        "tone_default": "info",
    },
    {
        "template_key": "arrives_between",
        "name": "Arrives Between",
        "message": "Arrives {eta_min_date} - {eta_max_date} with {shipping_method}",
        "tone_default": "success",
    },
]

DEMO_RULES = [
    {
        "name": "Standard Shipping - Germany",
        "countries": ["DE"],
        "min_days": 2,
        "max_days": 3,
        "processing_days": 1,
        "carrier": "DHL Standard",
        "cutoff_time": "14:00",
        "timezone": "Europe/Berlin",
        "priority": 100,
    },
    {
        "name": "Express Shipping - EU",
        "countries": ["AT", "BE", "NL", "FR", "IT", "ES"],
        "min_days": 1,
        "max_days": 2,
        "carrier": "DPD Express",
        "cutoff_time": "16:00",
        "timezone": "Europe/Berlin",
        "priority": 90,
    },
    {
        "name": "Economy - Worldwide",
        "countries": ["*"],
        "min_days": 5,
        "max_days": 10,
        "carrier": "Standard Post",
        "cutoff_time": "12:00",
        "priority": 50,
    },
]


def create_database_if_not_exists():
    """create db if it doesn't exist (PostgreSQL only)."""
    database_url = settings.DATABASE_URL

    if not database_url.startswith("postgresql"):
        logger.info("Database URL is not PostgreSQL, skipping database creation")
        return True

    try:
        from urllib.parse import urlparse
        parsed = urlparse(database_url)
        database_name = parsed.path[1:]  # Remove leading '/'

        # connect to the postgres maintenance db instead of the target one
        postgres_url = f"{parsed.scheme}://{parsed.netloc}/postgres"
        postgres_engine = create_engine(postgres_url, isolation_level="AUTOCOMMIT")

        with postgres_engine.connect() as conn:
            result = conn.execute(
                text("SELECT 1 FROM pg_database WHERE datname = :db_name"),
                {"db_name": database_name}
            )

            if result.fetchone() is None:
                logger.info(f"Creating database: {database_name}")
                conn.execute(text(f'CREATE DATABASE "{database_name}"'))
                logger.info(f"Database {database_name} created successfully")
            else:
                logger.info(f"Database {database_name} already exists")

        postgres_engine.dispose()
        return True

    except Exception as e:
        logger.error(f"Error creating database: {e}")
        return False


def run_migrations():
    """run Alembic migrations to create/update schema."""
    try:
        logger.info("Running Alembic migrations...")

        os.chdir(project_root)

        result = subprocess.run(
            [sys.executable, "-m", "alembic", "upgrade", "head"],
            capture_output=True,
            text=True,
            check=True
        )

        logger.info("Migrations completed successfully")
        logger.debug(f"Migration output: {result.stdout}")
        return True

    except subprocess.CalledProcessError as e:
        logger.error(f"Error running migrations: {e}")
        logger.error(f"Migration error output: {e.stderr}")
        return False


def seed_initial_data():
    """replace the demo store with fresh rules, holidays and built-in templates."""
    from app.models.models import Store, StoreSettings, DeliveryRule, Holiday, MessageTemplate

    try:
        with session_scope() as db:
            existing = db.query(Store).filter(Store.shop == DEMO_SHOP).first()
            if existing:
                logger.info(f"Removing existing demo store {DEMO_SHOP}")
                db.delete(existing)
                db.flush()

            templates = []
            for data in BUILT_IN_TEMPLATES:
                template = db.query(MessageTemplate).filter(
                    MessageTemplate.template_key == data["template_key"],
                    MessageTemplate.is_built_in.is_(True),
                ).first()
                if not template:
                    template = MessageTemplate(is_built_in=True, **data)
                    db.add(template)
                templates.append(template)
            db.flush()
            logger.info(f"Built-in templates ready: {len(templates)}")

            store = Store(shop=DEMO_SHOP, is_active=True, app_enabled=True)
            store.settings = StoreSettings(aggregation="latest", date_format="short")
            db.add(store)
            db.flush()

            for data in DEMO_RULES:
                rule_data = dict(data)
                rule_data["countries"] = json.dumps(rule_data["countries"])
                db.add(DeliveryRule(store_id=store.id, is_active=True, **rule_data))
            logger.info(f"Delivery rules created: {len(DEMO_RULES)}")

            db.add_all([
                Holiday(store_id=store.id, name="New Year's Day", holiday_date=date(2025, 1, 1), is_recurring=True),
                Holiday(store_id=store.id, name="Christmas Day", holiday_date=date(2025, 12, 25), is_recurring=True),
                Holiday(store_id=store.id, name="Boxing Day", holiday_date=date(2025, 12, 26), is_recurring=True),
                Holiday(store_id=store.id, name="German Unity Day", holiday_date=date(2025, 10, 3), is_recurring=True, country_code="DE"),
            ])
            logger.info("Holidays created")

        logger.info(f"Demo store {DEMO_SHOP} seeded successfully")
        return True

    except Exception as e:
        logger.error(f"Error seeding initial data: {e}")
        return False


def check_database_connection():
    """check if db connection is working."""
    try:
        logger.info("Testing database connection...")

        with engine.connect() as conn:
            result = conn.execute(text("SELECT 1"))
            result.fetchone()

        logger.info("Database connection successful")
        return True

    except Exception as e:
        logger.error(f"Database connection failed: {e}")
        return False


def main():
    parser = argparse.ArgumentParser(description="Initialize delivery ETA database")
    parser.add_argument(
        "--seed-data",
        action="store_true",
        help="Seed a demo store with delivery rules, holidays and templates"
    )
    parser.add_argument(
        "--check-only",
        action="store_true",
        help="Only check database connection, don't run migrations"
    )
    parser.add_argument(
        "--print-token",
        metavar="SHOP",
        help="Print an admin access token for the given shop domain and exit"
    )

    args = parser.parse_args()

    if args.print_token:
        from app.core.security import create_access_token
        print(create_access_token(args.print_token))
        return True

    logger.info("Starting database initialization...")

    if args.check_only and not settings.DATABASE_URL.startswith("postgresql"):
        logger.info("Skipping database creation for non-PostgreSQL database in check-only mode")
    else:
        if not create_database_if_not_exists():
            logger.error("Failed to create database")
            return False

    if not check_database_connection():
        logger.error("Database connection failed")
        return False

    if args.check_only:
        logger.info("Database check completed successfully")
        return True

    if not run_migrations():
        logger.error("Migration failed")
        return False

    if args.seed_data:
        if not seed_initial_data():
            logger.error("Data seeding failed")
            return False

    logger.info("Database initialization completed successfully!")
    return True


if __name__ == "__main__":
    success = main()
    sys.exit(0 if success else 1)
