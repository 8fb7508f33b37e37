# scripts/seed_db.py
"""
Load a couple of sample companies and invoices for local development.

Usage:
    python -m scripts.init_db
    python -m scripts.seed_db
"""

import logging
from datetime import date

from sqlalchemy.engine import Engine

from app.db.engine import get_engine
from app.db.schema import companies, invoices

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
)
logger = logging.getLogger(__name__)

SAMPLE_COMPANIES = [
    {"code": "apple", "name": "Apple Computer", "description": "Maker of OSX."},
    {"code": "ibm", "name": "IBM", "description": "Big blue."},
]

SAMPLE_INVOICES = [
    {"comp_code": "apple", "amt": 100, "paid": False, "paid_date": None},
    {"comp_code": "apple", "amt": 200, "paid": False, "paid_date": None},
    {"comp_code": "apple", "amt": 300, "paid": True, "paid_date": date(2018, 1, 1)},
    {"comp_code": "ibm", "amt": 400, "paid": False, "paid_date": None},
]


def seed(engine: Engine) -> None:
    """
    Replace whatever is in both tables with the sample rows, in one transaction.
    """
    with engine.begin() as conn:
        conn.execute(invoices.delete())
        conn.execute(companies.delete())
        conn.execute(companies.insert(), SAMPLE_COMPANIES)
        conn.execute(invoices.insert(), SAMPLE_INVOICES)


def main():
    seed(get_engine())
    logger.info("Companies loaded: %s", len(SAMPLE_COMPANIES))
    logger.info("Invoices loaded:  %s", len(SAMPLE_INVOICES))


if __name__ == "__main__":
    main()
