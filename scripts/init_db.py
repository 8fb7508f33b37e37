# scripts/init_db.py
"""
Drop and recreate the companies/invoices tables on DATABASE_URL.

Usage:
    python -m scripts.init_db
"""

import logging

from app.db.engine import get_engine
from app.db.schema import metadata

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
)
logger = logging.getLogger(__name__)


def main():
    engine = get_engine()
    metadata.drop_all(engine)
    metadata.create_all(engine)
    logger.info("DB schema created on %s", engine.url.render_as_string(hide_password=True))


if __name__ == "__main__":
    main()
