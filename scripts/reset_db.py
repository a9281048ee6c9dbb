import sys
import os
import logging

# Add parent directory to path to allow importing storefront modules
sys.path.append(os.path.join(os.path.dirname(__file__), '..', 'backend'))

from storefront.database import engine, Base
# Import all models to ensure metadata is populated
from storefront.models import user, admin, category, product, cart, wishlist

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def reset_database():
    logger.info("Starting database reset...")

    logger.info("Dropping all tables...")
    Base.metadata.drop_all(bind=engine)

    logger.info("Recreating all tables...")
    Base.metadata.create_all(bind=engine)

    logger.info("Database reset completed successfully.")


if __name__ == "__main__":
    reset_database()
