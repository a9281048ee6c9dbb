"""
Promote an existing user to admin from the command line.

Usage: python scripts/make_admin.py --email someone@example.com
"""
import sys
import os
import argparse
import logging

# Add parent directory to path to allow importing storefront modules
sys.path.append(os.path.join(os.path.dirname(__file__), '..', 'backend'))

from storefront.core.exceptions import NotFoundError
from storefront.database import get_db_context
from storefront.services.identity_service import identity_service

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def make_admin(email: str) -> bool:
    with get_db_context() as db:
        user = identity_service.get_by_email(db, email)
        if user is None:
            logger.error(f"No user registered with email {email}")
            return False
        try:
            identity_service.promote(db, user.id)
        except NotFoundError:
            logger.error(f"User {user.id} disappeared before promotion")
            return False
        logger.info(f"Promoted {user.first_name} {user.last_name} ({user.email}) to admin")
        return True


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Grant the admin role to a user")
    parser.add_argument("--email", required=True, help="Email of the user to promote")
    args = parser.parse_args()
    sys.exit(0 if make_admin(args.email) else 1)
