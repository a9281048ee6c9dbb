"""
Admin Service: privilege checks, admin creation and back-office statistics.
"""

import hmac
import logging
from decimal import Decimal
from typing import Any, Dict, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from storefront.config import Settings, settings
from storefront.core.exceptions import AuthenticationError, AuthorizationError, ConflictError
from storefront.core.retry import retry_with_backoff
from storefront.database import transaction
from storefront.models.admin import AdminGrant
from storefront.models.category import Category
from storefront.models.product import Product
from storefront.models.user import User
from storefront.schemas import AdminCreateRequest
from storefront.services.identity_service import IdentityService, identity_service

logger = logging.getLogger(__name__)


class AdminService:
    def __init__(self, identity: IdentityService, config: Settings):
        self.identity = identity
        self.admin_code = config.ADMIN_CREATION_CODE

    def require_admin(self, db: Session, user: User) -> None:
        if not self.identity.is_admin(db, user.id):
            raise AuthorizationError("Admin access required")

    def login_admin(self, db: Session, email: str, password: str) -> User:
        user = self.identity.authenticate(db, email, password)
        if user is None or not user.is_active or not self.identity.is_admin(db, user.id):
            raise AuthenticationError("Invalid admin credentials")
        return user

    def _code_matches(self, supplied: str) -> bool:
        return hmac.compare_digest(supplied.encode("utf-8"), self.admin_code.encode("utf-8"))

    def create_admin(
        self, db: Session, requester: Optional[User], data: AdminCreateRequest
    ) -> User:
        """
        Create a user and grant admin in a single transaction.

        The admin code is always required. While no active admin exists the
        call bootstraps the first one; afterwards the requester must be an
        active admin.
        """
        if not self._code_matches(data.admin_code):
            logger.warning("Admin creation refused: invalid admin code")
            raise AuthenticationError("Invalid admin creation code")

        bootstrap = self.identity.count_active_grants(db) == 0
        if not bootstrap:
            if requester is None:
                raise AuthenticationError("Access token required")
            if not self.identity.is_admin(db, requester.id):
                logger.warning(f"Admin creation refused for non-admin {requester.id}")
                raise AuthorizationError("Admin access required")
        else:
            logger.info("No active admin found, bootstrapping the first admin")

        hashed_password = self.identity.credentials.hash_password(data.password)
        with transaction(db):
            user = self.identity.insert_user(
                db,
                email=data.email,
                hashed_password=hashed_password,
                first_name=data.first_name,
                last_name=data.last_name,
                mobile_number=data.mobile_number,
            )
            self.identity.upsert_grant(db, user.id)
            if bootstrap and self._active_grants(db) > 1:
                # Another bootstrap committed between the check and this write
                logger.warning("Admin bootstrap refused: an admin was created concurrently")
                raise ConflictError("An admin account already exists")
        db.refresh(user)
        logger.info(f"Admin account {user.id} created")
        return user

    def _active_grants(self, db: Session) -> int:
        return db.query(AdminGrant).filter(AdminGrant.is_active.is_(True)).count()

    @retry_with_backoff()
    def stats(self, db: Session) -> Dict[str, Any]:
        """Dashboard counters, all computed on every call."""
        total_users = db.query(User).filter(User.is_active.is_(True)).count()
        active_products = db.query(Product).filter(Product.is_active.is_(True))
        total_products = active_products.count()
        featured_products = active_products.filter(Product.is_featured.is_(True)).count()
        total_categories = db.query(Category).filter(Category.is_active.is_(True)).count()

        by_category = (
            db.query(Product.category_id, Category.name, func.count(Product.id))
            .outerjoin(Category, Product.category_id == Category.id)
            .filter(Product.is_active.is_(True))
            .group_by(Product.category_id, Category.name)
            .order_by(func.count(Product.id).desc(), Category.name.asc())
            .all()
        )

        return {
            "total_users": total_users,
            "total_products": total_products,
            "total_categories": total_categories,
            # TODO: sum paid orders once checkout persists orders
            "total_revenue": Decimal("0.00"),
            "featured_products": featured_products,
            "products_by_category": [
                {"category_id": category_id, "name": name, "count": count}
                for category_id, name, count in by_category
            ],
        }


admin_service = AdminService(identity_service, settings)
