"""
Wishlist Service: per-user set of saved products.
"""

import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from storefront.core.retry import retry_with_backoff
from storefront.database import transaction
from storefront.models.wishlist import WishlistEntry
from storefront.services.catalog_service import CatalogService, catalog_service

logger = logging.getLogger(__name__)


class WishlistService:
    """Adding a product twice returns the entry saved the first time."""

    def __init__(self, catalog: CatalogService):
        self.catalog = catalog

    @retry_with_backoff()
    def list_entries(self, db: Session, user_id: str) -> List[WishlistEntry]:
        return (
            db.query(WishlistEntry)
            .options(joinedload(WishlistEntry.product))
            .filter(WishlistEntry.user_id == user_id)
            .order_by(WishlistEntry.created_at.desc())
            .all()
        )

    def find_entry(self, db: Session, user_id: str, product_id: str) -> Optional[WishlistEntry]:
        return (
            db.query(WishlistEntry)
            .filter(WishlistEntry.user_id == user_id, WishlistEntry.product_id == product_id)
            .first()
        )

    @retry_with_backoff()
    def add(self, db: Session, user_id: str, product_id: str) -> WishlistEntry:
        self.catalog.get_product(db, product_id)

        existing = self.find_entry(db, user_id, product_id)
        if existing is not None:
            return existing

        entry = WishlistEntry(user_id=user_id, product_id=product_id)
        try:
            with transaction(db):
                db.add(entry)
        except IntegrityError:
            # A concurrent request saved the same product first
            winner = self.find_entry(db, user_id, product_id)
            if winner is None:
                raise
            return winner

        db.refresh(entry)
        logger.info(f"User {user_id} saved product {product_id} to wishlist")
        return entry

    @retry_with_backoff()
    def remove(self, db: Session, user_id: str, product_id: str) -> None:
        """Removing a product that is not saved is not an error."""
        with transaction(db):
            db.query(WishlistEntry).filter(
                WishlistEntry.user_id == user_id, WishlistEntry.product_id == product_id
            ).delete(synchronize_session=False)


wishlist_service = WishlistService(catalog_service)
