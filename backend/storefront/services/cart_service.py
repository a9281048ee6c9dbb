"""
Cart Service: per-user cart lines with quantity merge semantics.
"""

import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from storefront.core.exceptions import InvalidQuantity, NotFoundError
from storefront.core.retry import retry_with_backoff
from storefront.database import transaction
from storefront.models.cart import CartLine
from storefront.schemas import CartLineCreate
from storefront.services.catalog_service import CatalogService, catalog_service

logger = logging.getLogger(__name__)


def _check_quantity(quantity: int) -> None:
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
        raise InvalidQuantity(quantity)


class CartService:
    """
    One line per (user, product). Adding a product that is already in the
    cart increments the existing line; its size, color and customization
    stay as they were when the line was created.
    """

    def __init__(self, catalog: CatalogService):
        self.catalog = catalog

    @retry_with_backoff()
    def list_lines(self, db: Session, user_id: str) -> List[CartLine]:
        """Lines with the live product attached (current price, not price at add time)."""
        return (
            db.query(CartLine)
            .options(joinedload(CartLine.product))
            .filter(CartLine.user_id == user_id)
            .order_by(CartLine.created_at.desc())
            .all()
        )

    def find_line(self, db: Session, user_id: str, product_id: str) -> Optional[CartLine]:
        return (
            db.query(CartLine)
            .filter(CartLine.user_id == user_id, CartLine.product_id == product_id)
            .first()
        )

    @retry_with_backoff()
    def add(self, db: Session, user_id: str, item: CartLineCreate) -> CartLine:
        _check_quantity(item.quantity)
        self.catalog.get_product(db, item.product_id)

        existing = self.find_line(db, user_id, item.product_id)
        if existing is not None:
            return self._merge(db, existing.id, item.quantity)

        line = CartLine(
            user_id=user_id,
            product_id=item.product_id,
            quantity=item.quantity,
            selected_size=item.selected_size.value if item.selected_size else None,
            selected_color=item.selected_color.model_dump() if item.selected_color else None,
            customization=(
                item.customization.model_dump(by_alias=True, exclude_none=True)
                if item.customization else None
            ),
        )
        try:
            with transaction(db):
                db.add(line)
        except IntegrityError:
            # Lost an insert race on (user_id, product_id): merge into the winner
            winner = self.find_line(db, user_id, item.product_id)
            if winner is None:
                raise
            logger.info(f"Concurrent add for product {item.product_id}, merging quantities")
            return self._merge(db, winner.id, item.quantity)

        db.refresh(line)
        logger.info(f"User {user_id} added product {item.product_id} x{item.quantity} to cart")
        return line

    def _merge(self, db: Session, line_id: str, quantity: int) -> CartLine:
        # Increment in SQL so concurrent merges do not overwrite each other
        with transaction(db):
            db.query(CartLine).filter(CartLine.id == line_id).update(
                {CartLine.quantity: CartLine.quantity + quantity},
                synchronize_session=False,
            )
        line = db.query(CartLine).filter(CartLine.id == line_id).first()
        db.refresh(line)
        return line

    @retry_with_backoff()
    def update_quantity(self, db: Session, user_id: str, line_id: str, quantity: int) -> CartLine:
        """Replace the quantity of a line (no merge)."""
        _check_quantity(quantity)
        line = (
            db.query(CartLine)
            .filter(CartLine.id == line_id, CartLine.user_id == user_id)
            .first()
        )
        if line is None:
            raise NotFoundError("Cart item not found")
        with transaction(db):
            line.quantity = quantity
        db.refresh(line)
        return line

    @retry_with_backoff()
    def remove(self, db: Session, user_id: str, line_id: str) -> None:
        """Delete a line. Removing a missing line is not an error."""
        with transaction(db):
            deleted = (
                db.query(CartLine)
                .filter(CartLine.id == line_id, CartLine.user_id == user_id)
                .delete(synchronize_session=False)
            )
        if deleted:
            logger.info(f"User {user_id} removed cart line {line_id}")

    @retry_with_backoff()
    def clear(self, db: Session, user_id: str) -> int:
        with transaction(db):
            deleted = (
                db.query(CartLine)
                .filter(CartLine.user_id == user_id)
                .delete(synchronize_session=False)
            )
        logger.info(f"Cleared {deleted} cart lines for user {user_id}")
        return deleted


cart_service = CartService(catalog_service)
