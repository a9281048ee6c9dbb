"""
CartLine database model.
"""

from datetime import datetime

from sqlalchemy import (
    Column, String, Integer, DateTime, ForeignKey, JSON, CheckConstraint, UniqueConstraint,
)
from sqlalchemy.orm import relationship

from storefront.database import Base, new_id


class CartLine(Base):
    """
    One product in a user's cart.

    A user has at most one line per product; adding the product again
    merges the quantity into the existing line.
    """

    __tablename__ = "cart_items"
    __table_args__ = (
        UniqueConstraint("user_id", "product_id", name="uq_cart_user_product"),
        CheckConstraint("quantity >= 1", name="ck_cart_quantity_positive"),
    )

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = Column(String(36), ForeignKey("products.id"), nullable=False, index=True)
    quantity = Column(Integer, default=1, nullable=False)
    selected_size = Column(String(10), nullable=True)
    selected_color = Column(JSON, nullable=True)  # {"name": ..., "hex": ...}
    customization = Column(JSON, nullable=True)  # playerName, playerNumber, teamLogo, specialInstructions
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    # Relationships
    user = relationship("User", back_populates="cart_lines")
    product = relationship("Product", back_populates="cart_lines")
