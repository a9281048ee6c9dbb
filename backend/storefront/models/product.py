"""
Product database model.
"""

import enum
from datetime import datetime

from sqlalchemy import (
    Column, String, Integer, Boolean, DateTime, Text, Numeric, ForeignKey, JSON,
    CheckConstraint, Index,
)
from sqlalchemy.orm import relationship

from storefront.database import Base, new_id


class Size(str, enum.Enum):
    XS = "XS"
    S = "S"
    M = "M"
    L = "L"
    XL = "XL"
    XXL = "XXL"
    XXXL = "XXXL"


DEFAULT_SIZES = ["S", "M", "L", "XL", "XXL"]

DEFAULT_COLORS = [
    {"name": "Red", "hex": "#dc2626"},
    {"name": "Blue", "hex": "#2563eb"},
    {"name": "Black", "hex": "#000000"},
    {"name": "White", "hex": "#ffffff"},
]

DEFAULT_CUSTOMIZATION = {
    "allowPlayerName": True,
    "allowPlayerNumber": True,
    "allowTeamLogo": True,
    "allowColorChange": True,
    "allowSizeSelection": True,
}


class Product(Base):
    """Jersey offered in the catalog. Soft-deleted via is_active."""

    __tablename__ = "products"
    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_product_price_non_negative"),
        CheckConstraint("sale_price IS NULL OR sale_price >= 0", name="ck_product_sale_price_non_negative"),
        CheckConstraint("stock >= 0", name="ck_product_stock_non_negative"),
        Index("idx_product_category_active", "category_id", "is_active"),
        Index("idx_product_created", "created_at"),
    )

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(255), nullable=False)
    slug = Column(String(255), nullable=False, unique=True, index=True)
    short_description = Column(Text, nullable=True)
    description = Column(Text, nullable=True)
    price = Column(Numeric(10, 2), nullable=False)
    sale_price = Column(Numeric(10, 2), nullable=True)
    category_id = Column(String(36), ForeignKey("categories.id"), nullable=True, index=True)
    image_url = Column(String, nullable=True)
    images = Column(JSON, default=list, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    is_featured = Column(Boolean, default=False, nullable=False)
    stock = Column(Integer, default=0, nullable=False)
    tags = Column(JSON, default=list, nullable=False)
    available_sizes = Column(JSON, default=lambda: list(DEFAULT_SIZES), nullable=False)
    available_colors = Column(JSON, default=lambda: [dict(c) for c in DEFAULT_COLORS], nullable=False)
    customization_options = Column(JSON, default=lambda: dict(DEFAULT_CUSTOMIZATION), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    # Relationships
    category = relationship("Category", back_populates="products")
    cart_lines = relationship("CartLine", back_populates="product")
    wishlist_entries = relationship("WishlistEntry", back_populates="product")

    def __repr__(self):
        return f"<Product(slug={self.slug}, price={self.price})>"
