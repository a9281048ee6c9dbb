"""
Database models for the storefront API.

All SQLAlchemy models are imported here so that Base.metadata is complete.
"""

from storefront.models.user import User
from storefront.models.admin import AdminGrant
from storefront.models.category import Category
from storefront.models.product import Product, Size
from storefront.models.cart import CartLine
from storefront.models.wishlist import WishlistEntry

__all__ = [
    "User",
    "AdminGrant",
    "Category",
    "Product",
    "Size",
    "CartLine",
    "WishlistEntry",
]
