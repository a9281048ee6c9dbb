"""
Wishlist endpoints. All require a bearer token.
"""

from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.database import get_db
from storefront.dependencies import get_current_user
from storefront.models.user import User
from storefront.schemas import (
    MessageResponse,
    WishlistAdd,
    WishlistEntryResponse,
    WishlistEntryWithProduct,
)
from storefront.services.wishlist_service import wishlist_service

router = APIRouter()


@router.get("", response_model=List[WishlistEntryWithProduct])
def get_wishlist(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return wishlist_service.list_entries(db, current_user.id)


@router.post("", response_model=WishlistEntryResponse)
def add_to_wishlist(
    item: WishlistAdd,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Save a product. Saving it again returns the existing entry."""
    return wishlist_service.add(db, current_user.id, item.product_id)


@router.delete("/{product_id}", response_model=MessageResponse)
def remove_from_wishlist(
    product_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    wishlist_service.remove(db, current_user.id, product_id)
    return {"message": "Item removed from wishlist"}
