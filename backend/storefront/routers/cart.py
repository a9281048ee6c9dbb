"""
Cart endpoints. All require a bearer token.
"""

from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.database import get_db
from storefront.dependencies import get_current_user
from storefront.models.user import User
from storefront.schemas import (
    CartLineCreate,
    CartLineResponse,
    CartLineWithProduct,
    CartQuantityUpdate,
    ClearCartResponse,
    MessageResponse,
)
from storefront.services.cart_service import cart_service

router = APIRouter()


@router.get("", response_model=List[CartLineWithProduct])
def get_cart(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return cart_service.list_lines(db, current_user.id)


@router.post("", response_model=CartLineResponse)
def add_to_cart(
    item: CartLineCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Add a product; an existing line for the product gets its quantity increased."""
    return cart_service.add(db, current_user.id, item)


@router.patch("/{line_id}", response_model=CartLineResponse)
def update_cart_item(
    line_id: str,
    update: CartQuantityUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return cart_service.update_quantity(db, current_user.id, line_id, update.quantity)


@router.delete("/{line_id}", response_model=MessageResponse)
def remove_cart_item(
    line_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    cart_service.remove(db, current_user.id, line_id)
    return {"message": "Item removed from cart"}


@router.delete("", response_model=ClearCartResponse)
def clear_cart(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    removed = cart_service.clear(db, current_user.id)
    return {"message": "Cart cleared", "removed": removed}
