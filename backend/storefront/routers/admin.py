"""
Admin API endpoints: admin accounts, back-office data and catalog management.
"""

import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.orm import Session

from storefront.config import settings
from storefront.core.exceptions import ValidationError
from storefront.core.rate_limit import limiter
from storefront.core.security import credential_store
from storefront.database import get_db
from storefront.dependencies import get_current_admin, get_current_user, get_optional_user
from storefront.models.user import User
from storefront.schemas import (
    AdminCheckResponse,
    AdminCreateRequest,
    AdminCreateResponse,
    AdminStats,
    AdminUserResponse,
    AuthResponse,
    CategoryCreate,
    CategoryResponse,
    CategoryUpdate,
    LoginRequest,
    MessageResponse,
    ProductCreate,
    ProductListResponse,
    ProductResponse,
    ProductUpdate,
    PromoteRequest,
    UserListResponse,
    UserResponse,
)
from storefront.services.admin_service import admin_service
from storefront.services.catalog_service import catalog_service
from storefront.services.identity_service import identity_service

logger = logging.getLogger(__name__)

router = APIRouter()


# --- Admin accounts ---

@router.post("/login", response_model=AuthResponse)
@limiter.limit(settings.LOGIN_RATE_LIMIT)
def admin_login(request: Request, credentials: LoginRequest, db: Session = Depends(get_db)) -> Any:
    user = admin_service.login_admin(db, credentials.email, credentials.password)
    return AuthResponse(
        message="Admin login successful",
        user=UserResponse.model_validate(user),
        token=credential_store.issue_token(user.id),
    )


@router.post("/create", response_model=AdminCreateResponse, status_code=status.HTTP_201_CREATED)
def create_admin(
    data: AdminCreateRequest,
    db: Session = Depends(get_db),
    requester: Optional[User] = Depends(get_optional_user),
) -> Any:
    """
    Create an admin account.

    Requires the admin creation code, plus an admin bearer token once the
    first admin exists.
    """
    user = admin_service.create_admin(db, requester, data)
    return AdminCreateResponse(
        message="Admin account created successfully",
        user=UserResponse.model_validate(user),
    )


@router.get("/check", response_model=AdminCheckResponse)
def check_admin(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Any:
    return {"is_admin": identity_service.is_admin(db, current_user.id)}


@router.post("/promote", response_model=MessageResponse)
def promote_user(
    data: PromoteRequest,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
) -> Any:
    identity_service.promote(db, data.user_id)
    logger.info(f"Admin {admin.id} promoted user {data.user_id}")
    return {"message": "User promoted to admin"}


@router.post("/revoke", response_model=MessageResponse)
def revoke_admin(
    data: PromoteRequest,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
) -> Any:
    if data.user_id == admin.id:
        raise ValidationError.for_field("userId", "You cannot revoke your own admin role")
    identity_service.revoke(db, data.user_id)
    return {"message": "Admin role revoked"}


@router.get("/stats", response_model=AdminStats)
def get_stats(
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
) -> Any:
    return admin_service.stats(db)


# --- Users ---

@router.get("/users", response_model=UserListResponse)
def list_users(
    search: Optional[str] = None,
    skip: int = Query(0, ge=0),
    limit: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
) -> Any:
    users, total = identity_service.list_users(db, search=search, skip=skip, limit=limit)
    admin_ids = identity_service.admin_user_ids(db, [u.id for u in users])
    return UserListResponse(
        total=total,
        skip=skip,
        limit=limit,
        users=[
            AdminUserResponse.model_validate(u).model_copy(update={"is_admin": u.id in admin_ids})
            for u in users
        ],
    )


@router.put("/users/{user_id}/toggle-status", response_model=AdminUserResponse)
def toggle_user_status(
    user_id: str,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
) -> Any:
    user = identity_service.toggle_active(db, user_id, requester_id=admin.id)
    return AdminUserResponse.model_validate(user).model_copy(
        update={"is_admin": identity_service.is_admin(db, user.id)}
    )


# --- Categories ---

@router.post("/categories", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
def create_category(
    data: CategoryCreate,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
) -> Any:
    return catalog_service.create_category(db, data)


@router.put("/categories/{category_id}", response_model=CategoryResponse)
def update_category(
    category_id: str,
    data: CategoryUpdate,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
) -> Any:
    return catalog_service.update_category(db, category_id, data)


@router.delete("/categories/{category_id}", response_model=MessageResponse)
def delete_category(
    category_id: str,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
) -> Any:
    catalog_service.soft_delete_category(db, category_id)
    return {"message": "Category deleted successfully"}


# --- Products ---

@router.get("/products", response_model=ProductListResponse)
def list_all_products(
    search: Optional[str] = None,
    category_id: Optional[str] = Query(None, alias="categoryId"),
    skip: int = Query(0, ge=0),
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
) -> Any:
    products, total = catalog_service.search_admin_products(
        db, search=search, category_id=category_id, skip=skip, limit=limit
    )
    return ProductListResponse(
        total=total,
        skip=skip,
        limit=limit,
        products=[ProductResponse.model_validate(p) for p in products],
    )


@router.post("/products", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
def create_product(
    data: ProductCreate,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
) -> Any:
    return catalog_service.create_product(db, data)


@router.put("/products/{product_id}", response_model=ProductResponse)
def update_product(
    product_id: str,
    data: ProductUpdate,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
) -> Any:
    return catalog_service.update_product(db, product_id, data)


@router.delete("/products/{product_id}", response_model=MessageResponse)
def delete_product(
    product_id: str,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
) -> Any:
    catalog_service.soft_delete_product(db, product_id)
    return {"message": "Product deleted successfully"}
