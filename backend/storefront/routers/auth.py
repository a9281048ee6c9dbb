"""
Authentication API endpoints.
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from storefront.config import settings
from storefront.core.exceptions import AuthenticationError
from storefront.core.rate_limit import limiter
from storefront.core.security import credential_store
from storefront.database import get_db
from storefront.dependencies import get_current_user
from storefront.models.user import User
from storefront.schemas import AuthResponse, LoginRequest, UserRegister, UserResponse
from storefront.services.identity_service import identity_service

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(user_in: UserRegister, db: Session = Depends(get_db)) -> Any:
    """
    Register a new user and log them in.
    """
    user = identity_service.create_user(db, user_in)
    return AuthResponse(
        message="User created successfully",
        user=UserResponse.model_validate(user),
        token=credential_store.issue_token(user.id),
    )


@router.post("/login", response_model=AuthResponse)
@limiter.limit(settings.LOGIN_RATE_LIMIT)
def login(request: Request, credentials: LoginRequest, db: Session = Depends(get_db)) -> Any:
    """
    Exchange email and password for an access token.
    """
    user = identity_service.authenticate(db, credentials.email, credentials.password)
    if user is None:
        logger.info("Rejected login with invalid credentials")
        raise AuthenticationError("Invalid credentials")
    if not user.is_active:
        raise AuthenticationError("Account is deactivated")
    return AuthResponse(
        message="Login successful",
        user=UserResponse.model_validate(user),
        token=credential_store.issue_token(user.id),
    )


@router.get("/user", response_model=UserResponse)
def read_current_user(current_user: User = Depends(get_current_user)) -> Any:
    """
    Get current user.
    """
    return current_user
