"""
Shared API dependencies.
"""

from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from storefront.database import get_db
from storefront.core.exceptions import AuthenticationError, AuthorizationError
from storefront.core.security import credential_store
from storefront.services.identity_service import identity_service
from storefront.services.admin_service import admin_service
from storefront.models.user import User

bearer_scheme = HTTPBearer(auto_error=False)


def _resolve_user(db: Session, credentials: HTTPAuthorizationCredentials) -> User:
    user_id = credential_store.verify_token(credentials.credentials)
    user = identity_service.get_by_id(db, user_id)
    if user is None:
        raise AuthenticationError("User not found")
    if not user.is_active:
        raise AuthorizationError("Account is deactivated")
    return user


def get_current_user(
    db: Session = Depends(get_db),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> User:
    """
    Validate the bearer token and return the current user.
    """
    if credentials is None:
        raise AuthenticationError("Access token required")
    return _resolve_user(db, credentials)


def get_optional_user(
    db: Session = Depends(get_db),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[User]:
    """Current user if a bearer token was sent, otherwise None."""
    if credentials is None:
        return None
    return _resolve_user(db, credentials)


def get_current_admin(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> User:
    admin_service.require_admin(db, current_user)
    return current_user
