"""
Identity Service: user records and admin grants.
"""

import logging
from typing import List, Optional, Tuple

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storefront.core.exceptions import ConflictError, NotFoundError, ValidationError
from storefront.core.retry import retry_with_backoff
from storefront.core.security import CredentialStore, credential_store
from storefront.database import LIKE_ESCAPE, contains_pattern, transaction
from storefront.models.admin import AdminGrant
from storefront.models.user import User
from storefront.schemas import UserRegister

logger = logging.getLogger(__name__)


class IdentityService:
    def __init__(self, credentials: CredentialStore):
        self.credentials = credentials

    @retry_with_backoff()
    def get_by_id(self, db: Session, user_id: str) -> Optional[User]:
        return db.query(User).filter(User.id == user_id).first()

    @retry_with_backoff()
    def get_by_email(self, db: Session, email: str) -> Optional[User]:
        return db.query(User).filter(User.email == email.lower()).first()

    @retry_with_backoff()
    def get_by_username(self, db: Session, username: str) -> Optional[User]:
        return db.query(User).filter(User.username == username).first()

    def authenticate(self, db: Session, email: str, password: str) -> Optional[User]:
        """Authenticate a user by email and password."""
        user = self.get_by_email(db, email)
        if not user:
            return None
        if not self.credentials.verify_password(password, user.hashed_password):
            return None
        return user

    def insert_user(
        self,
        db: Session,
        *,
        email: str,
        hashed_password: str,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
        mobile_number: Optional[str] = None,
        username: Optional[str] = None,
    ) -> User:
        """
        Stage a new user inside the caller's transaction (flush only).

        The unique index on email decides duplicates, so two concurrent
        registrations cannot both succeed.
        """
        user = User(
            email=email.lower(),
            hashed_password=hashed_password,
            first_name=first_name,
            last_name=last_name,
            mobile_number=mobile_number,
            username=username,
        )
        db.add(user)
        try:
            db.flush()
        except IntegrityError:
            raise ConflictError("User already exists")
        return user

    def create_user(self, db: Session, profile: UserRegister) -> User:
        """Register a new user."""
        hashed_password = self.credentials.hash_password(profile.password)
        with transaction(db):
            user = self.insert_user(
                db,
                email=profile.email,
                hashed_password=hashed_password,
                first_name=profile.first_name,
                last_name=profile.last_name,
                mobile_number=profile.mobile_number,
                username=profile.username,
            )
        db.refresh(user)
        logger.info(f"Registered user {user.id}")
        return user

    @retry_with_backoff()
    def is_admin(self, db: Session, user_id: str) -> bool:
        grant = (
            db.query(AdminGrant.id)
            .filter(AdminGrant.user_id == user_id, AdminGrant.is_active.is_(True))
            .first()
        )
        return grant is not None

    @retry_with_backoff()
    def count_active_grants(self, db: Session) -> int:
        return db.query(AdminGrant).filter(AdminGrant.is_active.is_(True)).count()

    def upsert_grant(self, db: Session, user_id: str) -> AdminGrant:
        """Insert an active grant or reactivate the existing one (flush only)."""
        grant = db.query(AdminGrant).filter(AdminGrant.user_id == user_id).first()
        if grant is None:
            grant = AdminGrant(user_id=user_id, is_active=True)
            db.add(grant)
        else:
            grant.is_active = True
        db.flush()
        return grant

    def promote(self, db: Session, user_id: str) -> AdminGrant:
        """Grant admin to a user. Calling it again changes nothing."""
        if self.get_by_id(db, user_id) is None:
            raise NotFoundError("User not found")
        try:
            with transaction(db):
                grant = self.upsert_grant(db, user_id)
        except IntegrityError:
            # A concurrent promote inserted the row first; reactivate it
            with transaction(db):
                grant = self.upsert_grant(db, user_id)
        logger.info(f"User {user_id} promoted to admin")
        return grant

    def revoke(self, db: Session, user_id: str) -> None:
        """Deactivate a user's grant. The row is kept for audit."""
        grant = db.query(AdminGrant).filter(AdminGrant.user_id == user_id).first()
        if grant is None or not grant.is_active:
            raise NotFoundError("User is not an admin")
        with transaction(db):
            grant.is_active = False
        logger.info(f"Admin role revoked for user {user_id}")

    @retry_with_backoff()
    def list_users(
        self, db: Session, search: Optional[str] = None, skip: int = 0, limit: int = 20
    ) -> Tuple[List[User], int]:
        query = db.query(User)
        if search:
            pattern = contains_pattern(search)
            query = query.filter(
                or_(
                    User.email.ilike(pattern, escape=LIKE_ESCAPE),
                    User.username.ilike(pattern, escape=LIKE_ESCAPE),
                    User.first_name.ilike(pattern, escape=LIKE_ESCAPE),
                    User.last_name.ilike(pattern, escape=LIKE_ESCAPE),
                )
            )
        total = query.count()
        users = query.order_by(User.created_at.desc()).offset(skip).limit(limit).all()
        return users, total

    @retry_with_backoff()
    def admin_user_ids(self, db: Session, user_ids: List[str]) -> set:
        if not user_ids:
            return set()
        rows = (
            db.query(AdminGrant.user_id)
            .filter(AdminGrant.user_id.in_(user_ids), AdminGrant.is_active.is_(True))
            .all()
        )
        return {row[0] for row in rows}

    def toggle_active(self, db: Session, user_id: str, requester_id: str) -> User:
        """Flip soft deactivation of an account."""
        if user_id == requester_id:
            raise ValidationError.for_field("id", "You cannot deactivate your own account")
        user = self.get_by_id(db, user_id)
        if user is None:
            raise NotFoundError("User not found")
        with transaction(db):
            user.is_active = not user.is_active
        db.refresh(user)
        logger.info(f"User {user_id} {'activated' if user.is_active else 'deactivated'}")
        return user


identity_service = IdentityService(credential_store)
