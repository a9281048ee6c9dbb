"""
User database model.
"""

from datetime import datetime

from sqlalchemy import Column, String, Boolean, DateTime
from sqlalchemy.orm import relationship

from storefront.database import Base, new_id


class User(Base):
    """Registered customer (or admin) account."""

    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=new_id)
    email = Column(String(255), unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    first_name = Column(String, nullable=True)
    last_name = Column(String, nullable=True)
    mobile_number = Column(String(20), nullable=True)
    username = Column(String(100), unique=True, index=True, nullable=True)
    profile_image_url = Column(String, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    admin_grant = relationship(
        "AdminGrant", back_populates="user", uselist=False, cascade="all, delete-orphan"
    )
    cart_lines = relationship("CartLine", back_populates="user", cascade="all, delete-orphan")
    wishlist_entries = relationship(
        "WishlistEntry", back_populates="user", cascade="all, delete-orphan"
    )

    def __repr__(self):
        return f"<User(id={self.id}, email={self.email})>"
