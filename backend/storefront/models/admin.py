"""
AdminGrant database model.
"""

from datetime import datetime

from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey, JSON
from sqlalchemy.orm import relationship

from storefront.database import Base, new_id

DEFAULT_PERMISSIONS = [
    "manage_products",
    "manage_categories",
    "manage_orders",
    "view_analytics",
]


def _default_permissions():
    return list(DEFAULT_PERMISSIONS)


class AdminGrant(Base):
    """Elevated role of a user. One row per user; revoked rows are kept."""

    __tablename__ = "admin_users"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True, index=True
    )
    role = Column(String(50), default="admin", nullable=False)
    permissions = Column(JSON, default=_default_permissions, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    # Relationships
    user = relationship("User", back_populates="admin_grant")

    def __repr__(self):
        return f"<AdminGrant(user_id={self.user_id}, role={self.role}, active={self.is_active})>"
