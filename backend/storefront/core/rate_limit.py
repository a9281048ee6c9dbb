"""
Shared slowapi limiter used by the login endpoints.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from storefront.config import settings

limiter = Limiter(key_func=get_remote_address, enabled=settings.RATE_LIMIT_ENABLED)
