"""
Security utilities: password hashing and JWT access tokens.
"""

import bcrypt
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import jwt, JWTError

from storefront.config import Settings, settings
from storefront.core.exceptions import AuthenticationError

# JWT configuration
ALGORITHM = "HS256"


class CredentialStore:
    """Hashes passwords and issues/validates bearer tokens. Performs no I/O."""

    def __init__(self, config: Settings):
        self.secret = config.JWT_SECRET
        self.rounds = config.BCRYPT_ROUNDS
        self.token_lifetime = timedelta(minutes=config.ACCESS_TOKEN_EXPIRE_MINUTES)

    def hash_password(self, password: str) -> str:
        """Generate a salted bcrypt hash."""
        salt = bcrypt.gensalt(rounds=self.rounds)
        hashed = bcrypt.hashpw(password.encode("utf-8"), salt)
        return hashed.decode("utf-8")

    def verify_password(self, plain_password: str, hashed_password: Optional[str]) -> bool:
        """Verify a password against a hash."""
        if not hashed_password:
            return False
        try:
            return bcrypt.checkpw(
                plain_password.encode("utf-8"), hashed_password.encode("utf-8")
            )
        except ValueError:
            # Malformed hash or over-long password
            return False

    def issue_token(self, user_id: str, expires_delta: Optional[timedelta] = None) -> str:
        """Create a signed access token for the given user id."""
        expire = datetime.now(timezone.utc) + (expires_delta or self.token_lifetime)
        to_encode = {"user_id": user_id, "exp": expire}
        return jwt.encode(to_encode, self.secret, algorithm=ALGORITHM)

    def verify_token(self, token: str) -> str:
        """
        Return the user id carried by a valid token.

        Bad signatures, expired and malformed tokens all raise
        AuthenticationError.
        """
        try:
            payload = jwt.decode(token, self.secret, algorithms=[ALGORITHM])
        except JWTError:
            raise AuthenticationError("Invalid or expired token")

        user_id = payload.get("user_id")
        if not isinstance(user_id, str) or not user_id:
            raise AuthenticationError("Invalid or expired token")
        return user_id


credential_store = CredentialStore(settings)
