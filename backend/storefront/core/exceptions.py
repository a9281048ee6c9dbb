"""
Domain errors raised by services and mapped to HTTP responses in main.py.
"""

from typing import Any, Dict, List, Optional


class StorefrontError(Exception):
    """Base class for errors that have a well-defined HTTP status."""

    status_code = 500
    default_message = "Internal Server Error"

    def __init__(
        self,
        message: Optional[str] = None,
        errors: Optional[List[Dict[str, Any]]] = None,
    ):
        self.message = message or self.default_message
        self.errors = errors
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"message": self.message}
        if self.errors:
            body["errors"] = self.errors
        return body


class ValidationError(StorefrontError):
    status_code = 400
    default_message = "Invalid data"

    @classmethod
    def for_field(cls, field: str, message: str) -> "ValidationError":
        return cls(errors=[{"field": field, "message": message}])


class InvalidQuantity(ValidationError):
    default_message = "Invalid quantity"

    def __init__(self, quantity: Any = None):
        super().__init__(
            errors=[{"field": "quantity", "message": "Quantity must be at least 1"}]
        )
        self.quantity = quantity


class AuthenticationError(StorefrontError):
    status_code = 401
    default_message = "Could not validate credentials"


class AuthorizationError(StorefrontError):
    status_code = 403
    default_message = "Admin access required"


class NotFoundError(StorefrontError):
    status_code = 404
    default_message = "Not found"


class ConflictError(StorefrontError):
    status_code = 409
    default_message = "Conflicting data"


class TransientStorageError(StorefrontError):
    status_code = 503
    default_message = "Storage temporarily unavailable, please retry"
