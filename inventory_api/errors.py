"""Error taxonomy shared by the store and the HTTP layer.

Each error carries the HTTP status it maps to and a single human-readable
message, rendered as ``{"error": message}``.
"""
from fastapi import status


class InventoryError(Exception):
    """Base class for errors that end a request with a known status."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(InventoryError):
    """Malformed or out-of-range client input."""
    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(InventoryError):
    """The referenced item does not exist."""
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, message: str = "not found"):
        super().__init__(message)


class ConflictError(InventoryError):
    """A uniqueness constraint would be violated."""
    status_code = status.HTTP_409_CONFLICT

    def __init__(self, message: str = "sku must be unique"):
        super().__init__(message)


class StorageError(InventoryError):
    """Unexpected backend failure. The message never leaks internals."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str = "Server Error"):
        super().__init__(message)
