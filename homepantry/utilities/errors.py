"""Error kinds shared by the core logic, the repositories and the API layer.

Callers map errors by ``kind`` (or by class), never by message text:

    invalid_input    -> InvalidInputError   (400)
    guard_violation  -> GuardViolationError (409)
    not_found        -> NotFoundError       (404)
    storage_error    -> StorageError        (500)
"""
from __future__ import annotations


class HomePantryError(Exception):
    kind = "error"
    status_code = 500

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message

    def to_dict(self):
        return {"error": self.message, "kind": self.kind}


class InvalidInputError(HomePantryError, ValueError):
    """Malformed or missing input. The caller fixes the input and retries."""
    kind = "invalid_input"
    status_code = 400


class GuardViolationError(HomePantryError):
    """A transition or write whose precondition does not hold; nothing was changed."""
    kind = "guard_violation"
    status_code = 409


class NotFoundError(HomePantryError):
    kind = "not_found"
    status_code = 404


class StorageError(HomePantryError):
    """A stored collection could not be read back."""
    kind = "storage_error"
    status_code = 500


__all__ = ["HomePantryError", "InvalidInputError", "GuardViolationError", "NotFoundError", "StorageError"]
