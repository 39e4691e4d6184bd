"""Domain exceptions raised by the registry and auth services.

Each error carries the HTTP status it maps to; the handlers registered in
``hazardboard.main`` turn them into ``{"detail", "code"}`` JSON responses.

Usage:
    from hazardboard.errors import NotFoundError

    if report is None:
        raise NotFoundError(f"Hazard report {report_id} not found")
"""

from __future__ import annotations

from typing import Any


class HazardBoardError(Exception):
    """Base exception for all HazardBoard errors."""

    status_code = 500

    def __init__(self, message: str, code: str = "INTERNAL_ERROR"):
        self.message = message
        self.code = code
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        return {"detail": self.message, "code": self.code}


class ValidationError(HazardBoardError):
    """Missing or malformed input."""

    status_code = 400

    def __init__(self, message: str = "Invalid input"):
        super().__init__(message, code="VALIDATION_ERROR")


class DuplicateUsernameError(ValidationError):
    def __init__(self, username: str):
        super().__init__("Username already exists")
        self.code = "DUPLICATE_USERNAME"
        self.username = username


class AuthenticationError(HazardBoardError):
    """Missing, expired or invalid session."""

    status_code = 401

    def __init__(self, message: str = "Not authenticated"):
        super().__init__(message, code="AUTH_FAILED")


class AuthorizationError(HazardBoardError):
    """Authenticated, but the role does not permit the action."""

    status_code = 403

    def __init__(self, message: str = "Forbidden"):
        super().__init__(message, code="NOT_AUTHORIZED")


class NotFoundError(HazardBoardError):
    status_code = 404

    def __init__(self, message: str = "Not found"):
        super().__init__(message, code="NOT_FOUND")


class StorageError(HazardBoardError):
    """Persistence failure. The message shown to clients stays generic."""

    status_code = 500

    def __init__(self, message: str = "Storage failure"):
        super().__init__(message, code="STORAGE_ERROR")

    def to_dict(self) -> dict[str, Any]:
        return {"detail": "Internal server error", "code": self.code}
