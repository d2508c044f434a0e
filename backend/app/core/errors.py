"""Typed errors raised by services and the auth gate.

Every error is an ``HTTPException`` so FastAPI renders it as ``{"detail": ...}``
with the right status code without extra handlers.
"""

from __future__ import annotations

from fastapi import HTTPException, status


class TheaterError(HTTPException):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, headers: dict[str, str] | None = None) -> None:
        super().__init__(status_code=self.status_code, detail=message, headers=headers)
        self.message = message


class InvalidInputError(TheaterError):
    """Request is well-formed JSON but breaks a domain rule."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(TheaterError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, resource_type: str, resource_id: str) -> None:
        super().__init__(f"{resource_type} '{resource_id}' not found")
        self.resource_type = resource_type
        self.resource_id = resource_id


class AuthenticationError(TheaterError):
    """Missing, invalid or expired credentials. The message stays generic."""

    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str = "Not authenticated") -> None:
        super().__init__(message, headers={"WWW-Authenticate": "Bearer"})


class ConflictError(TheaterError):
    """A store failure aborted an atomic unit of work."""

    status_code = status.HTTP_409_CONFLICT
