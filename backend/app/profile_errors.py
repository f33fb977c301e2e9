"""Typed failures raised by the profile store and mapped to HTTP errors by the routes."""

from __future__ import annotations

from typing import Any, Dict, Optional


class ProfileActionError(Exception):
    code = "INTERNAL_ERROR"

    def __init__(self, message: str, *, code: Optional[str] = None, details: Any = None) -> None:
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code
        self.details = details

    def to_detail(self) -> Dict[str, Any]:
        return {"code": self.code, "message": self.message, "details": self.details}


class ProfileNotFoundError(ProfileActionError, LookupError):
    code = "USER_NOT_FOUND"


class ProfileValidationError(ProfileActionError, ValueError):
    code = "VALIDATION_ERROR"


class ProfileAuthorizationError(ProfileActionError, PermissionError):
    code = "UNAUTHORIZED"


def user_not_found(user_id: str) -> ProfileNotFoundError:
    return ProfileNotFoundError(f"User '{user_id}' was not found.", details={"user_id": user_id})


def item_not_found(kind: str, item_id: str) -> ProfileNotFoundError:
    return ProfileNotFoundError(
        f"{kind} '{item_id}' was not found.",
        code="ITEM_NOT_FOUND",
        details={"id": item_id},
    )


__all__ = [
    "ProfileActionError",
    "ProfileAuthorizationError",
    "ProfileNotFoundError",
    "ProfileValidationError",
    "item_not_found",
    "user_not_found",
]
