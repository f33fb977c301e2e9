"""Translate profile store failures into HTTP errors."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

from fastapi import HTTPException, status
from sqlalchemy.exc import SQLAlchemyError

from .profile_errors import ProfileAuthorizationError, ProfileNotFoundError, ProfileValidationError

logger = logging.getLogger(__name__)


@contextmanager
def profile_errors(action: str) -> Iterator[None]:
    """Map typed store errors to 404/422/403 and database failures to 503."""
    try:
        yield
    except ProfileNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=exc.to_detail()) from exc
    except ProfileValidationError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=exc.to_detail()) from exc
    except ProfileAuthorizationError as exc:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=exc.to_detail()) from exc
    except (SQLAlchemyError, RuntimeError) as exc:
        logger.exception("Database failure during %s", action)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail={
                "code": "DATABASE_ERROR",
                "message": f"Unable to {action}. Try again shortly.",
                "details": None,
            },
        ) from exc


__all__ = ["profile_errors"]
