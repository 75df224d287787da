# backend/core/error_handling.py

"""
Error handling utilities for API routes.

Every route recovers its own failures: known API errors pass through
untouched, anything else is logged with the raw error and replaced by an
``InternalError`` carrying the route's user-facing message.
"""

from typing import Callable
from functools import wraps
import inspect
import logging

from fastapi import HTTPException
from sqlalchemy.exc import SQLAlchemyError

from .exceptions import InternalError

logger = logging.getLogger(__name__)


def handle_api_errors(fallback_message: str) -> Callable:
    """
    Decorator factory turning unexpected failures into a sanitized 500.
    Handles both async handlers and plain ones that FastAPI runs in its
    threadpool (used where the work is CPU-bound, e.g. password hashing).

    Usage:
        @router.post("/api/auth/register")
        @handle_api_errors("Błąd rejestracji")
        def register(payload: RegisterRequest, db: Session = Depends(get_db)):
            ...
    """

    def handle_exception(e: Exception, func_name: str, kwargs: dict) -> None:
        if isinstance(e, HTTPException):
            raise e
        if isinstance(e, SQLAlchemyError):
            logger.error(f"Database error in {func_name}: {e}", exc_info=True)
        else:
            logger.error(f"Unexpected error in {func_name}: {e}", exc_info=True)
        _rollback(kwargs)
        raise InternalError(fallback_message) from e

    def decorator(func: Callable) -> Callable:
        if inspect.iscoroutinefunction(func):

            @wraps(func)
            async def async_wrapper(*args, **kwargs):
                try:
                    return await func(*args, **kwargs)
                except Exception as e:
                    handle_exception(e, func.__name__, kwargs)

            return async_wrapper

        @wraps(func)
        def sync_wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except Exception as e:
                handle_exception(e, func.__name__, kwargs)

        return sync_wrapper

    return decorator


def _rollback(kwargs: dict) -> None:
    db = kwargs.get("db")
    if db is None:
        return
    try:
        db.rollback()
    except SQLAlchemyError as e:
        logger.warning(f"Rollback failed: {e}")
