"""Database utilities for the Realty Coach profile backend."""

from .session import (
    create_schema,
    dispose_engine,
    get_engine,
    get_session_dependency,
    get_session_factory,
    session_scope,
)

__all__ = [
    "create_schema",
    "dispose_engine",
    "get_engine",
    "get_session_dependency",
    "get_session_factory",
    "session_scope",
]
