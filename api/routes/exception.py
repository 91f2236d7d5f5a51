"""
Centralized exception handling decorator for API route functions.

The :func:`handle_exceptions` decorator wraps an endpoint handler and maps the
engine's error taxonomy onto HTTP status codes:

* :class:`ConfigurationError` (caller passed invalid parameters) -> ``422``
* :class:`AlertNotFound` -> ``404``
* :class:`PersistenceError` (alert store unreachable or rejected) -> ``503``
* any other exception -> ``500`` with the exception message as detail

HTTPExceptions raised by the handler are propagated untouched, thus preserving
status codes and detail messages defined locally.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import inspect
from functools import wraps
from typing import Any, Callable, TypeVar, cast

from fastapi import HTTPException

from engine.exceptions import AlertNotFound, ConfigurationError, PersistenceError

F = TypeVar("F", bound=Callable[..., Any])

_STATUS_BY_ERROR: tuple[tuple[type[Exception], int], ...] = (
    (ConfigurationError, 422),
    (AlertNotFound, 404),
    (PersistenceError, 503),
)


def _translate(exc: Exception) -> HTTPException:
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return HTTPException(status_code=status_code, detail=str(exc))
    return HTTPException(status_code=500, detail=str(exc))


def handle_exceptions(func: F) -> F:
    """Decorator that converts uncaught exceptions to HTTP errors.

    Works with both regular and async functions.
    """

    if inspect.iscoroutinefunction(func):
        @wraps(func)
        async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return await func(*args, **kwargs)
            except HTTPException:
                raise
            except Exception as exc:
                raise _translate(exc) from exc

        return cast(F, async_wrapper)

    @wraps(func)
    def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except HTTPException:
            raise
        except Exception as exc:
            raise _translate(exc) from exc

    return cast(F, sync_wrapper)
