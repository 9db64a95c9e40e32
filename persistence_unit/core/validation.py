"""Argument checks shared by builders and the connection layer."""

from __future__ import annotations

from typing import Any, Optional, Sequence, TypeVar

from .errors import PersistenceFailure

T = TypeVar("T")


def require_non_null(value: Optional[T], name: str) -> T:
    """Return `value` or raise when it is `None`."""

    if value is None:
        raise PersistenceFailure(f"The '{name}' parameter has not been initialized")
    return value


def require_at_least_one_argument(args: Optional[Sequence[Any]], name: str) -> tuple[Any, ...]:
    """Return `args` as a tuple, rejecting `None` and empty sequences."""

    require_non_null(args, name)
    if len(args) <= 0:
        raise PersistenceFailure(f"The '{name}' parameter must have at least one argument")
    return tuple(args)


def has_arguments(args: Optional[Sequence[Any]]) -> bool:
    return args is not None and len(args) > 0
