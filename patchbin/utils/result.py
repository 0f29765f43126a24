"""Lightweight Result types (Ok/Err) returned at the patch component boundaries."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, Optional, Type, TypeGuard, TypeVar, Union

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class Err:
    error: Exception


Result = Union[Ok[T], Err]


def is_ok(result: Result[T]) -> TypeGuard[Ok[T]]:
    return isinstance(result, Ok)


def is_err(result: Result[T]) -> TypeGuard[Err]:
    return isinstance(result, Err)


def unwrap(result: Result[T]) -> T:
    if isinstance(result, Ok):
        return result.value
    raise result.error


def and_then(result: Result[T], func: Callable[[T], Result[U]]) -> Result[U]:
    """Feed the value of an Ok into the next step; an Err passes through untouched."""
    if isinstance(result, Ok):
        return func(result.value)
    return result


def capture(func: Callable[[], T], *errors: Type[Exception]) -> Result[T]:
    """Run func and wrap its value in Ok, or the first listed exception it raises in Err."""
    try:
        return Ok(func())
    except errors as exc:
        return Err(exc)


def error_message(result: Result[T]) -> Optional[str]:
    if isinstance(result, Err):
        return str(result.error)
    return None
