"""Result type for commands that can be rejected.

Store commands never raise for expected conditions such as an empty task
name or a missing due date. They return ``Ok`` with the outcome or ``Err``
with a human readable reason, and the caller decides how to surface it.

Example usage:
    >>> result = store.add_leaf("Write docs", 3, None, date(2025, 9, 17))
    >>> if is_ok(result):
    ...     print(f"Added task {result.value.id}")
    ... else:
    ...     print(f"Rejected: {result.error}")
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")
U = TypeVar("U")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """A command that went through.

    Attributes:
        value: What the command produced.
    """

    value: T


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """A command that was rejected without touching state.

    Attributes:
        error: Why it was rejected.
    """

    error: E


# Union rather than | because TypeVar aliases need it at runtime
Result = Union[Ok[T], Err[E]]  # noqa: UP007


def is_ok(result: Ok[T] | Err[E]) -> bool:
    """Return True if the result is an ``Ok``."""
    return isinstance(result, Ok)


def is_err(result: Ok[T] | Err[E]) -> bool:
    """Return True if the result is an ``Err``."""
    return isinstance(result, Err)


def map_result(result: Ok[T] | Err[E], fn: Callable[[T], U]) -> Ok[U] | Err[E]:
    """Transform the value of an ``Ok``, passing an ``Err`` through untouched.

    Args:
        result: The result to transform.
        fn: Function applied to the Ok value.

    Returns:
        ``Ok(fn(value))`` or the original ``Err``.
    """
    if isinstance(result, Ok):
        return Ok(fn(result.value))
    return result


def flat_map(result: Ok[T] | Err[E], fn: Callable[[T], Ok[U] | Err[E]]) -> Ok[U] | Err[E]:
    """Chain a check that may itself reject.

    Used to run validation steps in sequence: the first ``Err`` short-circuits
    the rest.

    Args:
        result: The result to chain from.
        fn: Function taking the Ok value and returning a new Result.

    Returns:
        The Result of ``fn`` or the original ``Err``.
    """
    if isinstance(result, Ok):
        return fn(result.value)
    return result


def unwrap_or(result: Ok[T] | Err[E], default: T) -> T:
    """Return the Ok value, or ``default`` for an ``Err``."""
    if isinstance(result, Ok):
        return result.value
    return default
