"""Shared domain building blocks.

- Result type for commands that can be rejected
- Base domain event published on every committed change

Example usage:
    >>> from burndown.domain.shared import Err, Ok, Result
    >>>
    >>> def check_days(days: int) -> Result[int, str]:
    ...     if days < 1:
    ...         return Err("Axis needs at least one day")
    ...     return Ok(days)
"""

from burndown.domain.shared.events import DomainEvent
from burndown.domain.shared.result import (
    Err,
    Ok,
    Result,
    flat_map,
    is_err,
    is_ok,
    map_result,
    unwrap_or,
)

__all__ = [
    # Result
    "Ok",
    "Err",
    "Result",
    "is_ok",
    "is_err",
    "map_result",
    "flat_map",
    "unwrap_or",
    # Events
    "DomainEvent",
]
