"""Argument validation shared by the similarity engines.

Every check runs before any computation starts, so a rejected call never
touches engine state such as the decomposition cache.
"""

from __future__ import annotations

from typing import Any

__all__ = [
    "ApproxTextError",
    "InvalidArgumentError",
    "is_integer",
    "validate_max_distance",
    "validate_q_size",
    "validate_threshold",
]


class ApproxTextError(Exception):
    """Base exception for approxtext operations."""


class InvalidArgumentError(ApproxTextError, ValueError):
    """Raised when a caller passes an argument outside its contract."""


def is_integer(value: Any) -> bool:
    """Check if a value is an integer (booleans excluded).

    Args:
        value: Value to check.

    Returns:
        True if value is an int and not a bool.
    """
    return isinstance(value, int) and not isinstance(value, bool)


def validate_q_size(q_size: Any) -> int:
    """Validate an n-gram size.

    Args:
        q_size: Requested n-gram size.

    Returns:
        The validated size.

    Raises:
        InvalidArgumentError: If q_size is not an integer of at least 1.
    """
    if not is_integer(q_size) or q_size < 1:
        msg = f"Illegal value for q_size: must be an integer of at least 1, got {q_size!r}"
        raise InvalidArgumentError(msg)
    return q_size


def validate_threshold(threshold: Any) -> int | None:
    """Validate an optional early-exit threshold.

    Args:
        threshold: Threshold value or None.

    Returns:
        The validated threshold, or None when absent.

    Raises:
        InvalidArgumentError: If threshold is present and not a positive integer.
    """
    if threshold is None:
        return None
    if not is_integer(threshold) or threshold <= 0:
        msg = f"Illegal value for threshold: not an integer greater than 0, got {threshold!r}"
        raise InvalidArgumentError(msg)
    return threshold


def validate_max_distance(max_distance: Any, *, optional: bool = False) -> int | None:
    """Validate a maximum edit distance.

    Args:
        max_distance: Distance bound.
        optional: Whether None is an accepted value.

    Returns:
        The validated bound, or None when absent and optional.

    Raises:
        InvalidArgumentError: If max_distance is not a non-negative integer.
    """
    if max_distance is None and optional:
        return None
    if not is_integer(max_distance) or max_distance < 0:
        msg = (
            "Illegal value for max_distance: not an integer greater than "
            f"or equal to 0, got {max_distance!r}"
        )
        raise InvalidArgumentError(msg)
    return max_distance
