"""Exceptions shared across the fretwork package.

Range errors are raised synchronously while a string is being built, so a
caller never observes a partially constructed string or instrument.
"""

from __future__ import annotations

from typing import Any, Optional


class MatchException(Exception):
    """Exception raised when pattern matching fails."""

    def __init__(self, value: Any) -> None:
        """Initialize a MatchException with the unmatched value.

        Args:
            value: The value that failed to match any pattern.
        """
        super().__init__(f"Failed to match value: {value}")


class RangeError(ValueError):
    """Base class for values that fall outside their allowed range."""


class ConfigurationRangeError(RangeError):
    """A string or instrument construction parameter is out of bounds.

    Carries the parameter name, the rejected value and the inclusive bounds
    so callers can report exactly which setting was wrong.
    """

    def __init__(
        self,
        name: str,
        value: Any,
        low: Optional[int] = None,
        high: Optional[int] = None,
    ) -> None:
        """Initialize the error.

        Args:
            name: The name of the offending parameter.
            value: The rejected value.
            low: The inclusive lower bound, if any.
            high: The inclusive upper bound, if any.
        """
        self.name = name
        self.value = value
        self.low = low
        self.high = high
        if low is not None and high is not None:
            detail = f"must be in [{low}, {high}]"
        elif low is not None:
            detail = f"must be at least {low}"
        elif high is not None:
            detail = f"must be at most {high}"
        else:
            detail = "is not allowed"
        super().__init__(f"{name} {value!r} out of range: {detail}")


class PositionRangeError(RangeError):
    """A fret index or relative distance does not lie on the string."""


class ArithmeticInvariantError(AssertionError):
    """A harmonic (node, order) pair breaks the reduced-fraction invariant.

    The node generator never emits such pairs, so this signals a defect
    rather than a recoverable user error.
    """

    def __init__(self, node: int, order: int) -> None:
        self.node = node
        self.order = order
        super().__init__(
            f"Invalid harmonic node {node}/{order}: "
            "requires 1 <= node < order and gcd(node, order) == 1"
        )
