"""Exception types raised by springs and splines."""

from __future__ import annotations


class SpringSplineError(Exception):
    """Base class for every error raised by this package."""


class UnsupportedValueError(SpringSplineError, TypeError):
    """A value whose type no spring kind can animate."""

    def __init__(self, value):
        super().__init__(f"{type(value).__name__!r} is not a springable value: {value!r}")
        self.value = value


class ValueKindMismatchError(SpringSplineError, TypeError):
    """A value of a different kind than the spring it was given to."""

    def __init__(self, expected, value, role: str = "value"):
        super().__init__(
            f"{role} must be a {expected.value} for this spring, got {type(value).__name__}: {value!r}"
        )
        self.expected = expected
        self.value = value
        self.role = role


class InvalidMemberError(SpringSplineError, AttributeError):
    """Read or write of a member the object does not have."""

    def __init__(self, owner: str, name: str):
        super().__init__(f"{name!r} is not a valid member of {owner}")
        self.owner = owner
        self.name = name


class InvalidParameterError(SpringSplineError, ValueError):
    """A tunable set outside of its domain."""


class SplineError(SpringSplineError, ValueError):
    """Invalid spline construction or query."""


class DegenerateSplineError(SplineError):
    """Arc-length query on a spline without usable length tables."""


__all__ = [
    "SpringSplineError",
    "UnsupportedValueError",
    "ValueKindMismatchError",
    "InvalidMemberError",
    "InvalidParameterError",
    "SplineError",
    "DegenerateSplineError",
]
