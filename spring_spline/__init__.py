"""Spring and spline primitives for property animation."""

from __future__ import annotations

from . import draw, errors, handlers, orientation, properties, simulation, spline, spring, utils, values
from .draw import CurveSample, collect_curve_samples, collect_curve_segments, diagnose_curve
from .errors import (
    DegenerateSplineError,
    InvalidMemberError,
    InvalidParameterError,
    SplineError,
    SpringSplineError,
    UnsupportedValueError,
    ValueKindMismatchError,
)
from .handlers import Signal, Ticker, default_ticker
from .properties import settings
from .spline import Alignment, Spline
from .spring import Spring
from .utils import ManualClock, monotonic_clock
from .values import Dim, Dim2, ValueKind

__version__ = "0.9.0"

__all__ = [
    "Spring",
    "Spline",
    "Alignment",
    "Dim",
    "Dim2",
    "ValueKind",
    "Signal",
    "Ticker",
    "default_ticker",
    "ManualClock",
    "monotonic_clock",
    "CurveSample",
    "collect_curve_samples",
    "collect_curve_segments",
    "diagnose_curve",
    "settings",
    "SpringSplineError",
    "UnsupportedValueError",
    "ValueKindMismatchError",
    "InvalidMemberError",
    "InvalidParameterError",
    "SplineError",
    "DegenerateSplineError",
    "draw",
    "errors",
    "handlers",
    "orientation",
    "properties",
    "simulation",
    "spline",
    "spring",
    "utils",
    "values",
]
