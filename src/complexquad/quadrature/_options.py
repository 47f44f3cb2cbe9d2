"""Configuration records for the quadrature routines."""

import math
import operator
from dataclasses import dataclass

import torch

DEFAULT_TOLERANCE = math.sqrt(torch.finfo(torch.float64).eps)

GAUSS_KRONROD_POINTS = (15, 21, 31, 41, 51, 61)


def _validate_tolerance(tolerance) -> float:
    if isinstance(tolerance, (str, bytes, complex)):
        raise TypeError(
            f"tolerance must be a real number, got {type(tolerance).__name__}"
        )
    try:
        tolerance = float(tolerance)
    except (TypeError, ValueError):
        raise TypeError(
            f"tolerance must be a real number, got {type(tolerance).__name__}"
        ) from None
    if not math.isfinite(tolerance) or tolerance <= 0:
        raise ValueError(f"tolerance must be positive, got {tolerance}")
    return tolerance


def _validate_max_levels(max_levels) -> int:
    try:
        max_levels = operator.index(max_levels)
    except TypeError:
        raise TypeError(
            f"max_levels must be an integer, got {type(max_levels).__name__}"
        ) from None
    if max_levels < 0:
        raise ValueError(f"max_levels must be non-negative, got {max_levels}")
    return max_levels


@dataclass(frozen=True)
class QuadratureOptions:
    """
    Options shared by every quadrature routine.

    Attributes
    ----------
    tolerance : float
        Convergence threshold, relative to the L1 norm of the integrand.
        Default is the square root of float64 machine epsilon.
    max_levels : int
        Maximum number of refinement levels. ``0`` disables refinement but
        still evaluates the base rule.
    full_output : bool
        Whether the routine also returns a diagnostics dict.
    """

    tolerance: float = DEFAULT_TOLERANCE
    max_levels: int = 15
    full_output: bool = False

    def __post_init__(self):
        object.__setattr__(
            self, "tolerance", _validate_tolerance(self.tolerance)
        )
        object.__setattr__(
            self, "max_levels", _validate_max_levels(self.max_levels)
        )
        object.__setattr__(self, "full_output", bool(self.full_output))


@dataclass(frozen=True)
class GaussKronrodOptions(QuadratureOptions):
    """
    Options for :func:`gauss_kronrod`.

    Attributes
    ----------
    points : int
        Number of Kronrod points per subinterval, one of
        15, 21, 31, 41, 51 or 61. Default 31.
    """

    points: int = 31

    def __post_init__(self):
        super().__post_init__()
        points = self.points
        if isinstance(points, bool) or points not in GAUSS_KRONROD_POINTS:
            raise ValueError(
                f"points must be one of {GAUSS_KRONROD_POINTS}, "
                f"got {points!r}"
            )
        object.__setattr__(self, "points", int(self.points))


@dataclass(frozen=True)
class TanhSinhOptions(QuadratureOptions):
    """Options for :func:`tanh_sinh`."""


@dataclass(frozen=True)
class SinhSinhOptions(QuadratureOptions):
    """Options for :func:`sinh_sinh`."""


@dataclass(frozen=True)
class ExpSinhOptions(QuadratureOptions):
    """
    Options for :func:`exp_sinh`.

    Attributes
    ----------
    interval_infinity : int
        ``+1`` integrates from the bound to +infinity, ``-1`` from -infinity
        to the bound.
    """

    interval_infinity: int = 1

    def __post_init__(self):
        super().__post_init__()
        sign = self.interval_infinity
        if isinstance(sign, bool) or sign not in (1, -1):
            raise ValueError(
                "interval_infinity must be +1 or -1, "
                f"got {self.interval_infinity!r}"
            )
        object.__setattr__(
            self, "interval_infinity", int(self.interval_infinity)
        )


@dataclass(frozen=True)
class TrapezoidalOptions(QuadratureOptions):
    """Options for :func:`trapezoidal`. Default ``max_levels`` is 12."""

    max_levels: int = 12
