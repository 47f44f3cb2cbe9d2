"""Result types returned by the quadrature routines."""

import cmath
import math
from typing import Any, Dict, NamedTuple, Optional, Union

from complexquad.quadrature._exceptions import DivergenceError


class KernelOutcome(NamedTuple):
    """Raw output of a quadrature kernel.

    Parameters
    ----------
    value : complex
        Integral estimate.
    error : float
        Absolute error estimate.
    l1_norm : float
        Estimate of the integral of ``|f|``.
    levels : int
        Refinement levels performed. Zero for kernels without levels.
    """

    value: complex
    error: float
    l1_norm: float
    levels: int = 0


class QuadratureResult(NamedTuple):
    """Integral estimate and its error estimate.

    Parameters
    ----------
    value : complex
        Integral estimate.
    error : float
        Absolute error estimate.
    """

    value: complex
    error: float


class FullQuadratureResult(NamedTuple):
    """Integral estimate, error estimate and diagnostics.

    Parameters
    ----------
    value : complex
        Integral estimate.
    error : float
        Absolute error estimate.
    info : dict
        Algorithm-specific diagnostics, e.g. ``"L1 norm"`` and ``"levels"``.
    """

    value: complex
    error: float
    info: Dict[str, Any]


def marshal(
    outcome: KernelOutcome,
    info: Optional[Dict[str, Any]] = None,
) -> Union[QuadratureResult, FullQuadratureResult]:
    """
    Convert a kernel outcome to the public result tuple.

    Raises
    ------
    DivergenceError
        If the estimate or its error is not finite.
    """
    value = complex(outcome.value)
    error = float(outcome.error)

    if not (cmath.isfinite(value) and math.isfinite(error)):
        raise DivergenceError(
            f"integral does not converge: estimate {value}, error {error}"
        )

    if info is None:
        return QuadratureResult(value, error)
    return FullQuadratureResult(value, error, info)
