"""Adaptive trapezoidal rule for smooth or periodic integrands."""

from typing import Any, Callable, Mapping, Optional, Tuple

from complexquad.quadrature._options import (
    DEFAULT_TOLERANCE,
    TrapezoidalOptions,
)
from complexquad.quadrature._routine import (
    RefinementRoutine,
    require_finite,
)
from complexquad.quadrature._transform import Identity


class _Trapezoidal(RefinementRoutine):
    name = "trapezoidal"
    bounds_arity = 2
    options_type = TrapezoidalOptions
    min_levels = 4

    def transform(self, bounds, options):
        require_finite(bounds, self.name)
        return Identity(*bounds)

    def step(self, transform):
        return (transform.upper - transform.lower) / 2


def trapezoidal(
    f: Callable[..., Any],
    a: float,
    b: float,
    extra_args: Tuple[Any, ...] = (),
    extra_kwargs: Optional[Mapping[str, Any]] = None,
    *,
    tolerance: float = DEFAULT_TOLERANCE,
    max_levels: int = 12,
    full_output: bool = False,
):
    """
    Integrate a complex-valued function over ``[a, b]`` with the trapezoidal
    rule, halving the step until the tolerance is met.

    Converges exponentially for periodic integrands over a whole period and
    slowly otherwise. At least four halvings are done before the tolerance
    is checked, so aliasing on a coarse grid is not mistaken for
    convergence.

    Parameters
    ----------
    f : callable
        Integrand, called as ``f(x, *extra_args, **extra_kwargs)``.
    a, b : float
        Finite integration bounds.
    extra_args : tuple, optional
        Extra positional arguments for ``f``.
    extra_kwargs : mapping, optional
        Extra keyword arguments for ``f``.
    tolerance : float
        Relative tolerance, measured against the L1 norm of ``f``.
    max_levels : int
        Maximum number of step halvings.
    full_output : bool
        Also return ``{"L1 norm", "levels"}``.

    Returns
    -------
    QuadratureResult or FullQuadratureResult
    """
    routine = _Trapezoidal()
    options = routine.options_type(
        tolerance=tolerance,
        max_levels=max_levels,
        full_output=full_output,
    )
    return routine.integrate(f, (a, b), extra_args, extra_kwargs, options)
