"""Exp-sinh quadrature over a half line."""

from typing import Any, Callable, Mapping, Optional, Tuple

from complexquad.quadrature._options import DEFAULT_TOLERANCE, ExpSinhOptions
from complexquad.quadrature._routine import (
    RefinementRoutine,
    require_finite,
)
from complexquad.quadrature._transform import ExpSinh


class _ExpSinh(RefinementRoutine):
    name = "exp_sinh"
    bounds_arity = 1
    options_type = ExpSinhOptions

    def transform(self, bounds, options):
        require_finite(bounds, self.name)
        (a,) = bounds
        return ExpSinh(a, options.interval_infinity)


def exp_sinh(
    f: Callable[..., Any],
    a: float,
    extra_args: Tuple[Any, ...] = (),
    extra_kwargs: Optional[Mapping[str, Any]] = None,
    *,
    tolerance: float = DEFAULT_TOLERANCE,
    max_levels: int = 15,
    full_output: bool = False,
    interval_infinity: int = 1,
):
    """
    Integrate a complex-valued function over a half line.

    With ``interval_infinity=+1`` the interval is ``[a, +inf)``, with
    ``-1`` it is ``(-inf, a]``. Both rays use the same weights, so an
    integrand odd about ``a`` gives exactly negated results.

    Parameters
    ----------
    f : callable
        Integrand, called as ``f(x, *extra_args, **extra_kwargs)``.
    a : float
        Finite end of the interval.
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
    interval_infinity : int
        ``+1`` or ``-1``, the direction of the unbounded end.

    Returns
    -------
    QuadratureResult or FullQuadratureResult

    Raises
    ------
    DivergenceError
        If ``f`` does not decay at the unbounded end.

    Examples
    --------
    >>> import math
    >>> value, error = exp_sinh(lambda x: 1j * math.exp(-x), 0.0)
    >>> abs(value - 1j) < 1e-8
    True
    """
    routine = _ExpSinh()
    options = routine.options_type(
        tolerance=tolerance,
        max_levels=max_levels,
        full_output=full_output,
        interval_infinity=interval_infinity,
    )
    return routine.integrate(f, (a,), extra_args, extra_kwargs, options)
