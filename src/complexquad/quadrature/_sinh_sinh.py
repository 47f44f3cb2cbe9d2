"""Sinh-sinh quadrature over the whole real line."""

from typing import Any, Callable, Mapping, Optional, Tuple

from complexquad.quadrature._options import DEFAULT_TOLERANCE, SinhSinhOptions
from complexquad.quadrature._routine import RefinementRoutine
from complexquad.quadrature._transform import SinhSinh


class _SinhSinh(RefinementRoutine):
    name = "sinh_sinh"
    bounds_arity = 0
    options_type = SinhSinhOptions

    def transform(self, bounds, options):
        return SinhSinh()


def sinh_sinh(
    f: Callable[..., Any],
    extra_args: Tuple[Any, ...] = (),
    extra_kwargs: Optional[Mapping[str, Any]] = None,
    *,
    tolerance: float = DEFAULT_TOLERANCE,
    max_levels: int = 15,
    full_output: bool = False,
):
    """
    Integrate a complex-valued function from -infinity to +infinity.

    Uses ``x = sinh(pi/2 * sinh(t))``. ``f`` must decay at both tails;
    otherwise :class:`DivergenceError` is raised.

    Parameters
    ----------
    f : callable
        Integrand, called as ``f(x, *extra_args, **extra_kwargs)``.
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
    routine = _SinhSinh()
    options = routine.options_type(
        tolerance=tolerance,
        max_levels=max_levels,
        full_output=full_output,
    )
    return routine.integrate(f, (), extra_args, extra_kwargs, options)
