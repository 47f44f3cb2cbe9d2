"""Adaptive quadrature using Gauss-Kronrod rules."""

import heapq
import itertools
import warnings
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

import torch

from complexquad.quadrature._exceptions import (
    DivergenceError,
    QuadratureWarning,
)
from complexquad.quadrature._integrand import Evaluator
from complexquad.quadrature._options import (
    DEFAULT_TOLERANCE,
    GaussKronrodOptions,
)
from complexquad.quadrature._result import KernelOutcome
from complexquad.quadrature._routine import QuadratureRoutine, require_finite
from complexquad.quadrature._rules import GaussKronrod
from complexquad.quadrature._transform import DomainTransform, Identity


def adaptive_gauss_kronrod(
    evaluator: Evaluator,
    transform: DomainTransform,
    rule: GaussKronrod,
    *,
    tolerance: float,
    max_levels: int,
) -> KernelOutcome:
    """
    Integrate by repeated bisection of the subinterval with the largest
    error.

    Parameters
    ----------
    evaluator : Evaluator
        Integrand.
    transform : DomainTransform
        Finite-interval transform; the rule runs over
        ``[transform.lower, transform.upper]``.
    rule : GaussKronrod
        Rule applied on every subinterval.
    tolerance : float
        Stop once the summed error is at most ``tolerance * L1``.
    max_levels : int
        Maximum bisection depth of any subinterval. ``0`` applies the rule
        once over the whole interval.

    Returns
    -------
    KernelOutcome
        ``levels`` holds the deepest bisection performed.

    Warns
    -----
    QuadratureWarning
        If no subinterval can be split further and the tolerance is not met.
    """

    def f(x):
        return transform.evaluate(evaluator, x)

    def apply(left: float, right: float) -> Tuple[complex, float, float]:
        result, error, l1_norm = rule.integrate_with_error(f, left, right)
        if not (torch.isfinite(result) and torch.isfinite(error)):
            raise DivergenceError(
                "integral does not converge: the integrand is not finite "
                f"on [{left:.6g}, {right:.6g}]"
            )
        return complex(result.item()), error.item(), l1_norm.item()

    a, b = transform.lower, transform.upper
    result, error, l1_norm = apply(a, b)

    # Max-heap on error; the counter keeps equal errors in insertion order
    counter = itertools.count()
    heap = [(-error, next(counter), 0, a, b, result, l1_norm)]
    finished = []

    total_error = error
    total_l1 = l1_norm
    deepest = 0

    while heap and total_error > tolerance * total_l1:
        entry = heapq.heappop(heap)
        neg_err, _, depth, left, right, result, l1_norm = entry

        if depth >= max_levels:
            finished.append(entry)
            continue

        # Bisect
        mid = (left + right) / 2
        left_result, left_error, left_l1 = apply(left, mid)
        right_result, right_error, right_l1 = apply(mid, right)

        total_error += left_error + right_error + neg_err
        total_l1 += left_l1 + right_l1 - l1_norm
        deepest = max(deepest, depth + 1)

        for child in (
            (left_error, left, mid, left_result, left_l1),
            (right_error, mid, right, right_result, right_l1),
        ):
            child_error, lo, hi, child_result, child_l1 = child
            entry = (-child_error, next(counter), depth + 1, lo, hi)
            heapq.heappush(heap, entry + (child_result, child_l1))

    # Totals from the leaves, not the running sums
    leaves = heap + finished
    result = sum((entry[5] for entry in leaves), 0j)
    error = sum(-entry[0] for entry in leaves)
    l1_norm = sum(entry[6] for entry in leaves)

    if error > tolerance * l1_norm:
        warnings.warn(
            f"Quadrature did not converge at bisection depth {max_levels}. "
            f"Error: {error:.2e}, tolerance: {tolerance * l1_norm:.2e}",
            QuadratureWarning,
        )

    return KernelOutcome(result, error, l1_norm, deepest)


class _GaussKronrod(QuadratureRoutine):
    name = "gauss_kronrod"
    bounds_arity = 2
    options_type = GaussKronrodOptions

    def __init__(self):
        self._rules: Dict[int, GaussKronrod] = {}

    def rule(self, points: int) -> GaussKronrod:
        """Get the cached rule for ``points``."""
        if points not in self._rules:
            self._rules[points] = GaussKronrod(points)
        return self._rules[points]

    def transform(self, bounds, options):
        require_finite(bounds, self.name)
        return Identity(*bounds)

    def kernel(self, evaluator, transform, options):
        return adaptive_gauss_kronrod(
            evaluator,
            transform,
            self.rule(options.points),
            tolerance=options.tolerance,
            max_levels=options.max_levels,
        )

    def diagnostics(self, outcome, options):
        nodes, weights = self.rule(options.points).nodes_and_weights()
        return {
            "L1 norm": outcome.l1_norm,
            "abscissa": nodes.tolist(),
            "weights": weights.tolist(),
        }


def gauss_kronrod(
    f: Callable[..., Any],
    a: float,
    b: float,
    extra_args: Tuple[Any, ...] = (),
    extra_kwargs: Optional[Mapping[str, Any]] = None,
    *,
    tolerance: float = DEFAULT_TOLERANCE,
    max_levels: int = 15,
    full_output: bool = False,
    points: int = 31,
):
    """
    Integrate a complex-valued function over a finite interval with
    adaptive Gauss-Kronrod quadrature.

    Parameters
    ----------
    f : callable
        Integrand, called as ``f(x, *extra_args, **extra_kwargs)`` with a
        Python float ``x``. Must return a number convertible to
        ``complex``.
    a, b : float
        Finite integration bounds. ``b < a`` negates the result.
    extra_args : tuple, optional
        Extra positional arguments for ``f``.
    extra_kwargs : mapping, optional
        Extra keyword arguments for ``f``.
    tolerance : float
        Relative tolerance, measured against the L1 norm of ``f``.
    max_levels : int
        Maximum bisection depth. ``0`` applies a single rule.
    full_output : bool
        Also return a diagnostics dict.
    points : int
        Kronrod order: 15, 21, 31, 41, 51 or 61.

    Returns
    -------
    QuadratureResult or FullQuadratureResult
        ``(value, error)``, or ``(value, error, info)`` with
        ``full_output=True``. ``info`` holds ``"L1 norm"`` and the Kronrod
        ``"abscissa"`` and ``"weights"`` on ``[-1, 1]``.

    Raises
    ------
    TypeError
        On a wrong bound type or a bad callable or argument container.
    ValueError
        On infinite or NaN bounds, or an out-of-range option.
    IntegrandValueError
        If ``f`` returns something that is not a number.
    DivergenceError
        If the estimate is not finite.

    Warns
    -----
    QuadratureWarning
        If the tolerance is not met at ``max_levels``.

    Examples
    --------
    >>> import cmath
    >>> value, error = gauss_kronrod(lambda x: cmath.exp(1j * x), 0.0, 1.0)
    >>> abs(value - (cmath.exp(1j) - 1) / 1j) < 1e-12
    True
    """
    routine = _GaussKronrod()
    options = routine.options_type(
        tolerance=tolerance,
        max_levels=max_levels,
        full_output=full_output,
        points=points,
    )
    return routine.integrate(f, (a, b), extra_args, extra_kwargs, options)
