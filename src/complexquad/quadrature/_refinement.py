"""Step-halving trapezoidal kernel shared by the double-exponential methods."""

import warnings

import torch
from torch import Tensor

from complexquad.quadrature._exceptions import (
    DivergenceError,
    QuadratureWarning,
)
from complexquad.quadrature._integrand import Evaluator
from complexquad.quadrature._result import KernelOutcome
from complexquad.quadrature._transform import DomainTransform


def _check_finite(values: Tensor, t: Tensor) -> None:
    finite = torch.isfinite(values)
    if not finite.all():
        where = t[~finite][0].item()
        raise DivergenceError(
            "integral does not converge: the weighted integrand is not "
            f"finite at kernel coordinate t={where:.6g}"
        )


def _check_tails(
    values: Tensor,
    transform: DomainTransform,
    step: float,
    tolerance: float,
    l1_norm: float,
) -> None:
    lower_unbounded, upper_unbounded = transform.unbounded
    tail = 0.0
    if lower_unbounded:
        tail += values[0].abs().item()
    if upper_unbounded:
        tail += values[-1].abs().item()

    if step * tail > tolerance * l1_norm:
        raise DivergenceError(
            "integral does not converge: the integrand does not tend to "
            f"zero at infinity (tail contribution {step * tail:.3e}, "
            f"L1 norm {l1_norm:.3e})"
        )


def refine(
    evaluator: Evaluator,
    transform: DomainTransform,
    *,
    step: float,
    tolerance: float,
    max_levels: int,
    min_levels: int = 0,
) -> KernelOutcome:
    r"""
    Integrate ``evaluator`` through ``transform`` with a trapezoidal rule,
    halving the step until converged.

    Parameters
    ----------
    evaluator : Evaluator
        Integrand.
    transform : DomainTransform
        Substitution; the rule runs over ``[transform.lower, transform.upper]``.
    step : float
        Level-0 step. The kernel range must hold an even number of steps.
    tolerance : float
        Stop once the error estimate is at most ``tolerance * L1``.
    max_levels : int
        Maximum number of step halvings.
    min_levels : int
        Halvings performed before the tolerance is checked.

    Returns
    -------
    KernelOutcome
        Estimate, error estimate, L1 norm and number of halvings.

    Raises
    ------
    DivergenceError
        If a weighted sample is not finite, or an unbounded tail of the
        kernel range carries more than ``tolerance * L1`` at level 0.

    Warns
    -----
    QuadratureWarning
        If ``max_levels`` is reached before the tolerance is met.

    Notes
    -----
    Level 0 evaluates the full grid. Its error estimate is the difference
    from the sub-grid with twice the step. Each further level evaluates only
    the new midpoints:

    .. math::

        I_{h/2} = \tfrac{1}{2} I_h + \tfrac{h}{2} \sum_j g(t_j + \tfrac{h}{2})

    and the error estimate is ``|I_{h/2} - I_h|``.
    """
    lower, upper = transform.lower, transform.upper

    if lower == upper:
        return KernelOutcome(0j, 0.0, 0.0, 0)

    intervals = round((upper - lower) / step)

    t = lower + step * torch.arange(intervals + 1, dtype=torch.float64)
    t[-1] = upper
    values = transform.evaluate(evaluator, t)
    _check_finite(values, t)

    width = abs(step)
    magnitudes = values.abs()
    ends = (values[0] + values[-1]) / 2
    ends_l1 = (magnitudes[0] + magnitudes[-1]) / 2

    estimate = step * (ends + values[1:-1].sum())
    l1_norm = width * (ends_l1 + magnitudes[1:-1].sum())
    coarse = 2 * step * (ends + values[2:-1:2].sum())
    error = (estimate - coarse).abs()

    _check_tails(values, transform, width, tolerance, l1_norm.item())

    levels = 0
    while levels < max_levels:
        step /= 2
        width /= 2
        t = lower + step * (
            2 * torch.arange(intervals, dtype=torch.float64) + 1
        )
        values = transform.evaluate(evaluator, t)
        _check_finite(values, t)

        refined = estimate / 2 + step * values.sum()
        l1_norm = l1_norm / 2 + width * values.abs().sum()
        error = (refined - estimate).abs()
        estimate = refined

        intervals *= 2
        levels += 1

        if levels >= min_levels and error <= tolerance * l1_norm:
            break

    if error > tolerance * l1_norm:
        warnings.warn(
            f"Quadrature did not converge after {levels} levels. "
            f"Error: {error.item():.2e}, "
            f"tolerance: {tolerance * l1_norm.item():.2e}",
            QuadratureWarning,
        )

    return KernelOutcome(
        complex(estimate.item()),
        error.item(),
        l1_norm.item(),
        levels,
    )
