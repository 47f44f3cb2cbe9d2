"""Dispatch shared by every quadrature routine."""

import math
from abc import ABC, abstractmethod
from typing import (
    Any,
    Callable,
    Dict,
    Mapping,
    Optional,
    Sequence,
    Tuple,
    Type,
)

from complexquad.quadrature._integrand import Evaluator, Integrand
from complexquad.quadrature._options import QuadratureOptions
from complexquad.quadrature._refinement import refine
from complexquad.quadrature._result import KernelOutcome, marshal
from complexquad.quadrature._transform import (
    DOUBLE_EXPONENTIAL_STEP,
    DomainTransform,
)

_BOUND_NAMES = ("a", "b")


def as_bound(value: Any, name: str) -> float:
    """
    Convert an integration bound to ``float``.

    Raises
    ------
    TypeError
        If ``value`` has no real-number conversion. Strings are rejected
        even when they spell a number.
    ValueError
        If ``value`` is NaN.
    """
    if isinstance(value, (str, bytes, bytearray, complex)):
        raise TypeError(
            f"{name} must be a real number, not {type(value).__name__}"
        )
    try:
        bound = float(value)
    except (TypeError, ValueError):
        raise TypeError(
            f"{name} must be a real number, not {type(value).__name__}"
        ) from None
    if math.isnan(bound):
        raise ValueError(f"{name} must not be NaN")
    return bound


def require_finite(bounds: Sequence[float], routine: str) -> None:
    for name, bound in zip(_BOUND_NAMES, bounds):
        if math.isinf(bound):
            raise ValueError(
                f"{routine} requires finite bounds, got {name}={bound}"
            )


class QuadratureRoutine(ABC):
    """
    One quadrature algorithm behind the common calling convention.

    Subclasses declare how many bounds they take, which transform maps the
    interval onto the kernel range, how the kernel runs, and which
    diagnostics they report.
    """

    name: str
    bounds_arity: int
    options_type: Type[QuadratureOptions]

    @abstractmethod
    def transform(
        self, bounds: Tuple[float, ...], options: QuadratureOptions
    ) -> DomainTransform:
        """Select the domain transform for ``bounds``."""

    @abstractmethod
    def kernel(
        self,
        evaluator: Evaluator,
        transform: DomainTransform,
        options: QuadratureOptions,
    ) -> KernelOutcome:
        """Run the quadrature kernel."""

    @abstractmethod
    def diagnostics(
        self, outcome: KernelOutcome, options: QuadratureOptions
    ) -> Dict[str, Any]:
        """Build the ``full_output`` info dict."""

    def integrate(
        self,
        f: Callable[..., Any],
        bounds: Sequence[Any],
        extra_args: Optional[Tuple[Any, ...]],
        extra_kwargs: Optional[Mapping[str, Any]],
        options: QuadratureOptions,
    ):
        """
        Validate the call, run the kernel and package the result.

        Exceptions raised by ``f`` propagate unchanged.
        """
        if len(bounds) != self.bounds_arity:
            raise TypeError(
                f"{self.name} takes {self.bounds_arity} bound(s), "
                f"got {len(bounds)}"
            )
        bounds = tuple(
            as_bound(bound, name) for bound, name in zip(bounds, _BOUND_NAMES)
        )

        integrand = Integrand(f, extra_args, extra_kwargs)

        if len(bounds) == 2 and bounds[0] == bounds[1]:
            outcome = KernelOutcome(0j, 0.0, 0.0, 0)
        else:
            transform = self.transform(bounds, options)
            outcome = self.kernel(integrand, transform, options)

        if not options.full_output:
            return marshal(outcome)
        return marshal(outcome, self.diagnostics(outcome, options))


class RefinementRoutine(QuadratureRoutine):
    """Routines that run the step-halving trapezoidal kernel."""

    min_levels = 0

    def step(self, transform: DomainTransform) -> float:
        """Level-0 step of the kernel grid."""
        return DOUBLE_EXPONENTIAL_STEP

    def kernel(
        self,
        evaluator: Evaluator,
        transform: DomainTransform,
        options: QuadratureOptions,
    ) -> KernelOutcome:
        return refine(
            evaluator,
            transform,
            step=self.step(transform),
            tolerance=options.tolerance,
            max_levels=options.max_levels,
            min_levels=min(self.min_levels, options.max_levels),
        )

    def diagnostics(
        self, outcome: KernelOutcome, options: QuadratureOptions
    ) -> Dict[str, Any]:
        return {"L1 norm": outcome.l1_norm, "levels": outcome.levels}
