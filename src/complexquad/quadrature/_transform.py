"""Domain transforms mapping kernel coordinates onto the integration interval."""

import math
from abc import ABC, abstractmethod
from typing import Tuple

import torch
from torch import Tensor

from complexquad.quadrature._integrand import Evaluator

_HALF_PI = math.pi / 2

# Kernel range of the double-exponential substitutions. Beyond |t| = 6 the
# abscissas overflow or collapse onto the finite endpoint in float64.
DOUBLE_EXPONENTIAL_T_MAX = 6.0

# Level-0 step over the kernel range. Coarser grids leave smooth integrands
# unresolved before any refinement.
DOUBLE_EXPONENTIAL_STEP = 1 / 16


class DomainTransform(ABC):
    """
    Substitution ``x = phi(t)`` applied to the integrand.

    The kernel integrates ``g(t) = f(phi(t)) * phi'(t)`` over
    ``[lower, upper]``. ``unbounded`` tells which ends of the kernel range
    map to an infinite end of the integration interval.

    Attributes
    ----------
    lower, upper : float
        Kernel range.
    unbounded : tuple of bool
        ``(lower end, upper end)`` maps to infinity.
    """

    lower: float
    upper: float
    unbounded: Tuple[bool, bool] = (False, False)

    @abstractmethod
    def nodes(self, t: Tensor) -> Tuple[Tensor, Tensor]:
        """
        Map kernel coordinates to abscissas.

        Parameters
        ----------
        t : Tensor
            Kernel coordinates, float64.

        Returns
        -------
        x : Tensor
            Abscissas.
        jacobian : Tensor
            Signed ``dx/dt``, zero where the node must not be evaluated.
        """

    def evaluate(self, evaluator: Evaluator, t: Tensor) -> Tensor:
        """
        Evaluate ``f(phi(t)) * phi'(t)`` at every kernel coordinate.

        Nodes with a zero Jacobian contribute zero and are not passed to
        ``evaluator``. Evaluation is sequential in ascending index order.

        Returns
        -------
        Tensor
            complex128 tensor with the shape of ``t``.
        """
        x, jacobian = self.nodes(t)
        values = torch.zeros(t.shape, dtype=torch.complex128)
        active = jacobian != 0
        samples = [evaluator(xi) for xi in x[active].tolist()]
        if samples:
            values[active] = torch.tensor(samples, dtype=torch.complex128)
        return values * jacobian


class Identity(DomainTransform):
    """Finite interval ``[a, b]`` integrated directly."""

    def __init__(self, a: float, b: float):
        self.lower = a
        self.upper = b

    def nodes(self, t: Tensor) -> Tuple[Tensor, Tensor]:
        return t, torch.ones_like(t)


class TanhSinh(DomainTransform):
    r"""
    Tanh-sinh substitution for a finite interval.

    .. math::

        x = c + d \tanh\left(\tfrac{\pi}{2}\sinh t\right),
        \quad c = \tfrac{a + b}{2},\ d = \tfrac{b - a}{2}

    The distance to the nearer endpoint is computed from the complement
    ``1 - |tanh(s)| = 2 / (exp(2|s|) + 1)``, so abscissas close to ``a`` or
    ``b`` keep full relative precision. Nodes that round onto an endpoint
    are dropped.
    """

    def __init__(self, a: float, b: float):
        self.a = a
        self.b = b
        self.lower = -DOUBLE_EXPONENTIAL_T_MAX
        self.upper = DOUBLE_EXPONENTIAL_T_MAX

    def nodes(self, t: Tensor) -> Tuple[Tensor, Tensor]:
        s = _HALF_PI * torch.sinh(t)
        complement = 2 / (torch.exp(2 * s.abs()) + 1)
        half = (self.b - self.a) / 2

        x = torch.where(
            t < 0, self.a + half * complement, self.b - half * complement
        )
        # sech^2(s) = (1 - |tanh s|)(1 + |tanh s|)
        jacobian = (
            half * _HALF_PI * torch.cosh(t) * complement * (2 - complement)
        )

        lo, hi = min(self.a, self.b), max(self.a, self.b)
        inside = (x > lo) & (x < hi)
        return x, torch.where(inside, jacobian, torch.zeros_like(jacobian))


class SinhSinh(DomainTransform):
    r"""
    Sinh-sinh substitution for the whole real line.

    .. math::

        x = \sinh\left(\tfrac{\pi}{2}\sinh t\right)

    Parameters
    ----------
    orientation : int
        ``+1`` integrates from -infinity to +infinity, ``-1`` the reverse.
    """

    unbounded = (True, True)

    def __init__(self, orientation: int = 1):
        self.orientation = orientation
        self.lower = -DOUBLE_EXPONENTIAL_T_MAX
        self.upper = DOUBLE_EXPONENTIAL_T_MAX

    def nodes(self, t: Tensor) -> Tuple[Tensor, Tensor]:
        s = _HALF_PI * torch.sinh(t)
        x = torch.sinh(s)
        jacobian = self.orientation * _HALF_PI * torch.cosh(t) * torch.cosh(s)
        return x, jacobian


class ExpSinh(DomainTransform):
    r"""
    Exp-sinh substitution for a half line starting at ``a``.

    .. math::

        x = a + \sigma \exp\left(\tfrac{\pi}{2}\sinh t\right)

    ``sigma = +1`` covers ``[a, +inf)`` and ``sigma = -1`` covers
    ``(-inf, a]``. Both rays use the same positive weights, so an integrand
    that is odd about ``a`` gives exactly negated integrals on the two rays.

    Parameters
    ----------
    a : float
        Finite end of the ray.
    sign : int
        Direction of the ray, ``+1`` or ``-1``.
    orientation : int
        ``-1`` reverses the direction of integration.
    """

    unbounded = (False, True)

    def __init__(self, a: float, sign: int, orientation: int = 1):
        self.a = a
        self.sign = sign
        self.orientation = orientation
        self.lower = -DOUBLE_EXPONENTIAL_T_MAX
        self.upper = DOUBLE_EXPONENTIAL_T_MAX

    def nodes(self, t: Tensor) -> Tuple[Tensor, Tensor]:
        distance = torch.exp(_HALF_PI * torch.sinh(t))
        x = self.a + self.sign * distance
        jacobian = self.orientation * _HALF_PI * torch.cosh(t) * distance
        collapsed = x == self.a
        return x, torch.where(collapsed, torch.zeros_like(jacobian), jacobian)
