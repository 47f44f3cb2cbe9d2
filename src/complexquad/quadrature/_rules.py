"""Quadrature rule classes."""

from typing import Callable, Tuple

import torch
from torch import Tensor

from complexquad.quadrature._nodes import gauss_kronrod_nodes_weights
from complexquad.quadrature._options import GAUSS_KRONROD_POINTS

_EPS = torch.finfo(torch.float64).eps


class GaussKronrod:
    """
    Gauss-Kronrod quadrature rule with embedded error estimation.

    Uses G(n)-K(2n+1) pairs: G7-K15, G10-K21, G15-K31, G20-K41, G25-K51,
    G30-K61.

    Parameters
    ----------
    order : int
        Kronrod order: 15, 21, 31, 41, 51 or 61.

    Examples
    --------
    >>> rule = GaussKronrod(31)  # G15-K31
    >>> result, error, l1 = rule.integrate_with_error(
    ...     lambda x: torch.exp(1j * x), 0.0, 1.0
    ... )

    Attributes
    ----------
    order : int
        Number of Kronrod points.
    """

    def __init__(self, order: int = 31):
        if order not in GAUSS_KRONROD_POINTS:
            raise ValueError(
                f"order must be one of {GAUSS_KRONROD_POINTS}, got {order}"
            )
        self.order = order
        self._cache: dict = {}

    def _get_nodes_weights(self) -> Tuple[Tensor, Tensor, Tensor, Tensor]:
        """Get cached nodes and weights."""
        if "float64" not in self._cache:
            self._cache["float64"] = gauss_kronrod_nodes_weights(
                self.order, dtype=torch.float64
            )
        return self._cache["float64"]

    def nodes_and_weights(self) -> Tuple[Tensor, Tensor]:
        """
        Return the Kronrod nodes and weights on [-1, 1].

        Returns
        -------
        nodes : Tensor
            Shape (order,), ascending.
        weights : Tensor
            Shape (order,).
        """
        nodes, k_weights, _, _ = self._get_nodes_weights()
        return nodes, k_weights

    def integrate_with_error(
        self,
        f: Callable[[Tensor], Tensor],
        a: float,
        b: float,
    ) -> Tuple[Tensor, Tensor, Tensor]:
        """
        Integrate f with error estimate.

        Parameters
        ----------
        f : callable
            Integrand. Takes a float64 tensor of abscissas, returns a
            complex tensor of the same shape.
        a, b : float
            Integration bounds.

        Returns
        -------
        result : Tensor
            Kronrod approximation.
        error : Tensor
            Estimated error: ``|Kronrod - Gauss|``, but never below
            ``2 * eps * |Kronrod|``.
        l1_norm : Tensor
            Kronrod approximation of the integral of ``|f|``.
        """
        nodes, k_weights, g_weights, g_indices = self._get_nodes_weights()

        # Transform to [a, b]
        half_width = (b - a) / 2
        center = (a + b) / 2

        values = f(half_width * nodes + center)

        kronrod_result = half_width * (values * k_weights).sum(dim=-1)
        gauss_result = half_width * (values[..., g_indices] * g_weights).sum(
            dim=-1
        )
        l1_norm = abs(half_width) * (values.abs() * k_weights).sum(dim=-1)

        error = torch.maximum(
            torch.abs(kronrod_result - gauss_result),
            2 * _EPS * torch.abs(kronrod_result),
        )

        return kronrod_result, error, l1_norm
