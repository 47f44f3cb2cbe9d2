"""Node and weight computation for Gauss-Kronrod quadrature rules."""

import math
from typing import List, Optional, Tuple

import torch
from torch import Tensor

from complexquad.quadrature._options import GAUSS_KRONROD_POINTS


def gauss_legendre_nodes_weights(
    n: int,
    dtype: torch.dtype = torch.float64,
    device: Optional[torch.device] = None,
) -> Tuple[Tensor, Tensor]:
    """
    Compute Gauss-Legendre nodes and weights on [-1, 1].

    Uses the Golub-Welsch algorithm (eigenvalues of symmetric tridiagonal matrix).

    Parameters
    ----------
    n : int
        Number of quadrature points.
    dtype : torch.dtype
        Data type for output tensors.
    device : torch.device, optional
        Device for output tensors.

    Returns
    -------
    nodes : Tensor
        Quadrature nodes, shape (n,), sorted ascending.
    weights : Tensor
        Quadrature weights, shape (n,).

    Raises
    ------
    ValueError
        If n < 1.

    References
    ----------
    Golub, G. H., & Welsch, J. H. (1969). Calculation of Gauss quadrature rules.
    Mathematics of Computation, 23(106), 221-230.
    """
    if n < 1:
        raise ValueError(f"n must be at least 1, got {n}")

    if n == 1:
        return (
            torch.tensor([0.0], dtype=dtype, device=device),
            torch.tensor([2.0], dtype=dtype, device=device),
        )

    # For Legendre: diagonal = 0, off-diagonal[k] = k / sqrt(4k^2 - 1)
    k = torch.arange(1, n, dtype=dtype, device=device)
    off_diag = k / torch.sqrt(4 * k**2 - 1)

    T = torch.diag(off_diag, diagonal=1) + torch.diag(off_diag, diagonal=-1)

    # Eigenvalues are nodes, first components of eigenvectors give weights
    eigenvalues, eigenvectors = torch.linalg.eigh(T)

    nodes = eigenvalues
    weights = 2 * eigenvectors[0, :] ** 2

    sorted_idx = torch.argsort(nodes)
    return nodes[sorted_idx], weights[sorted_idx]


def _legendre_recurrence(size: int) -> Tuple[List[float], List[float]]:
    """Monic Legendre recurrence coefficients (alpha_k, beta_k), k < size."""
    alpha = [0.0] * size
    beta = [2.0] + [k * k / (4.0 * k * k - 1.0) for k in range(1, size)]
    return alpha, beta


def _kronrod_recurrence(n: int) -> Tuple[List[float], List[float]]:
    """
    Recurrence coefficients of the Kronrod-Jacobi matrix of order 2n + 1.

    Laurie's algorithm: the first ceil(3n/2) + 1 coefficients agree with the
    Legendre ones and the remaining ones follow from mixed moments.

    References
    ----------
    Laurie, D. P. (1997). Calculation of Gauss-Kronrod quadrature rules.
    Mathematics of Computation, 66(219), 1133-1145.
    """
    alpha0, beta0 = _legendre_recurrence(math.ceil(3 * n / 2) + 1)

    a = [0.0] * (2 * n + 1)
    b = [0.0] * (2 * n + 1)
    for k in range(3 * n // 2 + 1):
        a[k] = alpha0[k]
    for k in range(math.ceil(3 * n / 2) + 1):
        b[k] = beta0[k]

    s = [0.0] * (n // 2 + 2)
    t = [0.0] * (n // 2 + 2)
    t[1] = b[n + 1]

    # Mixed moments from the known coefficients
    for m in range(n - 1):
        u = 0.0
        for k in range((m + 1) // 2, -1, -1):
            lo = m - k
            u += (
                (a[k + n + 1] - a[lo]) * t[k + 1]
                + b[k + n + 1] * s[k]
                - b[lo] * s[k + 1]
            )
            s[k + 1] = u
        s, t = t, s

    for j in range(n // 2, -1, -1):
        s[j + 1] = s[j]

    # Recover the unknown coefficients one at a time
    for m in range(n - 1, 2 * n - 2):
        u = 0.0
        j = 0
        for k in range(m + 1 - n, (m - 1) // 2 + 1):
            lo = m - k
            j = n - 1 - lo
            u += (
                -(a[k + n + 1] - a[lo]) * t[j + 1]
                - b[k + n + 1] * s[j + 1]
                + b[lo] * s[j + 2]
            )
            s[j + 1] = u
        k = (m + 1) // 2
        if m % 2 == 0:
            a[k + n + 1] = (
                a[k] + (s[j + 1] - b[k + n + 1] * s[j + 2]) / t[j + 2]
            )
        else:
            b[k + n + 1] = s[j + 1] / s[j + 2]
        s, t = t, s

    a[2 * n] = a[n - 1] - b[2 * n] * s[1] / t[1]
    return a, b


def gauss_kronrod_nodes_weights(
    order: int,
    dtype: torch.dtype = torch.float64,
    device: Optional[torch.device] = None,
) -> Tuple[Tensor, Tensor, Tensor, Tensor]:
    """
    Compute Gauss-Kronrod nodes and weights on [-1, 1].

    Returns both Kronrod (order points) and embedded Gauss weights for error
    estimation.

    Parameters
    ----------
    order : int
        Kronrod order: 15, 21, 31, 41, 51 or 61.
    dtype : torch.dtype
        Data type for output tensors.
    device : torch.device, optional
        Device for output tensors.

    Returns
    -------
    nodes : Tensor
        Kronrod nodes, shape (order,), sorted ascending.
    kronrod_weights : Tensor
        Kronrod weights, shape (order,).
    gauss_weights : Tensor
        Gauss weights, shape (order // 2,).
    gauss_indices : Tensor
        Indices into nodes where Gauss nodes are located, shape (order // 2,).

    Raises
    ------
    ValueError
        If order is not one of the supported Kronrod orders.

    Notes
    -----
    The Gauss-Kronrod pair G(n)-K(2n+1) allows error estimation by computing
    both the Gauss and Kronrod approximations. The difference gives an error
    estimate.

    The Kronrod nodes interlace the Gauss nodes, so in ascending order the
    embedded Gauss nodes sit at the odd indices 1, 3, ..., 2n - 1.

    The Kronrod-Jacobi matrix is built with Laurie's algorithm and
    diagonalised in float64; the result is cast to ``dtype`` afterwards.

    References
    ----------
    Piessens, R., et al. (1983). QUADPACK: A subroutine package for automatic integration.
    Laurie, D. P. (1997). Calculation of Gauss-Kronrod quadrature rules.
    """
    if order not in GAUSS_KRONROD_POINTS:
        raise ValueError(
            f"order must be one of {GAUSS_KRONROD_POINTS}, got {order}"
        )

    n = (order - 1) // 2
    a, b = _kronrod_recurrence(n)

    diag = torch.tensor(a, dtype=torch.float64, device=device)
    off_diag = torch.sqrt(
        torch.tensor(b[1:], dtype=torch.float64, device=device)
    )
    J = (
        torch.diag(diag)
        + torch.diag(off_diag, diagonal=1)
        + torch.diag(off_diag, diagonal=-1)
    )

    eigenvalues, eigenvectors = torch.linalg.eigh(J)
    sorted_idx = torch.argsort(eigenvalues)
    nodes = eigenvalues[sorted_idx]
    k_weights = b[0] * eigenvectors[0, sorted_idx] ** 2

    # Exact symmetry about 0
    nodes = (nodes - nodes.flip(0)) / 2
    nodes[n] = 0.0
    k_weights = (k_weights + k_weights.flip(0)) / 2

    _, g_weights = gauss_legendre_nodes_weights(
        n, dtype=torch.float64, device=device
    )
    g_indices = torch.arange(1, 2 * n, 2, dtype=torch.long, device=device)

    return (
        nodes.to(dtype),
        k_weights.to(dtype),
        g_weights.to(dtype),
        g_indices,
    )
