"""
Complex-valued quadrature of Python callables.

Adaptive routines (evaluate callable):
    gauss_kronrod, tanh_sinh, sinh_sinh, exp_sinh, trapezoidal

Quadrature rule classes:
    GaussKronrod

Node/weight computation:
    gauss_legendre_nodes_weights, gauss_kronrod_nodes_weights

Integrand adapter:
    Evaluator, Integrand

Options and results:
    QuadratureOptions, GaussKronrodOptions, TanhSinhOptions,
    SinhSinhOptions, ExpSinhOptions, TrapezoidalOptions,
    QuadratureResult, FullQuadratureResult

Exceptions:
    QuadratureWarning, IntegrationError, IntegrandValueError,
    DivergenceError
"""

from complexquad.quadrature._exceptions import (
    DivergenceError,
    IntegrandValueError,
    IntegrationError,
    QuadratureWarning,
)
from complexquad.quadrature._exp_sinh import exp_sinh
from complexquad.quadrature._gauss_kronrod import gauss_kronrod
from complexquad.quadrature._integrand import Evaluator, Integrand
from complexquad.quadrature._nodes import (
    gauss_kronrod_nodes_weights,
    gauss_legendre_nodes_weights,
)
from complexquad.quadrature._options import (
    ExpSinhOptions,
    GaussKronrodOptions,
    QuadratureOptions,
    SinhSinhOptions,
    TanhSinhOptions,
    TrapezoidalOptions,
)
from complexquad.quadrature._result import (
    FullQuadratureResult,
    QuadratureResult,
)
from complexquad.quadrature._rules import GaussKronrod
from complexquad.quadrature._sinh_sinh import sinh_sinh
from complexquad.quadrature._tanh_sinh import tanh_sinh
from complexquad.quadrature._trapezoidal import trapezoidal

__all__ = [
    # Adaptive routines
    "gauss_kronrod",
    "tanh_sinh",
    "sinh_sinh",
    "exp_sinh",
    "trapezoidal",
    # Rule classes
    "GaussKronrod",
    # Node/weight computation
    "gauss_legendre_nodes_weights",
    "gauss_kronrod_nodes_weights",
    # Integrand adapter
    "Evaluator",
    "Integrand",
    # Options and results
    "QuadratureOptions",
    "GaussKronrodOptions",
    "TanhSinhOptions",
    "SinhSinhOptions",
    "ExpSinhOptions",
    "TrapezoidalOptions",
    "QuadratureResult",
    "FullQuadratureResult",
    # Exceptions
    "QuadratureWarning",
    "IntegrationError",
    "IntegrandValueError",
    "DivergenceError",
]
