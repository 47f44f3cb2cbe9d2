"""Exceptions for quadrature integration."""


class QuadratureWarning(UserWarning):
    """Warning for quadrature issues (e.g. refinement stopped at max_levels)."""

    pass


class IntegrationError(ValueError):
    """Error when the integral cannot be evaluated for the given integrand."""

    pass


class IntegrandValueError(IntegrationError):
    """Raised when the integrand returns a value not convertible to complex."""

    pass


class DivergenceError(IntegrationError):
    """Raised when the integral does not converge.

    Either the integrand does not tend to zero on an unbounded tail, or a
    non-finite sample or estimate was produced.
    """

    pass
