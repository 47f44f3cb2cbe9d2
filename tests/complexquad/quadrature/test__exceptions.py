import warnings

import pytest

from complexquad.quadrature import (
    DivergenceError,
    IntegrandValueError,
    IntegrationError,
    QuadratureWarning,
)


class TestExceptions:
    def test_quadrature_warning_is_user_warning(self):
        assert issubclass(QuadratureWarning, UserWarning)

    def test_integration_error_is_value_error(self):
        assert issubclass(IntegrationError, ValueError)

    def test_subclasses(self):
        assert issubclass(IntegrandValueError, IntegrationError)
        assert issubclass(DivergenceError, IntegrationError)
        assert not issubclass(DivergenceError, IntegrandValueError)

    def test_quadrature_warning_can_be_raised(self):
        with pytest.warns(QuadratureWarning, match="test"):
            warnings.warn("test", QuadratureWarning)

    def test_divergence_error_caught_as_value_error(self):
        with pytest.raises(ValueError, match="does not converge"):
            raise DivergenceError("integral does not converge")
