import cmath
import math
import warnings

import pytest


class TestSinhSinh:
    def test_gaussian(self):
        from complexquad.quadrature import sinh_sinh

        value, error = sinh_sinh(lambda x: (1 + 1j) * math.exp(-x * x))

        assert abs(value - math.sqrt(math.pi) * (1 + 1j)) < 1e-8
        assert error < 1e-7

    def test_algebraic_decay(self):
        from complexquad.quadrature import sinh_sinh

        value, _ = sinh_sinh(
            lambda x: complex(1 / (1 + x * x), math.exp(-abs(x)))
        )

        assert abs(value - complex(math.pi, 2.0)) < 1e-8

    def test_fourier_of_gaussian(self):
        from complexquad.quadrature import sinh_sinh

        value, _ = sinh_sinh(lambda x: cmath.exp(1j * x - x * x))

        assert abs(value - math.sqrt(math.pi) * math.exp(-0.25)) < 1e-8

    @pytest.mark.parametrize(
        "f", [lambda x: 1j, lambda x: cmath.exp(1j * x)]
    )
    def test_not_decaying_raises(self, f):
        from complexquad.quadrature import DivergenceError, sinh_sinh

        with pytest.raises(DivergenceError, match="does not converge"):
            sinh_sinh(f)

    def test_divergence_is_value_error(self):
        from complexquad.quadrature import sinh_sinh

        with pytest.raises(ValueError):
            sinh_sinh(lambda x: 1.0)

    def test_full_output(self):
        from complexquad.quadrature import sinh_sinh

        value, error, info = sinh_sinh(
            lambda x: 1j * math.exp(-x * x), full_output=True, max_levels=6
        )

        assert set(info) == {"L1 norm", "levels"}
        assert 0 <= info["levels"] <= 6
        assert info["L1 norm"] == pytest.approx(math.sqrt(math.pi), rel=1e-6)

    def test_max_levels_zero(self):
        """The unrefined grid already resolves a smooth integrand"""
        from complexquad.quadrature import sinh_sinh

        def f(x):
            return (1 + 1j) * math.exp(-x * x)

        with warnings.catch_warnings():
            warnings.simplefilter("ignore")
            single, _, info = sinh_sinh(f, max_levels=0, full_output=True)
            refined, _ = sinh_sinh(f, max_levels=10)

        assert info["levels"] == 0
        assert abs(single - refined) < 1.49e-8 * abs(refined)
        assert abs(single - math.sqrt(math.pi) * (1 + 1j)) < 1e-8

    def test_extra_arguments(self):
        from complexquad.quadrature import sinh_sinh

        def f(x, width, *, height):
            return height * math.exp(-((x / width) ** 2))

        value, _ = sinh_sinh(f, (2.0,), {"height": 1j})

        assert abs(value - 2j * math.sqrt(math.pi)) < 1e-8

    def test_takes_no_bounds(self):
        from complexquad.quadrature import sinh_sinh

        with pytest.raises(TypeError):
            sinh_sinh(lambda x: 1j, 0.0)
