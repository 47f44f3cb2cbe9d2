import cmath

import pytest
import torch


class TestGaussKronrod:
    @pytest.mark.parametrize("order", [15, 21, 31, 41, 51, 61])
    def test_smooth_complex(self, order):
        """Integrate exp(i x) from 0 to 1"""
        from complexquad.quadrature import GaussKronrod

        rule = GaussKronrod(order)
        result, error, l1_norm = rule.integrate_with_error(
            lambda x: torch.exp(1j * x), 0.0, 1.0
        )
        expected = (cmath.exp(1j) - 1) / 1j

        assert abs(result.item() - expected) < 1e-14
        assert error.item() < 1e-12
        assert l1_norm.item() == pytest.approx(1.0, rel=1e-14)

    def test_polynomial_exact(self):
        """G7-K15 integrates a degree-20 polynomial exactly"""
        from complexquad.quadrature import GaussKronrod

        rule = GaussKronrod(15)
        result, _, _ = rule.integrate_with_error(
            lambda x: (1 + 2j) * x**20, -1.0, 1.0
        )

        assert abs(result.item() - (1 + 2j) * 2 / 21) < 1e-14

    def test_error_estimate_from_gauss(self):
        """Error is the Kronrod-Gauss difference when above the floor"""
        from complexquad.quadrature import GaussKronrod, gauss_kronrod_nodes_weights

        rule = GaussKronrod(15)

        def f(x):
            return torch.exp(20j * x)

        result, error, _ = rule.integrate_with_error(f, 0.0, 2.0)

        nodes, _, g_weights, g_indices = gauss_kronrod_nodes_weights(15)
        gauss = (f(nodes[g_indices] + 1.0) * g_weights).sum()

        assert error.item() == pytest.approx(abs(result - gauss).item())

    def test_error_floor(self):
        from complexquad.quadrature import GaussKronrod

        rule = GaussKronrod(21)
        result, error, _ = rule.integrate_with_error(
            lambda x: torch.full_like(x, 3.0, dtype=torch.complex128),
            0.0,
            1.0,
        )

        eps = torch.finfo(torch.float64).eps
        assert error.item() >= 2 * eps * abs(result.item())
        assert error.item() > 0

    def test_reversed_bounds(self):
        from complexquad.quadrature import GaussKronrod

        rule = GaussKronrod(21)

        def f(x):
            return torch.exp(1j * x)

        forward, _, forward_l1 = rule.integrate_with_error(f, 0.0, 1.0)
        backward, _, backward_l1 = rule.integrate_with_error(f, 1.0, 0.0)

        assert abs(forward.item() + backward.item()) < 1e-15
        assert forward_l1.item() == pytest.approx(backward_l1.item())
        assert backward_l1.item() > 0

    def test_nodes_and_weights(self):
        from complexquad.quadrature import GaussKronrod

        nodes, weights = GaussKronrod(41).nodes_and_weights()

        assert nodes.shape == (41,)
        assert weights.shape == (41,)

    def test_nodes_cached_per_instance(self):
        from complexquad.quadrature import GaussKronrod

        rule = GaussKronrod(15)
        first, _ = rule.nodes_and_weights()
        second, _ = rule.nodes_and_weights()

        assert first is second

    def test_invalid_order(self):
        from complexquad.quadrature import GaussKronrod

        with pytest.raises(ValueError, match="order must be one of"):
            GaussKronrod(17)
