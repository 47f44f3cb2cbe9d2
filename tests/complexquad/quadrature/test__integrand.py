from collections import OrderedDict
from types import MappingProxyType

import pytest
import torch


class TestIntegrand:
    def test_calls_with_extra_arguments(self):
        from complexquad.quadrature import Integrand

        integrand = Integrand(
            lambda x, k, *, phase: k * x + phase, (2.0,), {"phase": 1j}
        )

        assert integrand(0.5) == 1 + 1j

    def test_returns_complex(self):
        from complexquad.quadrature import Integrand

        assert type(Integrand(lambda x: 3)(0.0)) is complex
        assert Integrand(lambda x: 3)(0.0) == 3 + 0j

    @pytest.mark.parametrize(
        "value",
        [2, 2.5, 2 + 1j, True, torch.tensor(2.0), torch.tensor(1 + 2j)],
    )
    def test_accepts_numbers(self, value):
        from complexquad.quadrature import Integrand

        assert Integrand(lambda x: value)(0.0) == complex(value)

    @pytest.mark.parametrize("value", ["1", b"1", None, [1.0], object()])
    def test_non_number_raises(self, value):
        from complexquad.quadrature import Integrand, IntegrandValueError

        with pytest.raises(IntegrandValueError, match=type(value).__name__):
            Integrand(lambda x: value)(0.0)

    def test_huge_int_raises(self):
        from complexquad.quadrature import Integrand, IntegrandValueError

        with pytest.raises(IntegrandValueError, match="int"):
            Integrand(lambda x: 10**400)(0.0)

    def test_conversion_error_not_chained(self):
        from complexquad.quadrature import Integrand, IntegrandValueError

        try:
            Integrand(lambda x: None)(0.0)
        except IntegrandValueError as error:
            assert error.__cause__ is None
            assert error.__context__ is None
        else:
            pytest.fail("IntegrandValueError not raised")

    def test_integrand_exception_propagates(self):
        from complexquad.quadrature import Integrand

        class Custom(Exception):
            pass

        def f(x):
            raise Custom("from integrand")

        with pytest.raises(Custom, match="from integrand"):
            Integrand(f)(0.0)

    def test_arity_mismatch_is_callable_type_error(self):
        from complexquad.quadrature import Integrand

        integrand = Integrand(lambda x: x, (1.0,))

        with pytest.raises(TypeError):
            integrand(0.0)

    def test_not_callable_raises(self):
        from complexquad.quadrature import Integrand

        with pytest.raises(TypeError, match="callable"):
            Integrand(1.0)

    def test_none_containers(self):
        from complexquad.quadrature import Integrand

        assert Integrand(lambda x: x, None, None)(2.0) == 2 + 0j

    def test_list_args_frozen(self):
        from complexquad.quadrature import Integrand

        args = [1.0]
        integrand = Integrand(lambda x, c: x + c, args)
        args.append(2.0)

        assert integrand(1.0) == 2 + 0j

    @pytest.mark.parametrize("args", [1.0, "ab", {"a": 1}])
    def test_bad_args_raises(self, args):
        from complexquad.quadrature import Integrand

        with pytest.raises(TypeError, match="extra_args"):
            Integrand(lambda x: x, args)

    def test_bad_kwargs_raises(self):
        from complexquad.quadrature import Integrand

        with pytest.raises(TypeError, match="mapping"):
            Integrand(lambda x: x, (), [("a", 1)])
        with pytest.raises(TypeError, match="keys must be strings"):
            Integrand(lambda x: x, (), {1: 1})

    @pytest.mark.parametrize(
        "kwargs",
        [OrderedDict(c=1.0), MappingProxyType({"c": 1.0})],
    )
    def test_accepts_any_mapping(self, kwargs):
        from complexquad.quadrature import Integrand

        assert Integrand(lambda x, *, c: x * c, (), kwargs)(3.0) == 3 + 0j

    def test_kwargs_not_copied_or_mutated(self):
        from complexquad.quadrature import Integrand

        kwargs = {"c": 1.0}
        integrand = Integrand(lambda x, *, c: x * c, (), kwargs)
        integrand(1.0)

        assert kwargs == {"c": 1.0}
        kwargs["c"] = 2.0
        assert integrand(1.0) == 2 + 0j

    def test_satisfies_evaluator(self):
        from complexquad.quadrature import Evaluator, Integrand

        def run(evaluator: Evaluator) -> complex:
            return evaluator(1.0)

        assert run(Integrand(lambda x: 1j * x)) == 1j
