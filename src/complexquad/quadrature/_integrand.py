"""Adapter between Python integrands and the quadrature kernels."""

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Callable, Optional, Protocol, Tuple

from complexquad.quadrature._exceptions import IntegrandValueError


class Evaluator(Protocol):
    """Single-argument, real to complex function consumed by the kernels."""

    def __call__(self, x: float) -> complex: ...


def _to_complex(value: Any) -> complex:
    if not isinstance(value, (str, bytes, bytearray)):
        try:
            return complex(value)
        except (OverflowError, TypeError, ValueError):
            pass
    # Raised outside the except block: the failed conversion is not chained.
    raise IntegrandValueError(
        f"integrand returned a value of type {type(value).__name__!r}, "
        "which cannot be converted to complex"
    )


class Integrand:
    """
    Wrap a callable and its fixed extra arguments as an :class:`Evaluator`.

    Every evaluation calls ``function(x, *args, **kwargs)`` and converts the
    result to ``complex``.

    Parameters
    ----------
    function : callable
        The integrand. Its first positional parameter receives the point of
        evaluation as a ``float``.
    args : tuple or list, optional
        Extra positional arguments appended after ``x``. ``None`` means none.
    kwargs : mapping, optional
        Extra keyword arguments. ``None`` means none. The mapping is held
        through a read-only view and never copied or modified.

    Raises
    ------
    TypeError
        If ``function`` is not callable, ``args`` is not a tuple or list, or
        ``kwargs`` is not a mapping with string keys.

    Notes
    -----
    Exceptions raised by ``function`` propagate unchanged; they are neither
    caught nor wrapped. A result that cannot be converted to ``complex``
    raises :class:`IntegrandValueError`.

    Examples
    --------
    >>> def f(x, k, *, phase):
    ...     return k * x + phase
    >>> integrand = Integrand(f, (2.0,), {"phase": 1j})
    >>> integrand(0.5)
    (1+1j)
    """

    __slots__ = ("_function", "_args", "_kwargs")

    def __init__(
        self,
        function: Callable[..., Any],
        args: Optional[Tuple[Any, ...]] = None,
        kwargs: Optional[Mapping] = None,
    ):
        if not callable(function):
            raise TypeError(
                f"integrand must be callable, got {type(function).__name__}"
            )

        if args is None:
            args = ()
        elif isinstance(args, list):
            args = tuple(args)
        elif not isinstance(args, tuple):
            raise TypeError(
                f"extra_args must be a tuple, got {type(args).__name__}"
            )

        if kwargs is None:
            kwargs = {}
        elif not isinstance(kwargs, Mapping):
            raise TypeError(
                f"extra_kwargs must be a mapping, got {type(kwargs).__name__}"
            )
        for key in kwargs:
            if not isinstance(key, str):
                raise TypeError(
                    "extra_kwargs keys must be strings, "
                    f"got {type(key).__name__}"
                )

        self._function = function
        self._args = args
        self._kwargs = MappingProxyType(kwargs)

    def __call__(self, x: float) -> complex:
        return _to_complex(self._function(x, *self._args, **self._kwargs))
