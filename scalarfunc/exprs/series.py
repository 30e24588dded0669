r"""@package scalarfunc.exprs.series

Truncated series expressions: polynomials and Fourier series.

Neither of these expressions defines a derivative, so requesting one raises
a numutils.ConfigurationError.
"""

import sympy as sp

from ..numutils import ConfigurationError
from .common import _converter, _math_module
from .numexpr import FunctionExpression


__all__ = [
    "PolynomialExpression",
    "FourierExpression",
]


class PolynomialExpression(FunctionExpression):
    r"""Polynomial with coefficients in ascending order.

    Represents an expression of the form
    \f[
        f(x) = \sum_{k=0}^{n} a_k x^k,
    \f]
    which is evaluated using Horner's scheme.
    """
    _type_tag = "polynomial"

    def __init__(self, a_n):
        r"""Init function.

        Args:
            a_n:    Non-empty iterable of coefficients, starting with the
                    constant term.
        """
        super(PolynomialExpression, self).__init__()
        a_n = tuple(a_n)
        if not a_n:
            raise ConfigurationError(self._type_tag,
                                     "at least one coefficient is required")
        self._a_n = a_n

    @classmethod
    def from_parameters(cls, params):
        return cls(params)

    @property
    def a_n(self):
        r"""Tuple of coefficients (constant term first)."""
        return self._a_n

    @property
    def degree(self):
        r"""Degree of the polynomial (i.e. number of coefficients minus one)."""
        return len(self._a_n) - 1

    def _parameters(self):
        return self._a_n

    def _expr_str(self):
        return "sum a_k x^k, where a_k=%r" % (list(self._a_n),)

    def _evaluator(self, use_mp):
        fl = _converter(use_mp)
        a_n = [fl(a) for a in reversed(self._a_n)]
        def f(x):
            result = a_n[0]
            for a in a_n[1:]:
                result = result * x + a
            return result
        return f

    def _sympy_expr(self, x):
        return sp.Add(*[a * x**k for k, a in enumerate(self._a_n)])


class FourierExpression(FunctionExpression):
    r"""Truncated Fourier series with arbitrary angular rates.

    Represents an expression of the form
    \f[
        f(x) = \frac{a_0}{2}
            + \sum_{k=1}^{n} \big(a_k \cos(\omega_k x) + b_k \sin(\omega_k x)\big).
    \f]

    The flat list of parameters (see from_parameters() and `parameters`) is
    ``a0, a1, omega1, b1, a2, omega2, b2, ...``.
    """
    _type_tag = "Fourier"

    def __init__(self, a0, a_n=(), omega_n=(), b_n=()):
        r"""Init function.

        Args:
            a0:     Constant term (the series contains \f$ a_0/2 \f$).
            a_n:    Cosine coefficients.
            omega_n: Angular rates of the harmonics.
            b_n:    Sine coefficients.
        """
        super(FourierExpression, self).__init__()
        a_n, omega_n, b_n = tuple(a_n), tuple(omega_n), tuple(b_n)
        if not len(a_n) == len(omega_n) == len(b_n):
            raise ConfigurationError(
                self._type_tag,
                "need the same number of cosine coefficients, rates and sine "
                "coefficients, got %d, %d and %d"
                % (len(a_n), len(omega_n), len(b_n))
            )
        self._a0 = a0
        self._a_n = a_n
        self._omega_n = omega_n
        self._b_n = b_n

    @classmethod
    def from_parameters(cls, params):
        return cls(params[0], params[1::3], params[2::3], params[3::3])

    @property
    def a0(self):
        r"""Constant coefficient (the series contains `a0/2`)."""
        return self._a0

    @property
    def a_n(self):
        r"""Tuple of cosine coefficients."""
        return self._a_n

    @property
    def omega_n(self):
        r"""Tuple of angular rates."""
        return self._omega_n

    @property
    def b_n(self):
        r"""Tuple of sine coefficients."""
        return self._b_n

    def _parameters(self):
        params = [self._a0]
        for triple in zip(self._a_n, self._omega_n, self._b_n):
            params.extend(triple)
        return params

    def _expr_str(self):
        return ("a0/2 + sum a_k cos(w_k x) + b_k sin(w_k x), "
                "where a0=%r, a_k=%r, w_k=%r, b_k=%r"
                % (self._a0, list(self._a_n), list(self._omega_n),
                   list(self._b_n)))

    def _evaluator(self, use_mp):
        ctx = _math_module(use_mp)
        fl = _converter(use_mp)
        sin, cos = ctx.sin, ctx.cos
        a0_2 = fl(self._a0) / 2
        terms = [(fl(a), fl(w), fl(b))
                 for a, w, b in zip(self._a_n, self._omega_n, self._b_n)]
        def f(x):
            result = a0_2
            for a, w, b in terms:
                result += a * cos(w * x) + b * sin(w * x)
            return result
        return f

    def _sympy_expr(self, x):
        return sp.Add(
            sp.sympify(self._a0) / 2,
            *[a * sp.cos(w * x) + b * sp.sin(w * x)
              for a, w, b in zip(self._a_n, self._omega_n, self._b_n)]
        )
