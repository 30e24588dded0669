r"""@package scalarfunc.exprs.basics

Collection of elementary numexpr.NumericExpression subclasses.

All expressions in this module have an analytic derivative, which is itself
built from the expressions here and the combinators.TimesConstantExpression.
"""

import sympy as sp

from .common import _converter, _math_module, _power, _zero_function
from .numexpr import FunctionExpression
from .combinators import TimesConstantExpression


__all__ = [
    "ConstantExpression",
    "FunctorExpression",
    "SinExpression",
    "CosExpression",
    "ExpExpression",
    "LogExpression",
    "PowerExpression",
]


class ConstantExpression(FunctionExpression):
    r"""Represent an expression that is a constant.

    Represents an expression of the form \f$ f(x) = c = \mathrm{const} \f$.

    The value of the constant can be accessed through the `c` property.
    """
    _type_tag = "constant"

    def __init__(self, value=0.0):
        r"""Init function.

        Args:
            value:  The constant value.
        """
        super(ConstantExpression, self).__init__()
        self._c = value

    @property
    def c(self):
        r"""The constant value this expression represents."""
        return self._c

    def _parameters(self):
        return (self._c,)

    def _expr_str(self):
        return "%r" % self._c

    def is_zero_expression(self):
        return self._c == 0

    def _evaluator(self, use_mp):
        if self._c == 0:
            return _zero_function
        c = _converter(use_mp)(self._c)
        return lambda x: c

    def derivative(self):
        return ConstantExpression(0.0)

    def _sympy_expr(self, x):
        return sp.sympify(self._c)


class FunctorExpression(FunctionExpression):
    r"""Generic function without parameters.

    This is the bare base shape of the catalog. It evaluates to zero and does
    not define a derivative.
    """
    _type_tag = "functor"

    def _expr_str(self):
        return "functor"

    def _evaluator(self, use_mp):
        zero = _converter(use_mp)(0)
        return lambda x: zero

    def _sympy_expr(self, x):
        return sp.Integer(0)


class _RateExpression(FunctionExpression):
    r"""Base class for functions of the scaled argument `rate * x`."""

    def __init__(self, rate=1.0):
        r"""Init function.

        Args:
            rate:   Factor multiplying the argument, e.g. the angular rate
                    \f$ \omega \f$ in \f$ \sin(\omega x) \f$. Default is `1`.
        """
        super(_RateExpression, self).__init__()
        self._rate = rate

    @property
    def rate(self):
        r"""Factor the argument is multiplied with."""
        return self._rate

    def _parameters(self):
        return (self._rate,)

    def _expr_str(self):
        return "%s(a x), where a=%r" % (self.type_tag, self._rate)


class SinExpression(_RateExpression):
    r"""Sine with angular rate, \f$ f(x) = \sin(\omega x) \f$."""
    _type_tag = "sin"

    def _evaluator(self, use_mp):
        sin = _math_module(use_mp).sin
        rate = _converter(use_mp)(self._rate)
        return lambda x: sin(rate * x)

    def derivative(self):
        return TimesConstantExpression(CosExpression(self._rate), self._rate)

    def _sympy_expr(self, x):
        return sp.sin(self._rate * x)


class CosExpression(_RateExpression):
    r"""Cosine with angular rate, \f$ f(x) = \cos(\omega x) \f$."""
    _type_tag = "cos"

    def _evaluator(self, use_mp):
        cos = _math_module(use_mp).cos
        rate = _converter(use_mp)(self._rate)
        return lambda x: cos(rate * x)

    def derivative(self):
        return TimesConstantExpression(SinExpression(self._rate), -self._rate)

    def _sympy_expr(self, x):
        return sp.cos(self._rate * x)


class ExpExpression(_RateExpression):
    r"""Exponential with rate, \f$ f(x) = \exp(a x) \f$."""
    _type_tag = "exp"

    def _evaluator(self, use_mp):
        exp = _math_module(use_mp).exp
        rate = _converter(use_mp)(self._rate)
        return lambda x: exp(rate * x)

    def derivative(self):
        return TimesConstantExpression(ExpExpression(self._rate), self._rate)

    def _sympy_expr(self, x):
        return sp.exp(self._rate * x)


class LogExpression(_RateExpression):
    r"""Natural logarithm, \f$ f(x) = \ln(a x) \f$.

    Note that the derivative of this expression is defined to be
    \f$ a / x \f$ (and not the \f$ 1/x \f$ one would get by differentiating
    \f$ \ln(a x) \f$). Both agree for \f$ a = 1 \f$.
    """
    _type_tag = "log"

    def _evaluator(self, use_mp):
        log = _math_module(use_mp).log
        rate = _converter(use_mp)(self._rate)
        return lambda x: log(rate * x)

    def derivative(self):
        return TimesConstantExpression(PowerExpression(-1.0), self._rate)

    def _sympy_expr(self, x):
        return sp.log(self._rate * x)


class PowerExpression(FunctionExpression):
    r"""Power of the argument, \f$ f(x) = x^p \f$.

    A zero base with a negative exponent evaluates to `+inf`.
    """
    _type_tag = "power"

    def __init__(self, exponent):
        r"""Init function.

        Args:
            exponent:   The (real) exponent \f$ p \f$.
        """
        super(PowerExpression, self).__init__()
        self._p = exponent

    @property
    def exponent(self):
        r"""Exponent the argument is raised to."""
        return self._p

    def _parameters(self):
        return (self._p,)

    def _expr_str(self):
        return "x^p, where p=%r" % self._p

    def _evaluator(self, use_mp):
        power = _power(use_mp)
        p = _converter(use_mp)(self._p)
        return lambda x: power(x, p)

    def derivative(self):
        if self._p == 0:
            return ConstantExpression(0.0)
        return TimesConstantExpression(PowerExpression(self._p - 1), self._p)

    def _sympy_expr(self, x):
        return x**self._p
