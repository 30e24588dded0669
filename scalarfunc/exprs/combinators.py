r"""@package scalarfunc.exprs.combinators

Expressions composed of one or two other expressions.

The derivative of each combinator is built from the derivatives of its
sub-expressions, i.e. using the sum, product, quotient and chain rules. If
any of the required sub-expression derivatives is not defined, the
numutils.ConfigurationError raised by that sub-expression propagates.

Derivatives are built from independent copies (see
numexpr.NumericExpression.duplicate()) of the sub-expressions, so the
resulting tree shares no nodes with the original one.
"""

import sympy as sp

from ..numutils import ConfigurationError
from .common import _converter, _zero_function
from .numexpr import NumericExpression


__all__ = [
    "SumExpression",
    "DiffExpression",
    "ProductExpression",
    "RatioExpression",
    "CompositeExpression",
    "TimesConstantExpression",
    "PlusConstantExpression",
    "PeriodicExpression",
]


class _BinaryExpression(NumericExpression):
    r"""Base class for combinators of two expressions.

    The two expressions are accessible through the `e1` and `e2` properties
    (the functions \f$ f \f$ and \f$ g \f$ in the formulas of the sub
    classes).
    """
    def __init__(self, expr1, expr2):
        r"""Init function.

        Args:
            expr1:  First expression (\f$ f \f$).
            expr2:  Second expression (\f$ g \f$).
        """
        super(_BinaryExpression, self).__init__(e1=expr1, e2=expr2)

    @property
    def e1(self):
        r"""First sub-expression."""
        return self.sub_expression('e1')

    @property
    def e2(self):
        r"""Second sub-expression."""
        return self.sub_expression('e2')

    def _sub_evaluators(self, use_mp):
        r"""Create the evaluators of both sub-expressions."""
        return self.e1.evaluator(use_mp), self.e2.evaluator(use_mp)


class SumExpression(_BinaryExpression):
    r"""Sum of two expressions, \f$ f(x) + g(x) \f$."""
    _type_tag = "sum"

    def _expr_str(self):
        return "e1 + e2, where e1=%s, e2=%s" % (self.e1.str(), self.e2.str())

    def _evaluator(self, use_mp):
        e1, e2 = self._sub_evaluators(use_mp)
        return lambda x: e1(x) + e2(x)

    def derivative(self):
        return SumExpression(self.e1.derivative(), self.e2.derivative())

    def _sympy_expr(self, x):
        return self.e1._sympy_expr(x) + self.e2._sympy_expr(x)


class DiffExpression(_BinaryExpression):
    r"""Difference of two expressions, \f$ f(x) - g(x) \f$."""
    _type_tag = "diff"

    def _expr_str(self):
        return "e1 - e2, where e1=%s, e2=%s" % (self.e1.str(), self.e2.str())

    def _evaluator(self, use_mp):
        e1, e2 = self._sub_evaluators(use_mp)
        return lambda x: e1(x) - e2(x)

    def derivative(self):
        return DiffExpression(self.e1.derivative(), self.e2.derivative())

    def _sympy_expr(self, x):
        return self.e1._sympy_expr(x) - self.e2._sympy_expr(x)


class ProductExpression(_BinaryExpression):
    r"""Multiply two expressions, \f$ f(x) g(x) \f$."""
    _type_tag = "product"

    def _expr_str(self):
        return "e1 * e2, where e1=%s, e2=%s" % (self.e1.str(), self.e2.str())

    def _evaluator(self, use_mp):
        e1, e2 = self._sub_evaluators(use_mp)
        return lambda x: e1(x) * e2(x)

    def derivative(self):
        r"""Product rule, \f$ (fg)' = f'g + fg' \f$."""
        return SumExpression(
            ProductExpression(self.e1.derivative(), self.e2.duplicate()),
            ProductExpression(self.e1.duplicate(), self.e2.derivative()),
        )

    def _sympy_expr(self, x):
        return self.e1._sympy_expr(x) * self.e2._sympy_expr(x)


class RatioExpression(_BinaryExpression):
    r"""Divide one expression by another, \f$ f(x) / g(x) \f$.

    The caller is responsible for \f$ g(x) \neq 0 \f$ at the evaluation
    points; a vanishing denominator raises a `ZeroDivisionError`.
    """
    _type_tag = "ratio"

    def _expr_str(self):
        return "e1 / e2, where e1=%s, e2=%s" % (self.e1.str(), self.e2.str())

    def _evaluator(self, use_mp):
        e1, e2 = self._sub_evaluators(use_mp)
        return lambda x: e1(x) / e2(x)

    def derivative(self):
        r"""Quotient rule, \f$ (f/g)' = (f'g - fg')/g^2 \f$."""
        numerator = DiffExpression(
            ProductExpression(self.e1.derivative(), self.e2.duplicate()),
            ProductExpression(self.e1.duplicate(), self.e2.derivative()),
        )
        denominator = ProductExpression(self.e2.duplicate(),
                                        self.e2.duplicate())
        return RatioExpression(numerator, denominator)

    def _sympy_expr(self, x):
        return self.e1._sympy_expr(x) / self.e2._sympy_expr(x)


class CompositeExpression(_BinaryExpression):
    r"""Composition of two expressions, \f$ f(g(x)) \f$."""
    _type_tag = "composite"

    def _expr_str(self):
        return ("e1(e2(x)), where e1=%s, e2=%s"
                % (self.e1.str(), self.e2.str()))

    def _evaluator(self, use_mp):
        e1, e2 = self._sub_evaluators(use_mp)
        return lambda x: e1(e2(x))

    def derivative(self):
        r"""Chain rule, \f$ (f \circ g)' = (f' \circ g) g' \f$."""
        return ProductExpression(
            CompositeExpression(self.e1.derivative(), self.e2.duplicate()),
            self.e2.derivative(),
        )

    def _sympy_expr(self, x):
        return self.e1._sympy_expr(self.e2._sympy_expr(x))


class _ConstantCombinator(NumericExpression):
    r"""Base class for combinators of one expression and a scalar.

    The expression is accessible through the `e` property and the scalar
    through the `a` property.
    """
    def __init__(self, expr, a):
        r"""Init function.

        Args:
            expr:   The expression to combine with the scalar.
            a:      The scalar (real) value.
        """
        super(_ConstantCombinator, self).__init__(e=expr)
        self._a = a

    @property
    def e(self):
        r"""The sub-expression."""
        return self.sub_expression('e')

    @property
    def a(self):
        r"""The scalar value."""
        return self._a

    def _parameters(self):
        return (self._a,)


class TimesConstantExpression(_ConstantCombinator):
    r"""Scale another expression by a factor, \f$ a f(x) \f$."""
    _type_tag = "times-constant"

    def _expr_str(self):
        if self._a == 0:
            return "0"
        return "a f(x), where a=%r, f(x)=%s" % (self._a, self.e.str())

    def is_zero_expression(self):
        return self._a == 0

    def _evaluator(self, use_mp):
        if self._a == 0:
            return _zero_function
        a = _converter(use_mp)(self._a)
        e = self.e.evaluator(use_mp)
        return lambda x: a * e(x)

    def derivative(self):
        return TimesConstantExpression(self.e.derivative(), self._a)

    def _sympy_expr(self, x):
        return self._a * self.e._sympy_expr(x)


class PlusConstantExpression(_ConstantCombinator):
    r"""Shift another expression by a constant, \f$ f(x) + a \f$."""
    _type_tag = "plus-constant"

    def _expr_str(self):
        return "f(x) + a, where a=%r, f(x)=%s" % (self._a, self.e.str())

    def _evaluator(self, use_mp):
        a = _converter(use_mp)(self._a)
        e = self.e.evaluator(use_mp)
        return lambda x: e(x) + a

    def derivative(self):
        return self.e.derivative()

    def _sympy_expr(self, x):
        return self.e._sympy_expr(x) + self._a


class PeriodicExpression(_ConstantCombinator):
    r"""Periodic continuation of an expression, \f$ f(x \bmod T) \f$.

    The argument is wrapped into \f$ [0, T) \f$ using the non-negative
    remainder, such that \f$ F(x) = F(x+T) \f$ for all `x`. The expression
    has no derivative, since a single closed form cannot account for the
    points where the argument wraps around.
    """
    _type_tag = "periodic"

    def __init__(self, expr, period):
        r"""Init function.

        Args:
            expr:   The expression to continue periodically.
            period: The (strictly positive) period \f$ T \f$.
        """
        if not period > 0:
            raise ConfigurationError(
                self._type_tag, "period must be positive, got %r" % (period,)
            )
        super(PeriodicExpression, self).__init__(expr, period)

    @property
    def period(self):
        r"""Period of the expression."""
        return self._a

    def _expr_str(self):
        return "f(x mod T), where T=%r, f(x)=%s" % (self._a, self.e.str())

    def _evaluator(self, use_mp):
        period = _converter(use_mp)(self._a)
        e = self.e.evaluator(use_mp)
        return lambda x: e(x % period)

    def _sympy_expr(self, x):
        return self.e._sympy_expr(sp.Mod(x, self._a))
