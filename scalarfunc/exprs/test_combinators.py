#!/usr/bin/env python3
r"""@package scalarfunc.exprs.test_combinators

Tests for expressions composed of other expressions.

Besides the values at a few points, the analytic derivatives are compared
against the SymPy derivatives of the equivalent SymPy expressions.
"""

import unittest
import sys
import math

import numpy as np
import sympy as sp

from testutils import FuncTestCase
from ..numutils import ConfigurationError
from .basics import SinExpression, CosExpression, ExpExpression
from .basics import PowerExpression, ConstantExpression
from .series import PolynomialExpression
from .combinators import SumExpression, DiffExpression, ProductExpression
from .combinators import RatioExpression, CompositeExpression
from .combinators import TimesConstantExpression, PlusConstantExpression
from .combinators import PeriodicExpression


OMEGA = 2.


def _sin():
    return SinExpression(OMEGA)


def _cos():
    return CosExpression(OMEGA)


class _SympyCheckMixin(object):
    def assertMatchesSympy(self, expr, points, delta=1e-12):
        r"""Compare value and first derivative with the SymPy equivalent."""
        x = sp.Symbol('x', real=True)
        sym = expr.sympy_expr(x)
        f = sp.lambdify(x, sym, modules="math")
        df = sp.lambdify(x, sp.diff(sym, x), modules="math")
        self.assertFunctionAlmostEqual(expr, f, points, delta=delta)
        self.assertFunctionAlmostEqual(expr.derivative(), df, points,
                                       delta=delta)


class TestSum(FuncTestCase, _SympyCheckMixin):
    def test_evaluate(self):
        f = SumExpression(_sin(), _cos())
        self.assertEqual(f.type_tag, "sum")
        self.assertEqual(f(0.), 1.)
        self.assertEqual(f(.5), math.sin(OMEGA * .5) + math.cos(OMEGA * .5))
        df = f.derivative()
        self.assertAlmostEqual(
            df(.5), OMEGA * (math.cos(OMEGA * .5) - math.sin(OMEGA * .5)),
            places=14
        )

    def test_sympy(self):
        self.assertMatchesSympy(SumExpression(_sin(), ExpExpression(-.3)),
                                np.linspace(-1, 1, 5))


class TestDiff(FuncTestCase, _SympyCheckMixin):
    def test_evaluate(self):
        f = DiffExpression(_sin(), _cos())
        self.assertEqual(f.type_tag, "diff")
        self.assertEqual(f(0.), -1.)
        self.assertEqual(f(.5), math.sin(OMEGA * .5) - math.cos(OMEGA * .5))
        df = f.derivative()
        self.assertAlmostEqual(
            df(.5), OMEGA * (math.cos(OMEGA * .5) + math.sin(OMEGA * .5)),
            places=14
        )

    def test_sympy(self):
        self.assertMatchesSympy(DiffExpression(_cos(), PowerExpression(3.)),
                                np.linspace(-1, 1, 5))


class TestProduct(FuncTestCase, _SympyCheckMixin):
    def test_evaluate(self):
        f = ProductExpression(_sin(), _cos())
        self.assertEqual(f.type_tag, "product")
        self.assertEqual(f(0.), 0.)
        self.assertEqual(f(.5), math.sin(OMEGA * .5) * math.cos(OMEGA * .5))
        df = f.derivative()
        self.assertAlmostEqual(
            df(.5),
            OMEGA * (math.cos(OMEGA * .5)**2 - math.sin(OMEGA * .5)**2),
            places=14
        )

    def test_derivative_structure(self):
        df = ProductExpression(_sin(), _cos()).derivative()
        self.assertIsType(df, SumExpression)
        self.assertIsType(df.e1, ProductExpression)
        self.assertIsType(df.e2, ProductExpression)
        self.assertIsType(df.e1.e2, CosExpression)
        self.assertIsType(df.e2.e1, SinExpression)

    def test_sympy(self):
        self.assertMatchesSympy(ProductExpression(_sin(), ExpExpression(.7)),
                                np.linspace(-1, 1, 5))


class TestRatio(FuncTestCase, _SympyCheckMixin):
    def test_evaluate(self):
        f = RatioExpression(_sin(), _cos())
        self.assertEqual(f.type_tag, "ratio")
        self.assertEqual(f(0.), 0.)
        self.assertEqual(f(.5), math.sin(OMEGA * .5) / math.cos(OMEGA * .5))
        df = f.derivative()
        self.assertAlmostEqual(df(.5), OMEGA / math.cos(OMEGA * .5)**2,
                               places=13)

    def test_zero_denominator(self):
        f = RatioExpression(_sin(), ConstantExpression(0.))
        with self.assertRaises(ZeroDivisionError):
            f(1.)

    def test_sympy(self):
        self.assertMatchesSympy(RatioExpression(ExpExpression(1.), _cos()),
                                np.linspace(-.5, .5, 5))


class TestComposite(FuncTestCase, _SympyCheckMixin):
    def test_evaluate(self):
        f = CompositeExpression(_sin(), _cos())
        self.assertEqual(f.type_tag, "composite")
        self.assertEqual(f(0.), math.sin(OMEGA))
        self.assertEqual(f(.5), math.sin(OMEGA * math.cos(OMEGA * .5)))
        df = f.derivative()
        self.assertAlmostEqual(
            df(.5),
            -OMEGA * OMEGA * math.sin(OMEGA * .5)
            * math.cos(OMEGA * math.cos(OMEGA * .5)),
            places=14
        )

    def test_sympy(self):
        self.assertMatchesSympy(CompositeExpression(ExpExpression(.5), _sin()),
                                np.linspace(-1, 1, 5))


class TestTimesConstant(FuncTestCase, _SympyCheckMixin):
    def test_evaluate(self):
        A = 1.234
        f = TimesConstantExpression(_sin(), A)
        self.assertEqual(f.type_tag, "times-constant")
        self.assertEqual(f.parameters, (A,))
        self.assertEqual(f(0.), 0.)
        self.assertEqual(f(.5), A * math.sin(OMEGA * .5))
        df = f.derivative()
        self.assertAlmostEqual(df(.5), A * OMEGA * math.cos(OMEGA * .5),
                               places=14)

    def test_zero_factor(self):
        f = TimesConstantExpression(_sin(), 0.)
        self.assertTrue(f.is_zero_expression())
        self.assertTrue(f.evaluator().is_zero_function())
        self.assertEqual(f(.3), 0)

    def test_sympy(self):
        self.assertMatchesSympy(TimesConstantExpression(_cos(), -3.),
                                np.linspace(-1, 1, 5))


class TestPlusConstant(FuncTestCase, _SympyCheckMixin):
    def test_evaluate(self):
        A = 1.234
        f = PlusConstantExpression(_sin(), A)
        self.assertEqual(f.type_tag, "plus-constant")
        self.assertEqual(f(0.), A)
        self.assertEqual(f(.5), math.sin(OMEGA * .5) + A)
        df = f.derivative()
        self.assertAlmostEqual(df(.5), OMEGA * math.cos(OMEGA * .5), places=14)

    def test_sympy(self):
        self.assertMatchesSympy(PlusConstantExpression(_sin(), 2.5),
                                np.linspace(-1, 1, 5))


class TestPeriodic(FuncTestCase):
    def test_evaluate(self):
        A = 1.234
        f = PeriodicExpression(_sin(), A)
        self.assertEqual(f.type_tag, "periodic")
        self.assertEqual(f.period, A)
        self.assertEqual(f(0.), f(A))
        self.assertAlmostEqual(f(.5), f(.5 + A), places=14)
        self.assertAlmostEqual(f(.5), f(.5 - 3*A), places=13)
        self.assertEqual(f(.5), math.sin(OMEGA * .5))

    def test_negative_argument(self):
        f = PeriodicExpression(PolynomialExpression([0., 1.]), 2.)
        self.assertEqual(f(-.5), 1.5)
        self.assertEqual(f(3.), 1.)

    def test_no_derivative(self):
        f = PeriodicExpression(_sin(), 1.234)
        self.assertConfigurationError("periodic", f.derivative)

    def test_invalid_period(self):
        for period in [0., -1.]:
            with self.assertRaises(ConfigurationError):
                PeriodicExpression(_sin(), period)


class TestNesting(FuncTestCase, _SympyCheckMixin):
    def test_deep_tree(self):
        f = CompositeExpression(
            ExpExpression(.3),
            RatioExpression(
                ProductExpression(_sin(), PowerExpression(2.)),
                PlusConstantExpression(_cos(), 3.),
            ),
        )
        self.assertMatchesSympy(f, np.linspace(-1, 1, 7), delta=1e-11)

    def test_missing_derivative_propagates(self):
        f = SumExpression(_sin(), PolynomialExpression([1., 2.]))
        self.assertEqual(f(0.), 1.)
        self.assertConfigurationError("polynomial", f.derivative)


def run_tests():
    suite = unittest.TestLoader().loadTestsFromModule(sys.modules[__name__])
    return len(unittest.TextTestRunner(verbosity=2).run(suite).failures)


if __name__ == '__main__':
    unittest.main()
