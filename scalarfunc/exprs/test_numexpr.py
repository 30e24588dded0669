#!/usr/bin/env python3

import unittest
import sys
import os.path as op
import pickle
import tempfile
import math
from contextlib import redirect_stdout
from io import StringIO

import numpy as np
import sympy as sp
from mpmath import mp

from testutils import FuncTestCase
from ..numutils import ConfigurationError
from .numexpr import NumericExpression, isclose
from .evaluators import Evaluator
from .basics import ConstantExpression, SinExpression, ExpExpression
from .series import PolynomialExpression
from .combinators import ProductExpression, SumExpression
from .combinators import TimesConstantExpression


class TestIsclose(FuncTestCase):
    def test_float(self):
        self.assertTrue(isclose(1e7+1, 1e7+1, rel_tol=0, abs_tol=0))
        self.assertTrue(isclose(1e7+1, 1e7, rel_tol=1e-6))
        self.assertFalse(isclose(1e7+1, 1e7, rel_tol=1e-8))
        self.assertTrue(isclose(1e7+1, 1e7, rel_tol=0, abs_tol=2.0))
        self.assertFalse(isclose(1e7+1, 1e7, rel_tol=0, abs_tol=0.5))

    def test_mpmath(self):
        with mp.workdps(30):
            a = mp.mpf('1e7') + mp.mpf('1e-20')
            b = mp.mpf('1e7')
            self.assertTrue(isclose(a, a, rel_tol=0, abs_tol=0, use_mp=True))
            self.assertFalse(isclose(a, b, use_mp=True))
            self.assertTrue(isclose(a, b, rel_tol=1e-26, abs_tol=0, use_mp=True))
            self.assertFalse(isclose(a, b, rel_tol=1e-28, abs_tol=0, use_mp=True))


def _example():
    return ProductExpression(SinExpression(2.0), ExpExpression(-0.5))


class TestNumexpr(FuncTestCase):
    def test_repr(self):
        expr = _example()
        self.assertEqual(
            repr(expr),
            "<ProductExpression(e1 * e2, where e1=(sin(a x), where a=2.0), "
            "e2=(exp(a x), where a=-0.5))>"
        )
        self.assertEqual(SinExpression(2.0).str(), "(sin(a x), where a=2.0)")

    def test_type_tag_and_parameters(self):
        expr = _example()
        self.assertEqual(expr.type_tag, "product")
        self.assertEqual(expr.parameters, ())
        self.assertEqual(expr.e1.type_tag, "sin")
        self.assertEqual(expr.e1.parameters, (2.0,))
        self.assertEqual(len(expr.children), 2)
        self.assertEqual(expr.e1.nice_name, "sin 2.0")
        self.assertEqual(expr.nice_name, "product")

    def test_invalid_child(self):
        with self.assertRaises(ConfigurationError) as cm:
            SumExpression(SinExpression(), 1.0)
        self.assertEqual(cm.exception.type_name, "sum")
        self.assertTrue(str(cm.exception).startswith("sum: "))

    def test_evaluate(self):
        expr = _example()
        x = 0.5
        self.assertAlmostEqual(expr.evaluate(x), math.sin(1.0)*math.exp(-0.25))
        self.assertEqual(expr(x), expr.evaluate(x))

    def test_evaluate_mp(self):
        expr = _example()
        with mp.workdps(30):
            x = mp.mpf(1) / 3
            value = expr.evaluate(x, use_mp=True)
            self.assertIsType(value, mp.mpf)
            expected = mp.sin(2*x) * mp.exp(-x/2)
            self.assertTrue(isclose(value, expected, rel_tol=mp.mpf('1e-28'),
                                    abs_tol=0, use_mp=True))

    def test_evaluator(self):
        expr = SinExpression(2.0)
        e = expr.evaluator()
        self.assertIsType(e, Evaluator)
        space = np.linspace(0, 2, 7)
        self.assertFunctionAlmostEqual(e, lambda x: math.sin(2*x), space,
                                       delta=1e-14)
        self.assertFunctionAlmostEqual(e.function(1),
                                       lambda x: 2*math.cos(2*x), space,
                                       delta=1e-14)
        self.assertFunctionAlmostEqual(lambda x: e.diff(x, 2),
                                       lambda x: -4*math.sin(2*x), space,
                                       delta=1e-13)
        self.assertEqual(e.diff(0.3, 0), e(0.3))
        with self.assertRaises(ValueError):
            e.diff(0.3, -1)

    def test_evaluator_zero_function(self):
        e = ConstantExpression(3.0).evaluator()
        self.assertFalse(e.is_zero_function())
        self.assertTrue(e.is_zero_function(1))
        self.assertEqual(e.function(1)(12.0), 0)
        self.assertEqual(e.diff(4.0, 3), 0)

    def test_evaluator_undefined_derivative(self):
        e = PolynomialExpression([1.0, 2.0]).evaluator()
        self.assertEqual(e(2.0), 5.0)
        with self.assertRaises(ConfigurationError) as cm:
            e.diff(2.0)
        self.assertEqual(cm.exception.type_name, "polynomial")

    def test_derivative_is_independent(self):
        expr = _example()
        deriv = expr.derivative()
        nodes = [node for _, _, node in deriv.traverse_tree(include_root=True)]
        originals = [node for _, _, node in expr.traverse_tree(include_root=True)]
        for node in nodes:
            self.assertFalse(any(node is orig for orig in originals))
        self.assertTrue(expr.is_identical(_example()))

    def test_duplicate(self):
        expr = _example()
        dup = expr.duplicate()
        self.assertIsNot(dup, expr)
        self.assertIsNot(dup.e1, expr.e1)
        self.assertTrue(dup.is_identical(expr))
        self.assertFalse(dup.is_identical(SinExpression(2.0)))
        self.assertFalse(SinExpression(2.0).is_identical(SinExpression(3.0)))
        self.assertFalse(
            expr.is_identical(ProductExpression(ExpExpression(-0.5),
                                                SinExpression(2.0)))
        )

    def test_traverse_tree(self):
        expr = SumExpression(_example(),
                             TimesConstantExpression(SinExpression(), 0.0))
        nodes = [(len(parents), name, node.type_tag)
                 for parents, name, node in expr.traverse_tree(include_root=True)]
        self.assertEqual(nodes, [
            (0, "", "sum"),
            (1, "e1", "product"),
            (2, "e1", "sin"),
            (2, "e2", "exp"),
            (1, "e2", "times-constant"),
            (2, "e", "sin"),
        ])
        names = [node.type_tag for _, _, node in expr.traverse_tree(skip_zeros=True)]
        self.assertEqual(names, ["product", "sin", "exp", "sin"])

    def test_print_tree(self):
        out = StringIO()
        with redirect_stdout(out):
            _example().print_tree()
        self.assertEqual(out.getvalue().splitlines(), [
            "root [product] <ProductExpression>",
            ". e1 [sin 2.0] <SinExpression>",
            ". e2 [exp -0.5] <ExpExpression>",
        ])

    def test_pickle(self):
        expr = _example()
        copy = pickle.loads(pickle.dumps(expr))
        self.assertIsType(copy, ProductExpression)
        self.assertTrue(copy.is_identical(expr))
        self.assertEqual(copy(0.7), expr(0.7))

    def test_save_load(self):
        expr = _example()
        with tempfile.TemporaryDirectory() as tmpdir:
            fname = op.join(tmpdir, "sub", "expr")
            expr.save(fname, verbose=False)
            self.assertTrue(op.isfile(fname + ".npy"))
            with self.assertRaises(RuntimeError):
                expr.save(fname, verbose=False)
            expr.save(fname, overwrite=True, verbose=False)
            loaded = NumericExpression.load(fname + ".npy")
        self.assertIsType(loaded, ProductExpression)
        self.assertTrue(loaded.is_identical(expr))

    def test_sympy_and_latex(self):
        expr = _example()
        x = sp.Symbol('x', real=True)
        self.assertEqual(sp.simplify(expr.sympy_expr()
                                     - sp.sin(2.0*x)*sp.exp(-0.5*x)), 0)
        self.assertEqual(expr.write(), sp.latex(expr.sympy_expr('x')))
        self.assertIn("t", SinExpression(2.0).write('t'))
        self.assertNotIn("x", SinExpression(2.0).write('t'))

    def test_context(self):
        with NumericExpression.context(use_mp=True, dps=40) as ctx:
            self.assertIs(ctx, mp)
            self.assertEqual(mp.dps, 40)
        with NumericExpression.context(use_mp=False) as ctx:
            self.assertIs(ctx, math)


def run_tests():
    suite = unittest.TestLoader().loadTestsFromModule(sys.modules[__name__])
    return len(unittest.TextTestRunner(verbosity=2).run(suite).failures)


if __name__ == '__main__':
    unittest.main()
