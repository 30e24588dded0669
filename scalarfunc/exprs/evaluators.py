r"""@package scalarfunc.exprs.evaluators

Callable snapshots of numexpr.NumericExpression objects.
"""

from .common import _zero_function, is_zero_function


__all__ = [
    "Evaluator",
]


class Evaluator(object):
    r"""Callable object evaluating an expression and its derivatives.

    Users of the expression system who just want to evaluate a function a
    single time may simply call numexpr.NumericExpression.evaluate(). For
    repeated evaluation, an evaluator should be created once via
    numexpr.NumericExpression.evaluator(), since this builds the evaluators
    of all sub-expressions only once.

    Derivatives are not approximated. Instead, the expression's analytic
    derivative (see numexpr.NumericExpression.derivative()) is built when a
    derivative is first requested and its evaluator is kept for later calls.
    Requesting a derivative the expression does not define raises the
    numutils.ConfigurationError of the expression.
    """
    def __init__(self, expr, f, use_mp=False):
        r"""Create an evaluator for a given function.

        @param expr
            The expression object for which this evaluator is created.
        @param f
            Callable evaluating the expression. This function should respect
            the `use_mp` setting supplied to the
            numexpr.NumericExpression._evaluator() call which created it.
        @param use_mp
            Whether `f` uses `mpmath` arbitrary precision operations.
        """
        if not callable(f):
            raise TypeError("Evaluation function must be callable.")
        ## The expression this evaluator was created for.
        self.expr = expr
        ## Whether `mpmath` arbitrary precision operations are used.
        self.use_mp = use_mp
        ## Derivative expressions built so far (the 0'th is `expr` itself).
        self._exprs = [expr]
        self._derivs = [f]

    def __call__(self, x):
        r"""Evaluate the expression at a point x."""
        return self._derivs[0](x)

    def is_zero_function(self, n=0):
        r"""Return whether the n'th derivative is known to vanish identically."""
        return is_zero_function(self._get_func(n))

    def diff(self, x, n=1):
        r"""Evaluate the n'th derivative of the expression at a point x."""
        return self._get_func(n)(x)

    def function(self, n=0):
        r"""Return a callable for the n'th derivative."""
        fn = self._get_func(n)
        if is_zero_function(fn):
            return _zero_function
        return lambda x: fn(x) # pylint: disable=unnecessary-lambda

    def _get_func(self, n):
        r"""Build (once) and return the callable for the n'th derivative."""
        if n < 0:
            raise ValueError("Derivative order must be non-negative.")
        for _ in range(len(self._derivs), n+1):
            expr = self._exprs[-1].derivative()
            self._exprs.append(expr)
            self._derivs.append(expr.evaluator(self.use_mp)._derivs[0])
        return self._derivs[n]
