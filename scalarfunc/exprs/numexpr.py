r"""@package scalarfunc.exprs.numexpr

Base of the NumericExpression system.

The idea is to have a notion of a numeric expression which is 'self aware'
and can produce its own exact derivative as a new expression. Furthermore, we
want to be able to build composite expressions out of other, more basic
expressions.

Expressions are immutable. An expression is either a leaf (e.g.
basics.SinExpression with its angular rate as parameter) or a combinator
owning one or two sub-expressions (e.g. combinators.ProductExpression). The
derivative of a combinator is built from the derivatives of its
sub-expressions using the rules of calculus, so differentiating an
expression tree never involves numerical differencing.

As a simple example, let's multiply a sine with an exponential and evaluate
the result and its derivative:

~~~.py
expr = ProductExpression(SinExpression(2.0), ExpExpression(-0.5))
print("f(.5) =", expr.evaluate(.5))
print("f'(.5) =", expr.derivative().evaluate(.5))
~~~

For repeated evaluation, take a snapshot of the expression using
NumericExpression.evaluator(), which creates the evaluators of all
sub-expressions only once:

~~~.py
ev = expr.evaluator()
values = [ev(x) for x in np.linspace(0, 1, 100)]
slopes = [ev.diff(x) for x in np.linspace(0, 1, 100)]
~~~

Evaluators may also be created to use `mpmath` arbitrary precision
arithmetics by passing `use_mp=True`.
"""

from abc import ABCMeta, abstractmethod
from contextlib import contextmanager
import copy

import sympy as sp
from mpmath import mp

from ..numutils import ConfigurationError
from ..utils import save_to_file, load_from_file
from .common import _math_module
from .evaluators import Evaluator


__all__ = [
    "NumericExpression",
    "FunctionExpression",
    "ExpressionWarning",
    "isclose",
]


class ExpressionWarning(UserWarning):
    """Warning issued when expressions might not evaluate as expected."""
    pass


def isclose(a, b, rel_tol=None, abs_tol=None, use_mp=False):
    r"""Test if two numbers agree within an absolute/relative tolerance.

    For floating point comparison (i.e. if `use_mp==False`), the default
    relative tolerance is `1e-9` and the absolute one `0.0`.
    """
    if use_mp:
        return mp.almosteq(a, b, rel_eps=rel_tol, abs_eps=abs_tol)
    if rel_tol is None:
        rel_tol = 1e-9
    if abs_tol is None:
        abs_tol = 0.0
    return abs(a-b) <= max(rel_tol * max(abs(a), abs(b)), abs_tol)


class NumericExpression(metaclass=ABCMeta):
    """Parent class for numeric expressions.

    Every expression has a fixed type tag naming its shape (e.g. ``"sin"`` or
    ``"product"``), a tuple of numeric parameters and zero, one or two
    sub-expressions. None of these change after construction.

    Expressions can be evaluated directly via evaluate(), or by creating an
    evaluator() for repeated evaluation. Their derivative() is again a
    NumericExpression.

    They also support building a string representation of the complete
    expression, including any sub-expressions, converting to SymPy
    expressions and LaTeX, and can be stored to disk and loaded back from
    disk.

    The methods a child has to override are:
        * _expr_str() returning a representation of the expression and its
          settings
        * _evaluator() creating the callable used by evaluators
        * _sympy_expr() building the equivalent SymPy expression
    and optionally:
        * derivative() if the expression has a derivative
        * _parameters() if the expression has numeric parameters
    """

    ## Name of the function shape, set by each concrete sub class.
    _type_tag = None

    def __init__(self, **sub_exprs):
        r"""Base class init for numeric expressions.

        The ``**sub_exprs`` sub expressions given as keyword arguments here
        are stored in this object and can be accessed with the keys used here
        through the sub_expression() method. They are used when traversing
        through a complete expression hierarchy in e.g. print_tree() or
        traverse_tree().
        """
        for key, expr in sub_exprs.items():
            if not isinstance(expr, NumericExpression):
                raise ConfigurationError(
                    self.type_tag,
                    "sub-expression '%s' must be a function, got %r"
                    % (key, expr)
                )
        self.__sub_expressions = dict(sub_exprs)

    @property
    def type_tag(self):
        r"""Name of the function shape this expression represents."""
        return self._type_tag

    @property
    def parameters(self):
        r"""Tuple of numeric parameters of this expression."""
        return tuple(self._parameters())

    def _parameters(self):
        r"""Child classes with numeric parameters return them here."""
        return ()

    @property
    def children(self):
        r"""Tuple of the sub-expressions of this expression."""
        return tuple(self.__sub_expressions.values())

    def sub_expression(self, key):
        r"""Return the sub-expression stored under the given key."""
        return self.__sub_expressions[key]

    @property
    def nice_name(self):
        r"""More descriptive name, which may be overridden by sub classes."""
        params = self.parameters
        if not params:
            return self.type_tag
        return "%s %s" % (self.type_tag, ", ".join("%r" % p for p in params))

    def traverse_tree(self, include_root=False, skip_zeros=False, parents=None):
        r"""Generator that walks through a complete expression tree.

        In each iteration, the returned values represent the current node's
        parents (as a list from root to immediate parent), its key under which
        it is stored in its parent, and the node itself.

        Args:
            include_root: Whether to include the root as first item. Default
                is `False`.
            skip_zeros: Whether to skip zero (i.e. constant zero) sub
                expressions. Default is `False`.
            parents: Optional list of parents of the root. Normally only used
                internally for the recursion.

        @b Examples
        \code
            for parents, name, expr in root_expr.traverse_tree():
                print("-"*len(parents), name)
        \endcode

        """
        if parents is None:
            parents = []
        if include_root:
            yield parents, "", self
        parents = parents + [self]
        for name, expr in self.__sub_expressions.items():
            if not (skip_zeros and expr.is_zero_expression()):
                yield parents, name, expr
            for node in expr.traverse_tree(include_root=False,
                                           skip_zeros=skip_zeros,
                                           parents=parents):
                yield node

    def print_tree(self, root_name='root', nice_names=True, skip_zeros=False):
        r"""Print the whole expression tree.

        Each expression's key under which it is stored as sub expression will
        be shown as well as its type tag (with parameters in case of
        `nice_names`) and the class name.

        Args:
            root_name: Key name to print for the root expression.
            nice_names: Whether to include the parameters of each expression.
            skip_zeros: Whether to skip zero (i.e. constant zero) sub
                expressions.
        """
        def _p(expr, name, parents=()):
            n = expr.nice_name if nice_names else expr.type_tag
            print("%s%s [%s] <%s>" % (
                ". " * len(parents), name, n, type(expr).__name__
            ))
        _p(self, root_name)
        for parents, name, expr in self.traverse_tree(skip_zeros=skip_zeros):
            _p(expr, name, parents)

    def save(self, filename, overwrite=False, verbose=True):
        r"""Save the expression object to disk.

        Args:
            filename: The file name to store the data in. An extension
                ``'.npy'`` will be added if not already there.
            overwrite: Whether to overwrite an existing file with the same
                name. If `False` (default) and such a file exists, a
                `RuntimeError` is raised.
            verbose: Whether to print when the file was written. Default is
                `True`.
        """
        save_to_file(
            filename, self, overwrite=overwrite, verbose=verbose,
            showname="%s [%s]" % (self.nice_name, type(self).__name__)
        )

    @classmethod
    def load(cls, filename):
        r"""Static function to load an expression object from disk."""
        return load_from_file(filename)

    def __repr__(self):
        r"""Return a string representing the whole expression tree.

        This string may become relatively large for expressions containing
        much data (like tabulated functions with many breakpoints).
        """
        cls = self.__class__.__name__
        return "<%s%s>" % (cls, self.str())

    def str(self):
        """Return the expression and any values of local parameters as a string."""
        return "(%s)" % self._expr_str()

    @abstractmethod
    def _expr_str(self):
        """String representing the expression with any parameter values.

        For example, if the expression is ``a + b x``, with ``a`` and ``b``
        parameters and ``x`` the variable, then this method should return for
        example:

            "a + b x, where a=0.3, b=0.5"

        If ``x`` is a sub-expressions, be sure to use its `str` method and
        not the `_expr_str`. For example:

            def _expr_str(self):
                return ("a + b x, where a=%r, b=%r, x=%s"
                        % (self.a, self.b, self.x.str()))
        """
        pass

    def evaluator(self, use_mp=False):
        r"""Create an evaluator for the expression.

        Use `use_mp` to control whether the evaluator will use floating point
        arithmetics (for `False`) or arbitrary precision mpmath computations
        (for `True`). Default is `False`.
        """
        return Evaluator(self, self._evaluator(use_mp=use_mp), use_mp=use_mp)

    @abstractmethod
    def _evaluator(self, use_mp):
        r"""Child classes need to implement this and return a callable here.

        The callable takes the point `x` and returns the value of the
        expression at `x`. Sub-expressions should be evaluated through their
        own evaluator() created once in this method.
        """
        pass

    def evaluate(self, x, use_mp=False):
        r"""Evaluate the expression at a single point x.

        This creates a new evaluator on each call. Use evaluator() instead
        when evaluating at many points.
        """
        return self._evaluator(use_mp=use_mp)(x)

    def __call__(self, x):
        r"""Evaluate the expression at a point x (floating point mode)."""
        return self.evaluate(x)

    def derivative(self):
        r"""Return a new expression representing the first derivative.

        Expressions without a closed-form derivative in this system do not
        override this method and raise a numutils.ConfigurationError.
        """
        raise ConfigurationError(self.type_tag,
                                 "derivative not defined for this type")

    def duplicate(self):
        r"""Return an independent (deep) copy of this expression tree."""
        return copy.deepcopy(self)

    def is_identical(self, other):
        r"""Return whether `other` represents the same expression tree.

        Two expressions are identical if they have the same type, the same
        parameters and identical sub-expressions.
        """
        if type(self) is not type(other):
            return False
        if self.parameters != other.parameters:
            return False
        mine, theirs = self.children, other.children
        return (len(mine) == len(theirs)
                and all(a.is_identical(b) for a, b in zip(mine, theirs)))

    def sympy_expr(self, arg='x'):
        r"""Return an equivalent SymPy expression.

        Args:
            arg: Name of the independent variable (a string) or a SymPy
                expression to substitute for it.
        """
        if isinstance(arg, str):
            arg = sp.Symbol(arg, real=True)
        return self._sympy_expr(arg)

    @abstractmethod
    def _sympy_expr(self, x):
        r"""Child classes build their SymPy expression in terms of `x` here."""
        pass

    def write(self, arg='x'):
        r"""Return a LaTeX representation of the expression.

        Args:
            arg: Name to use for the independent variable. Default is `'x'`.
        """
        return sp.latex(self.sympy_expr(arg))

    def is_zero_expression(self):
        r"""Return whether this expression is zero and constant.

        Child classes should override this if they can determine whether
        they're zero. By default, all expressions will deny being zero.
        """
        return False

    @classmethod
    @contextmanager
    def context(cls, use_mp, dps=None):
        r"""Convenience function to be used as context manager.

        This yields the module to take math functions from (`mpmath.mp` or
        `math`) based on the choice of `use_mp` and configures the desired
        decimal places.

        Args:
            use_mp: Whether to use `mp` (if `True`) or `math`.
            dps:    Decimal places to use in `mp` computations.
        """
        if not use_mp or dps is None:
            dps = mp.dps
        with mp.workdps(dps):
            yield _math_module(use_mp)


class FunctionExpression(NumericExpression):
    r"""Base class for leaf expressions defined by numeric parameters.

    The factory constructs these from a flat list of parameters (see
    factory.build()). Sub classes whose constructor does not simply take the
    parameters in that order override from_parameters().
    """

    @classmethod
    def from_parameters(cls, params):
        r"""Create the expression from a flat sequence of parameters."""
        return cls(*params)

