r"""@package scalarfunc.exprs.tabulated

Functions defined by a table of breakpoints and values.

Two interpolation modes are available:

    * TabulatedLinearExpression interpolates linearly between consecutive
      breakpoints and is clamped to the first/last value outside the table.
    * TabulatedPreviousExpression is a right-continuous step function keeping
      the value of the closest breakpoint at or before `x`.

The breakpoints have to be non-decreasing. This is not enforced, but an
numexpr.ExpressionWarning is issued if they are not.


@b Examples

```
    # A ramp from 0 to 1 on [0, 2], constant outside.
    f = TabulatedLinearExpression([0, 2], [0, 1])
    f(1.0)                  # 0.5
    f.derivative()(1.0)     # 0.5, the slope of the ramp
```
"""

from bisect import bisect_right
import warnings

import sympy as sp

from ..numutils import ConfigurationError, clip
from .common import _converter
from .numexpr import FunctionExpression, ExpressionWarning


__all__ = [
    "TabulatedLinearExpression",
    "TabulatedPreviousExpression",
]


class _TabulatedExpression(FunctionExpression):
    r"""Base class for tabulated functions.

    The breakpoints and values are stored as two tuples of equal length and
    are accessible via the `breakpoints` and `values` properties.
    """
    def __init__(self, breakpoints, values):
        r"""Init function.

        Args:
            breakpoints: Non-decreasing sequence of points
                \f$ x_0 \le x_1 \le \ldots \le x_n \f$.
            values: Function values \f$ y_i \f$ at these points.
        """
        super(_TabulatedExpression, self).__init__()
        breakpoints, values = tuple(breakpoints), tuple(values)
        if len(breakpoints) != len(values):
            raise ConfigurationError(
                self._type_tag,
                "got %d breakpoints but %d values"
                % (len(breakpoints), len(values))
            )
        if not breakpoints:
            raise ConfigurationError(self._type_tag,
                                     "at least one breakpoint is required")
        if any(b > a for a, b in zip(breakpoints[1:], breakpoints[:-1])):
            warnings.warn(
                "Breakpoints of %s function are not non-decreasing: %r"
                % (self._type_tag, list(breakpoints)),
                ExpressionWarning
            )
        self._x = breakpoints
        self._y = values

    @classmethod
    def from_parameters(cls, params):
        r"""Create from breakpoints followed by the same number of values."""
        n = len(params) // 2
        return cls(params[:n], params[n:])

    @property
    def breakpoints(self):
        r"""Tuple of breakpoints."""
        return self._x

    @property
    def values(self):
        r"""Tuple of function values at the breakpoints."""
        return self._y

    def _parameters(self):
        return self._x + self._y

    def _expr_str(self):
        return ("tabulated, where x_i=%r, y_i=%r"
                % (list(self._x), list(self._y)))

    def _segment(self, x):
        r"""Index `i` of the segment `[x_i, x_{i+1})` containing `x`.

        Points before the first breakpoint give `-1`, points at or after the
        last breakpoint give the last index.
        """
        return bisect_right(self._x, x) - 1


class TabulatedLinearExpression(_TabulatedExpression):
    r"""Piecewise linear interpolation of tabulated values."""
    _type_tag = "tabulated-linear"

    def _evaluator(self, use_mp):
        fl = _converter(use_mp)
        xs = [fl(x) for x in self._x]
        ys = [fl(y) for y in self._y]
        last = len(xs) - 1
        def f(x):
            if x <= xs[0]:
                return ys[0]
            if x >= xs[last]:
                return ys[last]
            i = bisect_right(xs, x) - 1
            return ys[i] + (x - xs[i]) * (ys[i+1] - ys[i]) / (xs[i+1] - xs[i])
        return f

    def slopes(self):
        r"""Slopes of all segments `[x_i, x_{i+1})`.

        Segments of zero width (repeated breakpoints) are never used for
        evaluation and are assigned the slope `0`.
        """
        xs, ys = self._x, self._y
        return [(ys[i+1] - ys[i]) / (xs[i+1] - xs[i]) if xs[i+1] != xs[i] else 0.0
                for i in range(len(xs) - 1)]

    def derivative(self):
        r"""Piecewise constant slope of the linear interpolation.

        The result is a TabulatedPreviousExpression over the same breakpoints
        with the segment slopes as values. At and beyond the last breakpoint
        the derivative is zero. Before the first breakpoint, the slope of the
        first segment is kept.
        """
        return TabulatedPreviousExpression(self._x, self.slopes() + [0.0])

    def _sympy_expr(self, x):
        xs, ys = self._x, self._y
        pieces = [(sp.sympify(ys[0]), x < xs[0])]
        for i, s in enumerate(self.slopes()):
            if xs[i+1] != xs[i]:
                pieces.append((ys[i] + s * (x - xs[i]), x < xs[i+1]))
        pieces.append((sp.sympify(ys[-1]), True))
        return sp.Piecewise(*pieces)


class TabulatedPreviousExpression(_TabulatedExpression):
    r"""Step function keeping the value of the previous breakpoint.

    On each interval \f$ [x_i, x_{i+1}) \f$, the value is \f$ y_i \f$, i.e.
    the value changes exactly at (and including) each breakpoint. Before the
    first breakpoint, the first value is used.
    """
    _type_tag = "tabulated-previous"

    def _evaluator(self, use_mp):
        fl = _converter(use_mp)
        ys = [fl(y) for y in self._y]
        last = len(ys) - 1
        segment = self._segment
        return lambda x: ys[clip(segment(x), 0, last)]

    def derivative(self):
        r"""Zero function (almost everywhere) as step function of zeros."""
        return TabulatedPreviousExpression(self._x, [0.0] * len(self._x))

    def is_zero_expression(self):
        return all(y == 0 for y in self._y)

    def _sympy_expr(self, x):
        xs, ys = self._x, self._y
        pieces = [(sp.sympify(ys[0]), x < xs[0])]
        for i in range(len(xs) - 1):
            if xs[i+1] != xs[i]:
                pieces.append((sp.sympify(ys[i]), x < xs[i+1]))
        pieces.append((sp.sympify(ys[-1]), True))
        return sp.Piecewise(*pieces)
