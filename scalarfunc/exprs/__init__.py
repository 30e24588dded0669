r"""@package scalarfunc.exprs

Expression system for composing scalar functions of one real variable and
evaluating them and their derivatives.

Each expression represents either an elementary function (like
\f$ \sin(\omega x) \f$, a polynomial or a tabulated function) or a
combination of one or two other expressions (like \f$ f(x) g(x) \f$ or
\f$ f(g(x)) \f$).

Every expression can produce its exact derivative as a new expression tree,
built from the derivatives of its sub-expressions. Expression types without
a closed-form derivative in this system raise a
numutils.ConfigurationError when asked for one.

Expressions are evaluated directly via numexpr.NumericExpression.evaluate()
or, for repeated evaluation, through an evaluators.Evaluator snapshot. Both
can use fast floating point operations or `mpmath` arbitrary precision
operations.

Host applications usually construct expressions by type name through
factory.build(), which validates the parameters and reports problems as
numutils.ConfigurationError.

All expressions are *picklable* and can be stored to disk using
numexpr.NumericExpression.save() and restored using
numexpr.NumericExpression.load().
"""

from .numexpr import NumericExpression, ExpressionWarning
from .basics import ConstantExpression, SinExpression, CosExpression
from .basics import ExpExpression, LogExpression, PowerExpression
from .basics import FunctorExpression
from .series import PolynomialExpression, FourierExpression
from .special import GaussianExpression, ArrheniusExpression
from .tabulated import TabulatedLinearExpression, TabulatedPreviousExpression
from .combinators import SumExpression, DiffExpression, ProductExpression
from .combinators import RatioExpression, CompositeExpression
from .combinators import TimesConstantExpression, PlusConstantExpression
from .combinators import PeriodicExpression
from .factory import build, available_types
