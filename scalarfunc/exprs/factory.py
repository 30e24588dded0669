r"""@package scalarfunc.exprs.factory

Construction of expressions by type name.

This is the entry point for host applications reading function definitions
from configuration. The function build() selects the expression class from
its type name and the form of the given arguments, validates the number of
parameters and constructs the expression.

The complete catalog is given by the tables in this module: one entry per
type name, stating the expression class, the accepted number of parameters
and (where applicable) the default parameters.


@b Examples

```
    f = build("sin", 2.0)                       # sin(2x)
    g = build("polynomial", [1.0, 0.0, -0.5])   # 1 - x^2/2
    h = build("product", f, g)
    dh = h.derivative()
    k = build("times-constant", h, 3.0)
    build("Gaussian", [1.0, 2.0])               # raises ConfigurationError
```
"""

from mpmath import mp

from ..numutils import ConfigurationError
from ..utils import isiterable
from .numexpr import NumericExpression
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


__all__ = [
    "build",
    "available_types",
]


class _Arity(object):
    r"""Rule for the number of parameters a type accepts."""

    def __init__(self, check, description):
        r"""Init function.

        Args:
            check:  Callable taking the number of parameters and returning
                    whether it is valid.
            description: Description of the valid numbers, used in error
                    messages (e.g. ``"exactly 3"``).
        """
        self._check = check
        ## Description of the valid numbers of parameters.
        self.description = description

    def __call__(self, n):
        return self._check(n)


def _exactly(num):
    return _Arity(lambda n: n == num, "exactly %d" % num)


def _at_least(num):
    return _Arity(lambda n: n >= num, "at least %d" % num)


_FOURIER = _Arity(lambda n: n % 3 == 1,
                  "1 + 3k (a0 followed by triples of cosine coefficient, "
                  "angular rate and sine coefficient)")

_TABULATED = _Arity(lambda n: n >= 2 and n % 2 == 0,
                    "an even number of at least 2 (breakpoints followed by "
                    "the same number of values)")


## Types built from scalar parameters: class, arity and default parameters
## (`None` if parameters are required).
_SCALAR_TYPES = dict((cls._type_tag, (cls, arity, default)) for cls, arity, default in [
    (SinExpression, _exactly(1), (1.0,)),
    (CosExpression, _exactly(1), (1.0,)),
    (ExpExpression, _exactly(1), (1.0,)),
    (LogExpression, _exactly(1), None),
    (PowerExpression, _exactly(1), None),
    (ConstantExpression, _exactly(1), None),
    (FunctorExpression, _exactly(0), ()),
    (PolynomialExpression, _at_least(1), None),
    (FourierExpression, _FOURIER, None),
    (GaussianExpression, _exactly(3), None),
    (ArrheniusExpression, _exactly(3), None),
    (TabulatedLinearExpression, _TABULATED, None),
    (TabulatedPreviousExpression, _TABULATED, None),
])

## Alternative names accepted by build(), mapped to the catalog names.
_ALIASES = {
    "pow": PowerExpression._type_tag,
}

## Types combining two functions.
_BINARY_TYPES = dict((cls._type_tag, cls) for cls in [
    SumExpression,
    DiffExpression,
    ProductExpression,
    RatioExpression,
    CompositeExpression,
])

## Types combining a function with a scalar.
_FUNCTION_SCALAR_TYPES = dict((cls._type_tag, cls) for cls in [
    TimesConstantExpression,
    PlusConstantExpression,
    PeriodicExpression,
])


def available_types():
    r"""Return the type names known to build(), grouped by parameter form.

    The result is a dictionary with the keys ``"scalars"``, ``"functions"``
    and ``"function+scalar"``, each mapping to a sorted list of names, and
    ``"aliases"`` mapping alternative names to the names they stand for.
    """
    return {
        "scalars": sorted(_SCALAR_TYPES),
        "functions": sorted(_BINARY_TYPES),
        "function+scalar": sorted(_FUNCTION_SCALAR_TYPES),
        "aliases": dict(_ALIASES),
    }


def _expected_form(type_name):
    r"""Describe the argument form a known type name accepts."""
    if type_name in _SCALAR_TYPES:
        arity = _SCALAR_TYPES[type_name][1]
        return "expected %s scalar parameters" % arity.description
    if type_name in _BINARY_TYPES:
        return "expected two functions"
    return "expected a function and a scalar"


def _is_known(type_name):
    return (type_name in _SCALAR_TYPES or type_name in _BINARY_TYPES
            or type_name in _FUNCTION_SCALAR_TYPES)


def _fail(type_name, got):
    r"""Raise the appropriate error for an unsupported argument form."""
    if not _is_known(type_name):
        raise ConfigurationError(type_name, "unknown function type")
    raise ConfigurationError(type_name, "%s, got %s"
                             % (_expected_form(type_name), got))


def _is_scalar(value):
    r"""Return whether `value` can be used as real scalar parameter."""
    if isinstance(value, (bool, str, bytes, NumericExpression)):
        return False
    if isinstance(value, mp.mpf):
        return True
    try:
        float(value)
    except (TypeError, ValueError):
        return False
    return not isiterable(value)


def _to_real(value):
    r"""Convert a scalar parameter to `float`, keeping `mp.mpf` values."""
    if isinstance(value, mp.mpf):
        return value
    return float(value)


def _build_from_scalars(type_name, params):
    cls, arity, default = _SCALAR_TYPES[type_name]
    if params is None:
        if default is None:
            raise ConfigurationError(type_name, "%s, got no parameters"
                                     % _expected_form(type_name))
        params = default
    params = tuple(params)
    for p in params:
        if not _is_scalar(p):
            raise ConfigurationError(type_name, "parameter %r is not a real "
                                     "number" % (p,))
    params = tuple(_to_real(p) for p in params)
    if not arity(len(params)):
        raise ConfigurationError(type_name, "%s, got %d"
                                 % (_expected_form(type_name), len(params)))
    return cls.from_parameters(params)


def build(type_name, *args):
    r"""Construct an expression from its type name and parameters.

    The accepted argument forms are:
        * ``build(name)`` for types with default parameters (``"sin"``,
          ``"cos"``, ``"exp"`` with rate 1)
        * ``build(name, value)`` with a single scalar
        * ``build(name, params)`` with a sequence of scalars
        * ``build(name, f, g)`` with two expressions
        * ``build(name, f, value)`` with an expression and a scalar

    A single scalar is treated as a sequence with one element. Type names
    listed under ``"aliases"`` in available_types() are accepted as well.

    @return A new numexpr.NumericExpression.

    @b Raises

    numutils.ConfigurationError if the type name is unknown, the argument
    form does not match the type, or the number of parameters is invalid.
    """
    if not isinstance(type_name, str):
        raise ConfigurationError(repr(type_name), "type name must be a string")
    type_name = _ALIASES.get(type_name, type_name)
    if not args:
        if type_name in _SCALAR_TYPES:
            return _build_from_scalars(type_name, None)
        _fail(type_name, "no arguments")
    if len(args) == 1:
        arg, = args
        if isinstance(arg, NumericExpression):
            _fail(type_name, "a single function")
        if type_name not in _SCALAR_TYPES:
            _fail(type_name, "scalar parameters")
        if _is_scalar(arg):
            return _build_from_scalars(type_name, (arg,))
        if isinstance(arg, str) or not isiterable(arg):
            raise ConfigurationError(type_name, "parameters must be a real "
                                     "number or a sequence, got %r" % (arg,))
        return _build_from_scalars(type_name, arg)
    if len(args) == 2:
        first, second = args
        if not isinstance(first, NumericExpression):
            _fail(type_name, "%d arguments" % len(args))
        if isinstance(second, NumericExpression):
            if type_name not in _BINARY_TYPES:
                _fail(type_name, "two functions")
            return _BINARY_TYPES[type_name](first, second)
        if _is_scalar(second):
            if type_name not in _FUNCTION_SCALAR_TYPES:
                _fail(type_name, "a function and a scalar")
            return _FUNCTION_SCALAR_TYPES[type_name](first, _to_real(second))
        _fail(type_name, "a function and %r" % (second,))
    _fail(type_name, "%d arguments" % len(args))
