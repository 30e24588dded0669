r"""@package scalarfunc.exprs.common

Utils used by multiple modules in scalarfunc.exprs.
"""

import math

from mpmath import mp


__all__ = [
    "is_zero_function",
]


def _zero_function(x):
    """Constant function 0.

    This is used in the expression system to indicate the zero function, such
    that we know, e.g., that derivatives vanish too.
    """
    # pylint: disable=unused-argument
    return 0


def is_zero_function(func):
    r"""Check whether a given function is the zero function.

    This checks the identity of the given function with a particular zero
    function. This can be useful if expressions/evaluators actually
    use/return this _zero_function() function object when they know this is
    correct.
    """
    return func is _zero_function


def _math_module(use_mp):
    r"""Return `mpmath.mp` or the `math` module, depending on `use_mp`.

    Both provide `sin`, `cos`, `exp`, `log`, `sqrt` and `pi`, so evaluators
    can be written once for both evaluation modes.
    """
    return mp if use_mp else math


def _converter(use_mp):
    r"""Return a callable converting scalars to `mp.mpf` or `float`."""
    return mp.mpf if use_mp else float


def _float_power(x, p):
    r"""`math.pow()` returning `inf` for a zero base and negative exponent."""
    if x == 0 and p < 0:
        return math.inf
    return math.pow(x, p)


def _mp_power(x, p):
    r"""`mpmath.power()` returning `+inf` for a zero base and negative exponent."""
    if x == 0 and p < 0:
        return mp.inf
    return mp.power(x, p)


def _power(use_mp):
    r"""Return a real power function for the given evaluation mode.

    For floats, `math.pow()` is used, which raises a `ValueError` instead of
    silently returning complex results for negative bases. A zero base with a
    negative exponent gives `+inf` in both modes.
    """
    return _mp_power if use_mp else _float_power
