r"""@package scalarfunc.exprs.special

Special purpose expressions: Gaussian pulses and Arrhenius rate terms.

Neither defines a derivative.
"""

import math

import sympy as sp

from .common import _converter, _math_module, _power
from .numexpr import FunctionExpression


__all__ = [
    "GaussianExpression",
    "ArrheniusExpression",
]


class GaussianExpression(FunctionExpression):
    r"""Gaussian pulse parameterized by its full width at half maximum.

    Represents an expression of the form
    \f[
        f(x) = A \exp\left[-\left(\frac{x - t_0}{\tau}\right)^2\right],
        \qquad
        \tau = \frac{\mathrm{fwhm}}{2\sqrt{\ln 2}}.
    \f]
    """
    _type_tag = "Gaussian"

    def __init__(self, amplitude, center, fwhm):
        r"""Init function.

        Args:
            amplitude:  Peak value \f$ A \f$.
            center:     Location \f$ t_0 \f$ of the peak.
            fwhm:       Full width at half maximum.
        """
        super(GaussianExpression, self).__init__()
        self._A = amplitude
        self._t0 = center
        self._fwhm = fwhm

    @property
    def amplitude(self):
        return self._A

    @property
    def center(self):
        return self._t0

    @property
    def fwhm(self):
        return self._fwhm

    def _parameters(self):
        return (self._A, self._t0, self._fwhm)

    def _expr_str(self):
        return ("A exp(-((x-t0)/tau)^2), where A=%r, t0=%r, fwhm=%r"
                % (self._A, self._t0, self._fwhm))

    def _evaluator(self, use_mp):
        ctx = _math_module(use_mp)
        fl = _converter(use_mp)
        exp = ctx.exp
        A, t0 = fl(self._A), fl(self._t0)
        tau = fl(self._fwhm) / (2 * ctx.sqrt(ctx.log(fl(2))))
        def f(x):
            u = (x - t0) / tau
            return A * exp(-u * u)
        return f

    def _sympy_expr(self, x):
        tau = self._fwhm / (2 * math.sqrt(math.log(2.)))
        return self._A * sp.exp(-((x - self._t0) / tau)**2)


class ArrheniusExpression(FunctionExpression):
    r"""Modified Arrhenius rate term.

    Represents an expression of the form
    \f[
        f(x) = A x^b \exp(-E/x),
    \f]
    where `x` is the temperature and `E` the activation energy divided by the
    gas constant.
    """
    _type_tag = "Arrhenius"

    def __init__(self, A, b, E):
        r"""Init function.

        Args:
            A:  Pre-exponential factor.
            b:  Temperature exponent.
            E:  Activation energy divided by the gas constant (a temperature).
        """
        super(ArrheniusExpression, self).__init__()
        self._A = A
        self._b = b
        self._E = E

    @property
    def A(self):
        return self._A

    @property
    def b(self):
        return self._b

    @property
    def E(self):
        return self._E

    def _parameters(self):
        return (self._A, self._b, self._E)

    def _expr_str(self):
        return ("A x^b exp(-E/x), where A=%r, b=%r, E=%r"
                % (self._A, self._b, self._E))

    def _evaluator(self, use_mp):
        exp = _math_module(use_mp).exp
        power = _power(use_mp)
        fl = _converter(use_mp)
        A, b, E = fl(self._A), fl(self._b), fl(self._E)
        return lambda x: A * power(x, b) * exp(-E / x)

    def _sympy_expr(self, x):
        return self._A * x**self._b * sp.exp(-self._E / x)
