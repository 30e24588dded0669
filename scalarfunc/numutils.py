r"""@package scalarfunc.numutils

Miscellaneous numerical utilities and helpers.

Besides a few small helpers used by the expression system, this module
contains the weighted least squares polynomial fit and the quadrature rules
for sampled data.


@b Examples

```
    >>> coeffs, rms = polyfit([0, 1, 2], [1, 3, 5], deg=1)
    >>> [round(c, 12) for c in coeffs]
    [1.0, 2.0]
    >>> round(quadrature("trapezoidal", [1.0, 2.0, 5.0, 0.0], [0, 0.3, 1.0, 1.2]), 12)
    3.4
```
"""

from contextlib import contextmanager
import warnings

from scipy.linalg import LinAlgWarning
from scipy import linalg
import numpy as np


__all__ = [
    "ConfigurationError",
    "clip",
    "polyfit",
    "trapezoidal",
    "simpson",
    "quadrature",
    "quadrature_methods",
    "raise_all_warnings",
]


class ConfigurationError(Exception):
    r"""Exception raised for invalid construction requests.

    This is the single error kind of the function engine. It is raised when a
    type name is unknown, parameters do not match the form expected for a
    type, or a derivative is requested for a type that does not define one.

    The offending type name and a description of what was expected are
    available as the `type_name` and `description` attributes.
    """
    def __init__(self, type_name, description):
        super(ConfigurationError, self).__init__(
            "%s: %s" % (type_name, description)
        )
        ## Name of the function type the request was made for.
        self.type_name = type_name
        ## Human readable description of the problem.
        self.description = description


def clip(x, x_min, x_max):
    r"""Confine a value to an interval."""
    return max(x_min, min(x_max, x))


def polyfit(x, y, deg, weights=None):
    r"""Weighted least squares fit of a polynomial to data points.

    The polynomial
    \f[
        p(x) = \sum_{k=0}^{\mathrm{deg}} p_k x^k
    \f]
    is fitted by minimizing \f$ \sum_i w_i (p(x_i) - y_i)^2 \f$.

    @param x
        Sequence of the `n` abscissas.
    @param y
        Sequence of the `n` data values.
    @param deg
        Degree of the polynomial. Must be smaller than `n`.
    @param weights
        Optional sequence of `n` weights \f$ w_i \f$. These are the *squares*
        of the factors the rows of the least squares system are multiplied
        with. If the first weight is not positive, all weights are ignored and
        an unweighted fit is done.

    @return A pair ``(coeffs, rms)``, where `coeffs` is a NumPy array of the
        ``deg+1`` coefficients in ascending order and `rms` is the weighted
        root-mean-square residual \f$ \Vert W(Ap - y)\Vert / \sqrt{n} \f$.
    """
    x = np.asarray(x, dtype=float)
    y = np.asarray(y, dtype=float)
    n = len(x)
    if len(y) != n:
        raise ValueError("Got %d abscissas but %d values." % (n, len(y)))
    if deg < 0 or deg >= n:
        raise ValueError("Polynomial degree (%s) must be less than number of "
                         "data points (%s)." % (deg, n))
    A = np.vander(x, deg+1, increasing=True)
    if weights is not None:
        weights = np.asarray(weights, dtype=float)
        if len(weights) != n:
            raise ValueError("Got %d weights for %d data points."
                             % (len(weights), n))
        if weights[0] > 0:
            w = np.sqrt(weights)
            A = w[:,None] * A
            y = w * y
    with raise_all_warnings():
        coeffs = linalg.lstsq(A, y)[0]
    rms = linalg.norm(A.dot(coeffs) - y) / np.sqrt(n)
    return coeffs, rms


def _check_samples(f, x):
    r"""Convert sampled data to arrays and check their shapes."""
    f = np.asarray(f, dtype=float)
    x = np.asarray(x, dtype=float)
    if f.shape != x.shape or f.ndim != 1:
        raise ValueError("Function values and abscissas must be 1D sequences "
                         "of equal length.")
    if len(x) < 2:
        raise ValueError("Need at least two samples to integrate.")
    return f, x


def trapezoidal(f, x):
    r"""Integrate sampled data using the trapezoidal rule.

    @param f
        Function values at the points `x`.
    @param x
        Abscissas, which need not be equally spaced.
    """
    f, x = _check_samples(f, x)
    return float(np.sum(np.diff(x) * (f[1:] + f[:-1])) / 2.0)


def _basic_simpson(f, x):
    r"""Simpson's rule for an odd number of (non-uniform) samples."""
    if len(x) < 3:
        return 0.0
    h = np.diff(x)
    h0 = h[0:-1:2]
    h1 = h[1::2]
    hsum = h0 + h1
    f0, f1, f2 = f[0:-2:2], f[1:-1:2], f[2::2]
    return float(np.sum(
        hsum / 6.0 * ((2.0 - h1/h0) * f0
                      + hsum**2 / (h0*h1) * f1
                      + (2.0 - h0/h1) * f2)
    ))


def simpson(f, x):
    r"""Integrate sampled data using Simpson's rule.

    The non-uniform three-point rule is applied to consecutive pairs of
    intervals. For an even number of samples (i.e. an odd number of
    intervals), the last interval is integrated using the trapezoidal rule.

    @param f
        Function values at the points `x`.
    @param x
        Abscissas, which need not be equally spaced.
    """
    f, x = _check_samples(f, x)
    if len(x) % 2:
        return _basic_simpson(f, x)
    return (_basic_simpson(f[:-1], x[:-1])
            + (x[-1] - x[-2]) * (f[-1] + f[-2]) / 2.0)


## Quadrature rules available in quadrature().
_QUADRATURE_METHODS = {
    "trapezoidal": trapezoidal,
    "simpson": simpson,
}


def quadrature_methods():
    r"""Return the names of the methods supported by quadrature()."""
    return sorted(_QUADRATURE_METHODS)


def quadrature(method, f, x):
    r"""Integrate sampled data using the quadrature rule of the given name.

    @param method
        One of the names returned by quadrature_methods(), i.e.
        ``"trapezoidal"`` or ``"simpson"``.
    @param f
        Function values at the points `x`.
    @param x
        Abscissas of the samples.
    """
    try:
        rule = _QUADRATURE_METHODS[method]
    except KeyError:
        raise ConfigurationError(
            method, "unknown quadrature method, expected one of: %s"
            % ", ".join(quadrature_methods())
        )
    return rule(f, x)


@contextmanager
def raise_all_warnings():
    r"""Context manager for turning numpy and native warnings into exceptions.

    For example:
    ```
        with raise_all_warnings():
            np.pi / np.linspace(0, 1, 10)
    ```
    Without the `raise_all_warnings()` context, the above code would just
    issue a warning but otherwise run fine. This allows catching the exception
    to act upon it, e.g.
    ```
        with raise_all_warnings():
            try:
                np.pi / np.linspace(0, 1, 10)
            except FloatingPointError:
                print("Could not compute.")
    ```
    """
    old_settings = np.seterr(divide='raise', over='raise', invalid='raise')
    try:
        with warnings.catch_warnings():
            warnings.filterwarnings('error', category=LinAlgWarning)
            yield
    finally:
        np.seterr(**old_settings)
