r"""@package scalarfunc

Symbolic scalar functions of one real variable.

Functions are represented as expression trees (see the scalarfunc.exprs
package) which can be evaluated and differentiated analytically. New trees
are usually created by type name using scalarfunc.exprs.factory.build():

```
    from scalarfunc import build
    f = build("product", build("sin", 2.0), build("exp", -0.5))
    f(0.5), f.derivative()(0.5)
```

The scalarfunc.numutils module contains the numerical utilities used
alongside these functions: a weighted least squares polynomial fit and
quadrature rules for sampled data.
"""

from .numutils import ConfigurationError
from .exprs.factory import build, available_types
