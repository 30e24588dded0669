r"""@package testutils

Utilities to add more features to `unittest` classes.

This module provides a custom subclass of `unittest.TestCase`, namely
FuncTestCase, which obeys the global configuration settings in TestSettings
and adds assertions for comparing sampled functions and checking the errors
raised by the function engine.

This module also introduces a new decorator slowtest, which, when applied,
leads to the test being skipped on normal runs. The script starting the test
must set `TestSettings.skipslow` to `False` for the slow tests to be run.
"""

import sys
import functools
import unittest
import time


__all__ = [
    "FuncTestCase",
    "TestSettings",
    "slowtest",
]


def slowtest(func):
    """Decorator for skipping a test if TestSettings.skipslow is true."""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        if TestSettings.skipslow:
            raise unittest.SkipTest("skipping slow tests")
        return func(*args, **kwargs)
    return wrapper


class FuncTestCase(unittest.TestCase):
    """Tweaked baseclass for unit tests of the function engine.

    By deriving from this class, you:
        * Get timed individual tests if TestSettings.timing is true.
        * Can use assertListAlmostEqual() to compare sampled functions.
        * Can use assertConfigurationError() to check the type name reported
          by a failed construction or derivative request.
    """
    def setUp(self):
        super(FuncTestCase, self).setUp()
        self._start_time = time.time()
        if TestSettings.timing:
            self.addCleanup(self._print_timing)

    def _print_timing(self):
        duration = time.time() - self._start_time
        print("(%.4f seconds) ... " % duration, file=sys.stderr, end='')

    def assertIsType(self, obj, cls):
        r"""Assert that an object is exactly of a certain type."""
        self.assertIs(type(obj), cls)

    def assertListAlmostEqual(self, a, b, places=None, delta=None):
        r"""Assert that two iterables contain (almost) the same values."""
        if places is not None and delta is not None:
            raise TypeError("Cannot use delta and places at the same time")
        if places is None and delta is None:
            places = 7
        a, b = list(a), list(b)
        if len(a) != len(b):
            raise self.failureException(
                "Lists have different lengths (%d != %d)" % (len(a), len(b))
            )
        def _differ(x, y):
            if x == y:
                return False
            if delta is not None:
                return abs(x-y) > delta
            return round(abs(x-y), places) != 0
        fails = [i for i, (x, y) in enumerate(zip(a, b)) if _differ(x, y)]
        if fails:
            max_shown = 9
            msg = "%d elements differ.\n" % len(fails)
            if len(fails) <= max_shown:
                msg += "Differing elements:\n"
            else:
                msg += "First few differing elements:\n"
            msg += "\n".join(
                "  [{i}] {a} != {b}    (difference: {d})".format(
                    i=i, a=a[i], b=b[i], d=b[i]-a[i]
                )
                for i in fails[:max_shown]
            )
            raise self.failureException(msg)

    def assertFunctionAlmostEqual(self, f, g, points, places=None,
                                  delta=None):
        r"""Assert that two callables agree (almost) at all given points."""
        points = list(points)
        self.assertListAlmostEqual([f(x) for x in points],
                                   [g(x) for x in points],
                                   places=places, delta=delta)

    def assertConfigurationError(self, type_name, func, *args, **kwargs):
        r"""Assert that a call raises a ConfigurationError for `type_name`.

        @return The raised exception for further inspection.
        """
        # Imported here to keep this module importable without the package.
        from scalarfunc.numutils import ConfigurationError
        with self.assertRaises(ConfigurationError) as cm:
            func(*args, **kwargs)
        self.assertEqual(cm.exception.type_name, type_name)
        return cm.exception


class TestSettings(object):
    """Global settings for tests."""
    ## Stop test run on first fail/error.
    failfast = False
    ## Whether output is buffered.\ Just information, cannot be used to toggle output buffering.
    buffering = False
    ## Whether the timing for each test case should be printed.
    timing = False
    ## Control whether tests marked as slowtest should be skipped.
    skipslow = True
