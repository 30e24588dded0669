#!/usr/bin/env python3
r"""Run all `test_*.py` modules of the project.

Options:
    -f, --failfast        stop on the first failure or error
    -b, --buffer          buffer output of passing tests
    -t, --timing          print the duration of each test
    -s, --run-slow-tests  also run tests marked as slowtest
"""

import unittest
import os
import sys

import os.path as op
sys.path.insert(0, op.dirname(op.realpath(__file__)))

from testutils import TestSettings


def run_tests():
    failfast = '-f' in sys.argv or '--failfast' in sys.argv
    buffering = '-b' in sys.argv or '--buffer' in sys.argv
    timing = '-t' in sys.argv or '--timing' in sys.argv
    runSlow = '-s' in sys.argv or '--run-slow-tests' in sys.argv
    TestSettings.failfast = failfast
    TestSettings.buffering = buffering
    TestSettings.timing = timing
    TestSettings.skipslow = not runSlow
    suite = unittest.TestLoader().discover(os.path.dirname(os.path.realpath(__file__)), pattern="test_*.py")
    result = unittest.TextTestRunner(verbosity=2, failfast=failfast, buffer=buffering).run(suite)
    return len(result.failures) + len(result.errors)


if __name__ == '__main__':
    sys.exit(1 if run_tests() else 0)
