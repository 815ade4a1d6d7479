"""Exception types raised by the ring, module and Laurent polynomial code.

Each one subclasses a builtin so callers catching ``ValueError`` or
``ArithmeticError`` keep working.
"""

from __future__ import annotations


class IncompatibleModuleError(ValueError):
    """Element/module mismatch: wrong parent, wrong length or wrong shape."""


class InexactDivisionError(ArithmeticError):
    """Exact division requested but the remainder is nonzero."""


class NotAUnitError(ArithmeticError):
    """Inverse requested for a ring element that is not a unit."""


class NotAMonomialError(ValueError):
    """Negative power of a Laurent polynomial with more than one term."""
