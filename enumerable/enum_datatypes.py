"""
Defines the core data types shared by the enumerable operations.

This module provides the argument sentinel, the early-exit value used by
the traversal primitives, the call-shape tag for `map`, and the error
classes raised on malformed calls.
"""

from enum import Enum
from typing import Any
import collections.abc


# =================================================================
# Errors
# =================================================================

class NotTraversable(TypeError):
    """Raised when an operation receives something without size and positional access."""
    def __init__(self, op: str, obj: Any):
        super().__init__(f"{op} expects a sized, indexable collection, got {type(obj).__name__}")
        self.op = op
        self.obj = obj


class MissingPredicateError(TypeError):
    """A quantifier was called without a predicate (strict mode only)."""
    def __init__(self, op: str):
        super().__init__(f"{op} requires a predicate")
        self.op = op


class EmptyCollectionFoldError(ValueError):
    """reduce was called on an empty collection without an initial value."""
    def __init__(self):
        super().__init__("reduce of empty collection with no initial value")


# =================================================================
# Sentinels and control values
# =================================================================

class _MissingType:
    """Marks an argument that was not supplied. None is a legal value."""
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self):
        return "Missing"

    def __bool__(self):
        return False

Missing = _MissingType()


class Halt:
    """Returned by a step function to stop a traversal early.

    The traversal hands the Halt back to its caller instead of the
    collection; `unwrap_halt` recovers the carried value.
    """
    __slots__ = ("value",)

    def __init__(self, value: Any = None):
        self.value = value

    def __repr__(self) -> str:
        return f"Halt({self.value!r})"

    def __eq__(self, other):
        if not isinstance(other, Halt):
            return NotImplemented
        return self.value == other.value


def is_halt(x) -> bool:
    return isinstance(x, Halt)


def unwrap_halt(x):
    return x.value if is_halt(x) else x


class MapMode(Enum):
    """The call shape selected at the `map` boundary."""
    TRANSFORM = "transform"
    BLOCK = "block"
    ENUMERATOR = "enumerator"


# =================================================================
# Structural capability
# =================================================================

def is_traversable(obj) -> bool:
    """True when obj has a length and zero-based positional access.

    Mappings are excluded: their subscript is by key, not by position.
    """
    if isinstance(obj, collections.abc.Mapping):
        return False
    cls = type(obj)
    return hasattr(cls, "__len__") and hasattr(cls, "__getitem__")


__all__ = [
    "NotTraversable",
    "MissingPredicateError",
    "EmptyCollectionFoldError",
    "Missing",
    "Halt",
    "is_halt",
    "unwrap_halt",
    "MapMode",
    "is_traversable",
]
