# enum_core.py

import os
import sys
import operator
from typing import Any, Callable, List, Optional, Union

from enumerable.enum_datatypes import (
    NotTraversable, MissingPredicateError, EmptyCollectionFoldError,
    Missing, Halt, is_halt, MapMode, is_traversable,
)

# ===================================================================
# 1. Configuration & Debug Tracing
# ===================================================================

DEBUG_ENV = "ENUMERABLE_DEBUG"
STRICT_ENV = "ENUMERABLE_STRICT"


def _env_flag(name: str) -> bool:
    try:
        return bool(os.environ.get(name))
    except Exception:
        return False


def _dbg(*parts):
    if _env_flag(DEBUG_ENV):
        try:
            print("[DBG]", *parts, file=sys.stderr)
        except Exception:
            pass


def _size_of(t):
    try:
        return len(t)
    except Exception:
        return "?"


def _require_traversable(op: str, t):
    if not is_traversable(t):
        raise NotTraversable(op, t)


def _require_callable(op: str, fn, what: str):
    if not callable(fn):
        raise TypeError(f"{op} expects a callable {what}, got {type(fn).__name__}")


def _missing_predicate(op: str):
    # Absent result by default; strict mode turns it into an error.
    if _env_flag(STRICT_ENV):
        raise MissingPredicateError(op)
    _dbg(f"{op}()", "no predicate, returning none")
    return None


# ===================================================================
# 2. Traversal Primitives
# ===================================================================

def for_each(t, fn: Callable[[Any], Any]):
    """
    Call `fn(element)` for every element of `t`, in ascending index order.

    Returns `t` so calls can be chained. If `fn` returns a `Halt`, the
    traversal stops at once and the `Halt` is returned instead.
    """
    _require_traversable("for_each", t)
    _require_callable("for_each", fn, "step function")
    n = len(t)
    _dbg("for_each()", "type", type(t).__name__, "size", n)
    i = 0
    while i < n:
        out = fn(t[i])
        if is_halt(out):
            _dbg("for_each()", "halted at", i)
            return out
        i += 1
    return t


def for_each_indexed(t, fn: Callable[[Any, int], Any]):
    """Like `for_each`, but calls `fn(element, index)`."""
    _require_traversable("for_each_indexed", t)
    _require_callable("for_each_indexed", fn, "step function")
    n = len(t)
    _dbg("for_each_indexed()", "type", type(t).__name__, "size", n)
    i = 0
    while i < n:
        out = fn(t[i], i)
        if is_halt(out):
            _dbg("for_each_indexed()", "halted at", i)
            return out
        i += 1
    return t


# ===================================================================
# 3. Selection & Quantifiers
# ===================================================================

def filter(t, predicate: Callable[[Any], Any]) -> List[Any]:
    """Elements for which `predicate` is truthy, in their original order."""
    _require_traversable("filter", t)
    _require_callable("filter", predicate, "predicate")
    out = []

    def _keep(ele):
        if predicate(ele):
            out.append(ele)

    for_each(t, _keep)
    return out


def all(t, predicate: Optional[Callable[[Any], Any]] = None) -> Optional[bool]:
    _require_traversable("all", t)
    if predicate is None:
        return _missing_predicate("all")
    _require_callable("all", predicate, "predicate")
    res = for_each(t, lambda ele: None if predicate(ele) else Halt(False))
    return res.value if is_halt(res) else True


def any(t, predicate: Optional[Callable[[Any], Any]] = None) -> Optional[bool]:
    _require_traversable("any", t)
    if predicate is None:
        return _missing_predicate("any")
    _require_callable("any", predicate, "predicate")
    res = for_each(t, lambda ele: Halt(True) if predicate(ele) else None)
    return res.value if is_halt(res) else False


def none(t, predicate: Optional[Callable[[Any], Any]] = None) -> Optional[bool]:
    _require_traversable("none", t)
    if predicate is None:
        return _missing_predicate("none")
    _require_callable("none", predicate, "predicate")
    res = for_each(t, lambda ele: Halt(False) if predicate(ele) else None)
    return res.value if is_halt(res) else True


def count(t, value: Any = Missing, predicate: Optional[Callable[[Any], Any]] = None) -> int:
    """
    Count elements of `t`.

    - with `predicate`: elements for which it is truthy (`value` is ignored);
    - with `value` only: elements equal to `value` (None is a valid value);
    - with neither: every element.
    """
    _require_traversable("count", t)
    total = 0

    if predicate is not None:
        _require_callable("count", predicate, "predicate")
        if value is not Missing:
            _dbg("count()", "predicate given, ignoring value", repr(value))

        def _step(ele):
            nonlocal total
            if predicate(ele):
                total += 1
    elif value is not Missing:
        def _step(ele):
            nonlocal total
            if ele == value:
                total += 1
    else:
        def _step(ele):
            nonlocal total
            total += 1

    for_each(t, _step)
    return total


# ===================================================================
# 4. Transformation
# ===================================================================

def resolve_map_mode(transform=None, block=None) -> MapMode:
    """Select the `map` call shape. A transform wins over a block."""
    if transform is not None:
        return MapMode.TRANSFORM
    if block is not None:
        return MapMode.BLOCK
    return MapMode.ENUMERATOR


def map(t, transform: Optional[Callable[[Any], Any]] = None, *,
        block: Optional[Callable[[Any], Any]] = None) -> Union[List[Any], "Enumerator"]:
    """
    Transform every element of `t`.

    Returns a list when a transform or a block is given, and an
    `Enumerator` over `t` when neither is.
    """
    _require_traversable("map", t)
    mode = resolve_map_mode(transform, block)
    _dbg("map()", "type", type(t).__name__, "size", _size_of(t), "mode", mode.value)

    if mode is MapMode.ENUMERATOR:
        from enumerable.enum_capability import Enumerator
        return Enumerator(t, method="map")

    fn = transform if mode is MapMode.TRANSFORM else block
    _require_callable("map", fn, mode.value)
    out = []
    for_each(t, lambda ele: out.append(fn(ele)))
    return out


# ===================================================================
# 5. Folding
# ===================================================================

def reduce(t, step: Callable[[Any, Any], Any], initial: Any = Missing):
    """
    Left-fold `t` with `step(accumulator, element)`.

    With `initial`, every element is folded into it. Without it, the first
    element seeds the accumulator and folding starts at the second one; an
    empty collection then raises `EmptyCollectionFoldError`.
    """
    _require_traversable("reduce", t)
    _require_callable("reduce", step, "step function")
    seeded = initial is not Missing
    _dbg("reduce()", "type", type(t).__name__, "size", _size_of(t), "seeded", seeded)
    if not seeded and len(t) == 0:
        raise EmptyCollectionFoldError()

    memo = initial

    def _fold(ele, i):
        nonlocal memo
        if not seeded and i == 0:
            memo = ele
            return None
        memo = step(memo, ele)
        return None

    for_each_indexed(t, _fold)
    return memo


def product(t):
    return reduce(t, operator.mul, 1)


__all__ = [
    "DEBUG_ENV",
    "STRICT_ENV",
    "for_each",
    "for_each_indexed",
    "filter",
    "all",
    "any",
    "none",
    "count",
    "resolve_map_mode",
    "map",
    "reduce",
    "product",
]
