# enum_capability.py

import inspect
import collections.abc
from typing import Any, Callable, Optional

from enumerable import enum_core as core
from enumerable.enum_datatypes import NotTraversable, Missing, is_traversable


def enumerable_api(func):
    """A decorator to mark methods that make up the attachable capability set."""
    func._is_enumerable_api = True
    return func


# Ruby vocabulary bound next to the canonical names.
ALIASES = {
    "for_each": ("each",),
    "for_each_indexed": ("each_with_index",),
    "filter": ("select",),
    "reduce": ("inject",),
    "product": ("multiply_els",),
    "all": ("all_q",),
    "any": ("any_q",),
    "none": ("none_q",),
}


# ===================================================================
# 1. The Capability Set
# ===================================================================

class Enumerable:
    """Mixin giving any class with `__len__` and `__getitem__` the traversal operations.

    Every method routes to the function of the same name in `enum_core`
    with `self` as the collection.
    """

    @enumerable_api
    def for_each(self, fn):
        return core.for_each(self, fn)

    @enumerable_api
    def for_each_indexed(self, fn):
        return core.for_each_indexed(self, fn)

    @enumerable_api
    def filter(self, predicate):
        return core.filter(self, predicate)

    @enumerable_api
    def all(self, predicate=None):
        return core.all(self, predicate)

    @enumerable_api
    def any(self, predicate=None):
        return core.any(self, predicate)

    @enumerable_api
    def none(self, predicate=None):
        return core.none(self, predicate)

    @enumerable_api
    def count(self, value=Missing, predicate=None):
        return core.count(self, value, predicate)

    @enumerable_api
    def map(self, transform=None, *, block=None):
        return core.map(self, transform, block=block)

    @enumerable_api
    def reduce(self, step, initial=Missing):
        return core.reduce(self, step, initial)

    @enumerable_api
    def product(self):
        return core.product(self)


API_NAMES = tuple(
    name for name, member in inspect.getmembers(Enumerable, inspect.isfunction)
    if getattr(member, "_is_enumerable_api", False)
)

for _name, _aliases in ALIASES.items():
    for _alias in _aliases:
        setattr(Enumerable, _alias, getattr(Enumerable, _name))
del _name, _aliases, _alias


def _bound_names(name: str, prefix: str, aliases: bool):
    names = [name]
    if aliases:
        names.extend(ALIASES.get(name, ()))
    return [f"{prefix}{n}" for n in names]


def attach(cls=None, *, prefix: str = "", aliases: bool = True, override: bool = False):
    """
    Graft the capability set onto an existing class without changing its bases.

    Usable as a plain call, `attach(MyList, prefix="my_")`, or as a class
    decorator, with or without arguments. Existing attributes are left
    alone unless `override` is set; a collision raises ValueError before
    anything is bound.
    """
    if cls is None:
        def _decorate(target):
            return attach(target, prefix=prefix, aliases=aliases, override=override)
        return _decorate

    if not isinstance(cls, type):
        raise TypeError(f"attach expects a class, got {type(cls).__name__}")
    if issubclass(cls, collections.abc.Mapping) or not (hasattr(cls, "__len__") and hasattr(cls, "__getitem__")):
        raise TypeError(f"attach expects a class with __len__ and __getitem__, got {cls.__name__}")
    if cls.__module__ == "builtins":
        raise TypeError(f"cannot attach to builtin type {cls.__name__}; wrap instances in SequenceView instead")

    plan = []
    for name in API_NAMES:
        func = getattr(Enumerable, name)
        for target in _bound_names(name, prefix, aliases):
            plan.append((target, func))

    if not override:
        taken = [target for target, _ in plan if hasattr(cls, target)]
        if taken:
            raise ValueError(f"attach would overwrite {', '.join(taken)} on {cls.__name__}; "
                             f"pass a prefix or override=True")

    for target, func in plan:
        setattr(cls, target, func)
    core._dbg("attach()", cls.__name__, "bound", len(plan), "names")
    return cls


# ===================================================================
# 2. Views and Enumerators
# ===================================================================

class SequenceView(Enumerable, collections.abc.Sequence):
    """A read-only positional window over any sized, indexable collection."""
    __slots__ = ("_backing", "_start", "_end")

    def __init__(self, backing, start: int = 0, end: Optional[int] = None):
        if not is_traversable(backing):
            raise NotTraversable("SequenceView", backing)
        size = len(backing)
        self._backing = backing
        self._start = max(0, int(start))
        self._end = size if end is None else min(size, int(end))

    def __len__(self):
        end = self._end
        start = self._start
        if end < start:
            return 0
        return end - start

    def __getitem__(self, idx):
        n = len(self)
        if isinstance(idx, slice):
            s_start, s_stop, s_step = idx.indices(n)
            base = self._start
            return [self._backing[base + k] for k in range(s_start, s_stop, s_step)]
        if idx < 0:
            idx += n
        if idx < 0 or idx >= n:
            raise IndexError("SequenceView index out of range")
        return self._backing[self._start + idx]

    def __iter__(self):
        base = self._start
        for k in range(len(self)):
            yield self._backing[base + k]

    def __repr__(self):
        return f"SequenceView({list(self)!r})"


class Enumerator(Enumerable):
    """A restartable handle over a collection, returned by `map` with no function.

    Nothing is consumed: length and positional access go straight to the
    source, and each iteration takes a fresh pass over it.
    """

    def __init__(self, source, method: str = "each"):
        if not is_traversable(source):
            raise NotTraversable("Enumerator", source)
        self._source = source
        self.method = method

    @property
    def source(self):
        return self._source

    def __len__(self):
        return len(self._source)

    def __getitem__(self, idx):
        return self._source[idx]

    def size(self) -> int:
        return len(self._source)

    def to_list(self) -> list:
        out = []
        core.for_each(self._source, out.append)
        return out

    def __iter__(self):
        return iter(self.to_list())

    def with_index(self, fn: Optional[Callable[[Any, int], Any]] = None) -> list:
        """Results of `fn(element, index)`, or (element, index) pairs without `fn`."""
        if fn is None:
            fn = lambda ele, i: (ele, i)
        out = []
        core.for_each_indexed(self._source, lambda ele, i: out.append(fn(ele, i)))
        return out

    def __repr__(self) -> str:
        return f"#<Enumerator: {self.to_list()!r}:{self.method}>"


__all__ = [
    "enumerable_api",
    "ALIASES",
    "API_NAMES",
    "Enumerable",
    "attach",
    "SequenceView",
    "Enumerator",
]
