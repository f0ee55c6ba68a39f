from enumerable.enum_datatypes import (
    NotTraversable, MissingPredicateError, EmptyCollectionFoldError,
    Missing, Halt, is_halt, unwrap_halt, MapMode, is_traversable,
)
from enumerable.enum_core import (
    for_each, for_each_indexed, filter, all, any, none, count,
    resolve_map_mode, map, reduce, product,
)
from enumerable.enum_capability import (
    enumerable_api, ALIASES, API_NAMES, Enumerable, attach, SequenceView, Enumerator,
)

__all__ = [
    "NotTraversable", "MissingPredicateError", "EmptyCollectionFoldError",
    "Missing", "Halt", "is_halt", "unwrap_halt", "MapMode", "is_traversable",
    "for_each", "for_each_indexed", "filter", "all", "any", "none", "count",
    "resolve_map_mode", "map", "reduce", "product",
    "enumerable_api", "ALIASES", "API_NAMES", "Enumerable", "attach", "SequenceView", "Enumerator",
]
