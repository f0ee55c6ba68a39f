import operator
import collections.abc

import pytest

from enumerable import enum_core as core
from enumerable.enum_capability import (
    Enumerable, Enumerator, SequenceView, attach, enumerable_api, ALIASES, API_NAMES,
)
from enumerable.enum_datatypes import NotTraversable


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv(core.DEBUG_ENV, raising=False)
    monkeypatch.delenv(core.STRICT_ENV, raising=False)


class Deck(Enumerable):
    def __init__(self, *cards):
        self._cards = list(cards)

    def __len__(self):
        return len(self._cards)

    def __getitem__(self, i):
        return self._cards[i]


class Shelf:
    """Plain class with no enumerable base; gains the methods via attach."""
    def __init__(self, *books):
        self.books = list(books)

    def __len__(self):
        return len(self.books)

    def __getitem__(self, i):
        return self.books[i]


def _fresh_shelf_class():
    return type("FreshShelf", (Shelf,), {})


# --- Mixin ---

def test_api_names_are_the_full_capability_set():
    assert set(API_NAMES) == {
        "for_each", "for_each_indexed", "filter", "all", "any", "none",
        "count", "map", "reduce", "product",
    }


def test_mixin_methods_route_to_core():
    deck = Deck(1, 2, 3, 4)
    seen = []
    assert deck.for_each(seen.append) is deck
    assert seen == [1, 2, 3, 4]
    assert deck.filter(lambda x: x > 2) == [3, 4]
    assert deck.all(lambda x: x > 0) is True
    assert deck.any(lambda x: x > 3) is True
    assert deck.none(lambda x: x > 9) is True
    assert deck.count() == 4
    assert deck.count(2) == 1
    assert deck.count(predicate=lambda x: x % 2) == 2
    assert deck.map(lambda x: -x) == [-1, -2, -3, -4]
    assert deck.map(block=str) == ["1", "2", "3", "4"]
    assert deck.reduce(operator.add) == 10
    assert deck.reduce(operator.add, 10) == 20
    assert deck.product() == 24


def test_mixin_aliases_follow_ruby_names():
    deck = Deck("a", "b")
    pairs = []
    deck.each_with_index(lambda ele, i: pairs.append((i, ele)))
    assert pairs == [(0, "a"), (1, "b")]
    assert deck.select(lambda c: c == "b") == ["b"]
    assert deck.inject(operator.add) == "ab"
    assert Deck(2, 3).multiply_els() == 6
    assert deck.all_q(str.isalpha) is True
    assert deck.any_q() is None


def test_mixin_quantifier_without_predicate_is_absent():
    assert Deck(1).all() is None
    assert Deck(1).none() is None


# --- attach ---

def test_attach_grafts_without_changing_bases():
    cls = attach(_fresh_shelf_class())
    assert Enumerable not in cls.__mro__
    shelf = cls("Dune", "Emma", "Ulysses")
    assert shelf.filter(lambda b: len(b) == 4) == ["Dune", "Emma"]
    assert shelf.each(lambda b: None) is shelf
    assert shelf.map().method == "map"


def test_attach_with_prefix_mirrors_my_methods():
    cls = attach(_fresh_shelf_class(), prefix="my_")
    shelf = cls(1, 2, 3)
    assert shelf.my_select(lambda x: x != 2) == [1, 3]
    assert shelf.my_inject(operator.add) == 6
    assert shelf.my_multiply_els() == 6
    assert shelf.my_count() == 3
    assert not hasattr(cls, "select")


def test_attach_without_aliases():
    cls = attach(_fresh_shelf_class(), aliases=False)
    assert hasattr(cls, "for_each")
    assert not hasattr(cls, "each")
    assert not hasattr(cls, "inject")


def test_attach_as_decorator():
    @attach(prefix="my_")
    class Row:
        def __init__(self, *cells):
            self.cells = cells

        def __len__(self):
            return len(self.cells)

        def __getitem__(self, i):
            return self.cells[i]

    assert Row(1, 2).my_map(lambda x: x * 10) == [10, 20]

    @attach
    class Col(Row):
        pass

    assert Col(3, 4).reduce(operator.mul) == 12


def test_attach_refuses_collisions_before_binding_anything():
    class Tally(collections.abc.Sequence):
        def __len__(self):
            return 2

        def __getitem__(self, i):
            if i >= 2:
                raise IndexError(i)
            return i

    # Sequence already provides count()
    with pytest.raises(ValueError, match="count"):
        attach(Tally)
    assert not hasattr(Tally, "for_each")

    attach(Tally, prefix="my_")
    assert Tally().my_count(1) == 1


def test_attach_override_replaces_existing():
    class Tally(collections.abc.Sequence):
        def __len__(self):
            return 3

        def __getitem__(self, i):
            if i >= 3:
                raise IndexError(i)
            return i

    attach(Tally, override=True)
    assert Tally().count(predicate=lambda x: x > 0) == 2


@pytest.mark.parametrize("target", [list, tuple, str], ids=["list", "tuple", "str"])
def test_attach_refuses_builtin_types(target):
    with pytest.raises(TypeError, match="SequenceView"):
        attach(target)


def test_attach_refuses_non_traversable_classes():
    class Bag:
        def __len__(self):
            return 0

    with pytest.raises(TypeError, match="__len__ and __getitem__"):
        attach(Bag)
    with pytest.raises(TypeError, match="__len__ and __getitem__"):
        attach(dict)
    with pytest.raises(TypeError, match="expects a class"):
        attach(Shelf())


def test_custom_api_marker():
    @enumerable_api
    def f():
        pass
    assert f._is_enumerable_api is True
    assert all(getattr(Enumerable, n)._is_enumerable_api for n in API_NAMES)
    for canon, aliases in ALIASES.items():
        for alias in aliases:
            assert getattr(Enumerable, alias) is getattr(Enumerable, canon)


# --- SequenceView ---

def test_sequence_view_gives_builtins_the_methods():
    view = SequenceView([1, 2, 3, 4, 5, 6])
    assert view.filter(lambda x: x % 2 == 0) == [2, 4, 6]
    assert view.count(predicate=lambda x: x > 4) == 2
    assert isinstance(view, collections.abc.Sequence)
    assert 3 in view


def test_sequence_view_window():
    view = SequenceView("abcdef", 1, 4)
    assert len(view) == 3
    assert list(view) == ["b", "c", "d"]
    assert view[-1] == "d"
    assert view[0:2] == ["b", "c"]
    assert view.map(str.upper) == ["B", "C", "D"]
    with pytest.raises(IndexError):
        view[3]


def test_sequence_view_clamps_bounds():
    view = SequenceView([1, 2, 3], -5, 99)
    assert list(view) == [1, 2, 3]
    assert len(SequenceView([1, 2, 3], 2, 1)) == 0
    assert SequenceView([]).reduce(operator.add, 0) == 0


def test_sequence_view_rejects_mappings():
    with pytest.raises(NotTraversable):
        SequenceView({"a": 1})


def test_sequence_view_repr():
    assert repr(SequenceView((1, 2))) == "SequenceView([1, 2])"


# --- Enumerator ---

def test_enumerator_is_restartable():
    enum = Enumerator([1, 2, 3])
    assert list(enum) == [1, 2, 3]
    assert list(enum) == [1, 2, 3]
    assert enum.size() == 3
    assert len(enum) == 3
    assert enum[1] == 2


def test_enumerator_sees_source_changes():
    data = [1, 2]
    enum = core.map(data)
    data.append(3)
    assert enum.to_list() == [1, 2, 3]


def test_enumerator_carries_capability_set():
    enum = Deck(1, 2, 3).map()
    assert enum.map(lambda x: x * 2) == [2, 4, 6]
    assert enum.filter(lambda x: x != 2) == [1, 3]
    assert enum.reduce(operator.add) == 6
    assert isinstance(enum.map(), Enumerator)


def test_enumerator_with_index():
    enum = Enumerator(["a", "b"], method="map")
    assert enum.with_index(lambda ele, i: f"{i}:{ele}") == ["0:a", "1:b"]
    assert enum.with_index() == [("a", 0), ("b", 1)]


def test_enumerator_repr():
    assert repr(core.map([1, 2, 3])) == "#<Enumerator: [1, 2, 3]:map>"
    assert repr(Enumerator([])) == "#<Enumerator: []:each>"


def test_enumerator_rejects_non_traversable():
    with pytest.raises(NotTraversable, match="Enumerator expects"):
        Enumerator(7)
