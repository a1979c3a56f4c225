from __future__ import annotations

from collections.abc import ItemsView, KeysView, ValuesView

import pytest

from ordered_map import OrderedMap, UnsupportedOperationError


@pytest.fixture()
def m() -> OrderedMap[str, int]:
    out: OrderedMap[str, int] = OrderedMap()
    for k, v in (("c", 3), ("a", 1), ("b", 1)):
        out.add(k, v)
    return out


def test_views_follow_insertion_order(m: OrderedMap[str, int]) -> None:
    assert list(m.keys()) == ["c", "a", "b"]
    assert list(m.values()) == [3, 1, 1]
    assert list(m.items()) == [("c", 3), ("a", 1), ("b", 1)]


def test_views_are_live(m: OrderedMap[str, int]) -> None:
    keys = m.keys()
    values = m.values()
    m.remove("c")
    m["d"] = 4
    assert list(keys) == ["a", "b", "d"]
    assert list(values) == [1, 1, 4]
    assert len(keys) == len(values) == 3


def test_views_match_abc_contracts(m: OrderedMap[str, int]) -> None:
    assert isinstance(m.keys(), KeysView)
    assert isinstance(m.values(), ValuesView)
    assert isinstance(m.items(), ItemsView)


def test_key_membership(m: OrderedMap[str, int]) -> None:
    assert "a" in m.keys()
    assert "z" not in m.keys()


def test_key_view_set_operations(m: OrderedMap[str, int]) -> None:
    assert m.keys() & {"a", "z"} == {"a"}
    assert m.keys() | {"z"} == {"a", "b", "c", "z"}
    assert m.keys() == {"a", "b", "c"}


def test_value_membership_scans_values(m: OrderedMap[str, int]) -> None:
    assert 1 in m.values()
    assert 3 in m.values()
    assert 7 not in m.values()


def test_value_membership_does_not_hash_values() -> None:
    m: OrderedMap[int, list[int]] = OrderedMap()
    m.add(1, [1, 2])
    assert [1, 2] in m.values()
    assert [3] not in m.values()


def test_item_membership(m: OrderedMap[str, int]) -> None:
    assert ("a", 1) in m.items()
    assert ("a", 2) not in m.items()
    assert ("z", 1) not in m.items()
    assert "a" not in m.items()
    assert ("a", 1, 0) not in m.items()


def test_reversed_views(m: OrderedMap[str, int]) -> None:
    assert list(reversed(m.keys())) == ["b", "a", "c"]
    assert list(reversed(m.values())) == [1, 1, 3]
    assert list(reversed(m.items())) == [("b", 1), ("a", 1), ("c", 3)]


@pytest.mark.parametrize("view_name", ["keys", "values", "items"])
@pytest.mark.parametrize(
    ("method", "args"),
    [("add", ("x",)), ("remove", ("a",)), ("discard", ("a",)), ("pop", ()), ("clear", ()),
     ("update", ({"x": 1},))],
)
def test_views_reject_mutation(
    m: OrderedMap[str, int], view_name: str, method: str, args: tuple[object, ...]
) -> None:
    view = getattr(m, view_name)()
    with pytest.raises(UnsupportedOperationError):
        getattr(view, method)(*args)
    assert list(m.items()) == [("c", 3), ("a", 1), ("b", 1)]


def test_unsupported_operation_is_type_error(m: OrderedMap[str, int]) -> None:
    with pytest.raises(TypeError):
        m.keys().add("x")


def test_view_repr(m: OrderedMap[str, int]) -> None:
    assert repr(m.keys()) == "KeyView(['c', 'a', 'b'])"
    assert repr(m.values()) == "ValueView([3, 1, 1])"
