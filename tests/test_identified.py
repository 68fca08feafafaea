import sys
import os

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))
from dataclasses import dataclass, replace

import pytest

from shop_core.identified import IdentifiedArray


@dataclass(frozen=True)
class Row:
    id: str
    value: int = 0


def test_keeps_insertion_order_and_lookup():
    arr = IdentifiedArray([Row("b"), Row("a"), Row("c")])

    assert arr.ids == ("b", "a", "c")
    assert arr.get("a").get_or_else(None) == Row("a")
    assert arr.get("zzz").is_none()
    assert "c" in arr and len(arr) == 3


def test_duplicate_ids_rejected():
    with pytest.raises(ValueError):
        IdentifiedArray([Row("a"), Row("a")])


def test_update_and_remove_are_immutable():
    arr = IdentifiedArray([Row("a"), Row("b")])

    updated = arr.update("a", lambda r: replace(r, value=5))
    removed = arr.remove("a")

    assert arr.get("a").value.value == 0
    assert updated.get("a").value.value == 5
    assert updated.ids == ("a", "b")
    assert removed.ids == ("b",)


def test_missing_id_is_noop():
    arr = IdentifiedArray([Row("a")])

    assert arr.remove("x") is arr
    assert arr.update("x", lambda r: r) is arr


def test_equality_respects_order():
    assert IdentifiedArray([Row("a"), Row("b")]) == IdentifiedArray([Row("a"), Row("b")])
    assert IdentifiedArray([Row("a"), Row("b")]) != IdentifiedArray([Row("b"), Row("a")])
