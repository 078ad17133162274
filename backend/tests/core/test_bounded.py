"""Bounded Sequences — tests for write-time truncation of list fields.

Tests cover:
    - split_items splits comma-delimited text and strips whitespace
    - split_items keeps the first three items in input order
    - Blank items are dropped before the cap applies
    - Lists are accepted as well as text; None becomes empty
    - collect_images fills slots from individual references
"""

from showcase.core.bounded import collect_images, split_items
from showcase.core.domain_types import MAX_SEQUENCE_ITEMS


def test_split_items_splits_and_strips():
    assert split_items(" python , sql,docker ") == ["python", "sql", "docker"]


def test_split_items_truncates_to_first_three():
    assert split_items("a,b,c,d,e") == ["a", "b", "c"]
    assert MAX_SEQUENCE_ITEMS == 3


def test_split_items_drops_blanks_before_capping():
    assert split_items("a,,  ,b,c,d") == ["a", "b", "c"]


def test_split_items_accepts_lists():
    assert split_items(["x", " y ", "", "z", "w"]) == ["x", "y", "z"]


def test_split_items_none_and_empty():
    assert split_items(None) == []
    assert split_items("") == []


def test_split_items_honors_custom_limit():
    assert split_items("a,b,c", limit=1) == ["a"]


def test_split_items_does_not_mutate_input_list():
    raw = ["a", "b", "c", "d"]
    split_items(raw)
    assert raw == ["a", "b", "c", "d"]


def test_collect_images_skips_empty_slots():
    assert collect_images("one.png", None, "  ", "three.png") == ["one.png", "three.png"]


def test_collect_images_caps_at_three():
    assert collect_images("1", "2", "3", "4") == ["1", "2", "3"]
