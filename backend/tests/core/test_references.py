"""Reference Sequences — tests for the ordered id lists embedded in portfolios/jobs.

Tests cover:
    - append_reference appends a new id as a string
    - append_reference is idempotent: a second append is a no-op
    - Inputs are never mutated
    - detach_references drops removed ids and keeps order of the rest
"""

import uuid

from showcase.core.references import append_reference, detach_references


def test_append_reference_appends_string_id():
    ref = uuid.uuid4()
    refs, appended = append_reference([], ref)
    assert appended is True
    assert refs == [str(ref)]


def test_append_reference_is_idempotent():
    ref = uuid.uuid4()
    refs, _ = append_reference(None, ref)
    again, appended = append_reference(refs, ref)
    assert appended is False
    assert again == [str(ref)]


def test_append_reference_matches_string_and_uuid_forms():
    ref = uuid.uuid4()
    _, appended = append_reference([str(ref)], ref)
    assert appended is False


def test_append_reference_does_not_mutate_input():
    original = ["a"]
    refs, _ = append_reference(original, "b")
    assert original == ["a"]
    assert refs == ["a", "b"]


def test_detach_references_preserves_order():
    a, b, c = (uuid.uuid4() for _ in range(3))
    refs = [str(a), str(b), str(c)]
    assert detach_references(refs, [b]) == [str(a), str(c)]


def test_detach_references_ignores_unknown_ids():
    assert detach_references(["x"], [uuid.uuid4()]) == ["x"]
    assert detach_references(None, ["x"]) == []
