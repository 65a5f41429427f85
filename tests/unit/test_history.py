"""Unit tests for the undo/redo history zipper."""

import pytest

from reactive_lens import Stack, Undo, history


@pytest.mark.unit
@pytest.mark.history
def test_init_has_no_past_or_future():
    """init() makes a singleton history"""
    h = history.init({"a": 1})

    assert h == Undo(Stack({"a": 1}), None)
    assert history.now().get(h) == {"a": 1}
    assert not history.can_undo(h)
    assert not history.can_redo(h)


@pytest.mark.unit
@pytest.mark.history
def test_undo_then_redo_restores_checkpoints():
    """advance_to, undo and redo walk between checkpoints"""
    now = history.now()
    h = history.advance_to({"a": 2})(history.init({"a": 1}))
    assert now.get(h) == {"a": 2}

    h = history.undo(h)
    assert now.get(h) == {"a": 1}
    assert history.can_redo(h)

    h = history.redo(h)
    assert now.get(h) == {"a": 2}
    assert not history.can_redo(h)


@pytest.mark.unit
@pytest.mark.history
@pytest.mark.edge_case
def test_undo_at_oldest_point_is_noop():
    """undo() without a past returns the same history"""
    h = history.init(1)

    assert history.undo(h) is h


@pytest.mark.unit
@pytest.mark.history
@pytest.mark.edge_case
def test_redo_without_future_is_noop():
    """redo() without a future returns the same history"""
    h = history.advance_to(2)(history.init(1))

    assert history.redo(h) is h


@pytest.mark.unit
@pytest.mark.history
def test_advance_after_undo_discards_redo_stack():
    """Branching off with advance() drops the undone values"""
    h = history.advance_to(2)(history.init(1))
    h = history.undo(h)

    h = history.advance(h)

    assert h.next is None
    assert history.redo(h) is h
    assert history.past(h) == [1]


@pytest.mark.unit
@pytest.mark.history
def test_advance_duplicates_present():
    """advance() opens a checkpoint holding a copy of the present"""
    h = history.advance(history.init("x"))

    assert list(h.tip) == ["x", "x"]
    assert len(h.tip) == 2


@pytest.mark.unit
@pytest.mark.history
def test_now_set_edits_in_place_and_keeps_redo():
    """Setting through now() changes the present without a new checkpoint"""
    h = history.advance_to(2)(history.advance_to(1)(history.init(0)))
    h = history.undo(h)

    edited = history.now().set(h, 10)

    assert history.now().get(edited) == 10
    assert len(edited.tip) == len(h.tip)
    assert edited.next is h.next
    assert history.future(edited) == [2]


@pytest.mark.unit
@pytest.mark.history
def test_operations_never_mutate_input():
    """Every history function returns a new value and leaves its input alone"""
    h = history.advance_to(2)(history.init(1))
    snapshot = Undo(h.tip, h.next)

    history.undo(h)
    history.advance(h)
    history.now().set(h, 99)

    assert h == snapshot


@pytest.mark.unit
@pytest.mark.history
def test_past_and_future_list_values_closest_first():
    """past() and future() read both stacks, nearest entry first"""
    h = history.init(0)
    for value in (1, 2, 3):
        h = history.advance_to(value)(h)
    h = history.undo(history.undo(h))

    assert history.now().get(h) == 1
    assert history.past(h) == [0]
    assert history.future(h) == [2, 3]


@pytest.mark.unit
@pytest.mark.history
def test_advance_with_limit_drops_oldest_checkpoints():
    """advance(limit=n) keeps at most n past checkpoints"""
    h = history.init(0)
    for value in range(1, 6):
        h = history.advance_to(value, limit=2)(h)

    assert history.now().get(h) == 5
    assert history.past(h) == [4, 3]

    h = history.undo(history.undo(history.undo(h)))
    assert history.now().get(h) == 3


@pytest.mark.unit
@pytest.mark.history
@pytest.mark.edge_case
def test_advance_with_zero_limit_keeps_no_past():
    """advance(limit=0) keeps only the present"""
    h = history.advance_to(1, limit=0)(history.init(0))

    assert history.past(h) == []
    assert not history.can_undo(h)


@pytest.mark.unit
@pytest.mark.history
@pytest.mark.edge_case
def test_advance_rejects_negative_limit():
    """A negative limit is an error"""
    with pytest.raises(ValueError, match="non-negative"):
        history.advance(history.init(0), limit=-1)
