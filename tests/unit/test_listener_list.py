"""Unit tests for the ListenerList registry."""

import pytest

from reactive_lens import ListenerList


def call(callback):
    callback()


@pytest.mark.unit
@pytest.mark.listeners
def test_iter_visits_callbacks_in_registration_order():
    """iter() calls callbacks in the order they were pushed"""
    # Arrange
    listeners = ListenerList()
    calls = []
    for name in "abc":
        listeners.push(lambda name=name: calls.append(name))

    # Act
    listeners.iter(call)

    # Assert
    assert calls == ["a", "b", "c"]
    assert len(listeners) == 3


@pytest.mark.unit
@pytest.mark.listeners
def test_remove_handle_unregisters_callback():
    """Calling the handle returned by push() removes that callback only"""
    listeners = ListenerList()
    calls = []
    listeners.push(lambda: calls.append("a"))
    remove_b = listeners.push(lambda: calls.append("b"))
    listeners.push(lambda: calls.append("c"))

    remove_b()
    listeners.iter(call)

    assert calls == ["a", "c"]
    assert len(listeners) == 2


@pytest.mark.unit
@pytest.mark.listeners
@pytest.mark.edge_case
def test_double_removal_is_noop():
    """Removing the same callback twice does nothing the second time"""
    listeners = ListenerList()
    remove = listeners.push(lambda: None)
    listeners.push(lambda: None)

    remove()
    remove()

    assert len(listeners) == 1


@pytest.mark.unit
@pytest.mark.listeners
def test_removal_during_iteration_skips_later_callback():
    """A callback removed mid-pass is not invoked later in that pass"""
    listeners = ListenerList()
    calls = []
    handles = {}

    def first():
        calls.append("first")
        handles["second"]()

    listeners.push(first)
    handles["second"] = listeners.push(lambda: calls.append("second"))
    listeners.push(lambda: calls.append("third"))

    listeners.iter(call)
    listeners.iter(call)

    assert calls == ["first", "third", "first", "third"]


@pytest.mark.unit
@pytest.mark.listeners
@pytest.mark.edge_case
def test_self_removal_during_iteration():
    """A callback may remove itself while it is running"""
    listeners = ListenerList()
    calls = []
    handles = {}

    def once():
        calls.append("once")
        handles["once"]()

    handles["once"] = listeners.push(once)
    listeners.push(lambda: calls.append("always"))

    listeners.iter(call)
    listeners.iter(call)

    assert calls == ["once", "always", "always"]


@pytest.mark.unit
@pytest.mark.listeners
@pytest.mark.edge_case
def test_push_during_iteration_waits_for_next_pass():
    """Callbacks pushed during a pass are first called on the next pass"""
    listeners = ListenerList()
    calls = []

    def spawner():
        calls.append("spawner")
        listeners.push(lambda: calls.append("spawned"))

    remove = listeners.push(spawner)
    listeners.iter(call)
    remove()
    listeners.iter(call)

    assert calls == ["spawner", "spawned"]


@pytest.mark.unit
@pytest.mark.listeners
def test_clear_removes_everything_and_allows_new_registrations():
    """clear() drops all callbacks; old handles stay harmless"""
    listeners = ListenerList()
    calls = []
    remove_old = listeners.push(lambda: calls.append("old"))

    listeners.clear()
    listeners.push(lambda: calls.append("new"))
    remove_old()
    listeners.iter(call)

    assert calls == ["new"]
    assert len(listeners) == 1


@pytest.mark.unit
@pytest.mark.listeners
@pytest.mark.edge_case
def test_clear_during_iteration_stops_remaining_callbacks():
    """Clearing mid-pass prevents the rest of the pass from running"""
    listeners = ListenerList()
    calls = []

    def clearing():
        calls.append("clearing")
        listeners.clear()

    listeners.push(clearing)
    listeners.push(lambda: calls.append("after"))

    listeners.iter(call)

    assert calls == ["clearing"]
    assert len(listeners) == 0
