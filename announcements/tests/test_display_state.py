from announcements.display_state import (
    CLOSED_KEY,
    MAX_CLOSED,
    POSITION_KEY,
    DisplayPhase,
    VisitorDisplayState,
    minimized_key,
)


def test_close_is_idempotent_and_clears_minimized():
    store = {}
    state = VisitorDisplayState(store)
    state.minimize(7)

    assert state.close(7) is DisplayPhase.CLOSED
    assert state.close("7") is DisplayPhase.CLOSED

    assert store[CLOSED_KEY] == ["7"]
    assert minimized_key(7) not in store
    assert state.phase(7) is DisplayPhase.CLOSED


def test_closed_list_keeps_most_recent_twenty():
    state = VisitorDisplayState({})
    for i in range(MAX_CLOSED + 5):
        state.close(i)

    closed = state.closed_ids()
    assert len(closed) == MAX_CLOSED
    assert closed[0] == "5"
    assert closed[-1] == str(MAX_CLOSED + 4)
    assert not state.is_closed(0)


def test_minimize_and_expand():
    state = VisitorDisplayState({})
    assert state.phase(3) is DisplayPhase.HIDDEN

    assert state.minimize(3) is DisplayPhase.MINIMIZED
    assert state.is_minimized("3")
    assert state.phase(3) is DisplayPhase.MINIMIZED

    assert state.expand(3) is DisplayPhase.SHOWN
    assert not state.is_minimized(3)


def test_corrupt_closed_list_reads_as_empty():
    state = VisitorDisplayState({CLOSED_KEY: "not-a-list"})
    assert state.closed_ids() == []
    state.close(1)
    assert state.closed_ids() == ["1"]


def test_position_round_trip_and_missing():
    store = {}
    state = VisitorDisplayState(store)
    assert state.position() is None

    state.save_position(12, "40.5")
    assert state.position() == {"x": 12.0, "y": 40.5}

    store[POSITION_KEY] = {"x": 1}
    assert state.position() is None
