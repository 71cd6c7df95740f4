import logging

import pytest

from signalkit import Signal, create_signal, is_connection, is_signal


def test_most_recent_first_order():
    signal = Signal()
    seen = []
    for label in ("c1", "c2", "c3"):
        signal.connect(lambda x, label=label: seen.append((label, x)))

    signal.fire("x")
    assert seen == [("c3", "x"), ("c2", "x"), ("c1", "x")]


def test_fire_then_disconnect_scenario():
    signal = create_signal("scenario")
    result = []
    signal.connect(lambda: result.append("A"))
    second = signal.connect(lambda: result.append("B"))

    signal.fire()
    assert result == ["B", "A"]

    second.disconnect()
    result.clear()
    signal.fire()
    assert result == ["A"]


def test_connection_state_and_disconnect_idempotent():
    signal = Signal()
    conn = signal.connect(lambda: None)
    assert conn.connected
    assert conn.signal is signal

    conn.disconnect()
    conn.disconnect()
    assert not conn.connected
    assert conn.callback is None
    assert signal._head is None


def test_disconnect_middle_node_relinks_neighbours():
    signal = Signal()
    seen = []
    signal.connect(lambda: seen.append(1))
    middle = signal.connect(lambda: seen.append(2))
    signal.connect(lambda: seen.append(3))

    middle.disconnect()
    assert middle._previous is None
    signal.fire()
    assert seen == [3, 1]


def test_disconnected_handle_drops_back_reference():
    signal = Signal()
    seen = []
    signal.connect(lambda: seen.append("C"))
    b = None

    def b_callback():
        seen.append("B")
        b.disconnect()
        assert b._previous is None

    b = signal.connect(b_callback)
    signal.connect(lambda: seen.append("A"))
    signal.fire()
    signal.fire()
    assert seen == ["A", "B", "C", "A", "C"]


def test_disconnect_unvisited_node_during_dispatch():
    signal = Signal()
    seen = []
    b = signal.connect(lambda: seen.append("B"))

    def a_callback():
        seen.append("A")
        b.disconnect()

    signal.connect(a_callback)
    signal.fire()
    assert seen == ["A"]


def test_disconnect_self_and_next_during_dispatch():
    signal = Signal()
    seen = []
    signal.connect(lambda: seen.append("C"))
    b = signal.connect(lambda: seen.append("B"))
    a = None

    def a_callback():
        seen.append("A")
        a.disconnect()
        b.disconnect()

    a = signal.connect(a_callback)
    signal.fire()
    assert seen == ["A", "C"]

    seen.clear()
    signal.fire()
    assert seen == ["C"]


def test_connect_during_fire_deferred_to_next_fire():
    signal = Signal()
    seen = []
    late = []

    def spawner(n):
        seen.append(n)
        if n == 1:
            late.append(signal.connect(lambda m: seen.append(("late", m))))
            assert not late[0].connected

    signal.connect(spawner)
    signal.fire(1)
    assert seen == [1]
    assert late[0].connected

    signal.fire(2)
    assert seen == [1, ("late", 2), 2]


def test_connect_during_fire_sees_reentrant_queued_fire():
    signal = Signal()
    seen = []

    def first(n):
        seen.append(("first", n))
        if n == 1:
            signal.connect(lambda m: seen.append(("late", m)))
            signal.fire(2)

    signal.connect(first)
    signal.fire(1)
    assert seen == [("first", 1), ("late", 2), ("first", 2)]


def test_disconnect_while_staged_never_goes_live():
    signal = Signal()
    seen = []

    def stage_and_drop():
        staged = signal.connect(lambda: seen.append("staged"))
        staged.disconnect()

    starter = signal.connect(stage_and_drop)
    signal.fire()
    starter.disconnect()
    signal.fire()
    assert seen == []
    assert signal._head is None


def test_reentrant_fire_is_fifo():
    signal = Signal()
    seen = []

    def relay(n):
        seen.append(n)
        if n < 3:
            signal.fire(n + 1)
            seen.append(f"after-fire-{n}")

    signal.connect(relay)
    signal.fire(1)
    assert seen == [1, "after-fire-1", 2, "after-fire-2", 3]
    assert not signal.is_firing
    assert not signal._is_processing


def test_failing_callback_is_isolated(caplog):
    signal = Signal()
    seen = []
    signal.connect(lambda: seen.append("survivor"))

    def boom():
        raise RuntimeError("forced_callback_error")

    signal.connect(boom)
    with caplog.at_level(logging.ERROR, logger="signalkit"):
        signal.fire()
    assert seen == ["survivor"]
    assert "forced_callback_error" in caplog.text


def test_connect_rejects_non_callable():
    with pytest.raises(TypeError):
        Signal().connect("not callable")


def test_type_predicates():
    signal = Signal()
    conn = signal.connect(print)
    assert is_signal(signal) and Signal.is_signal(signal)
    assert is_connection(conn) and Signal.is_connection(conn)
    for value in (None, 0, "signal", conn, object()):
        assert not is_signal(value)
    for value in (None, signal, [], object()):
        assert not is_connection(value)


def test_disconnect_all_keeps_signal_usable():
    signal = Signal()
    conns = [signal.connect(lambda: None) for _ in range(3)]
    signal.disconnect_all()
    assert not any(c.connected for c in conns)

    seen = []
    signal.connect(lambda: seen.append("again"))
    signal.fire()
    assert seen == ["again"]
