import pytest

from highlightsync.selection import SelectionError, SeriesSelectionStore


def test_starts_empty():
    store = SeriesSelectionStore(["A", "B"])
    assert store.get() is None


def test_set_and_clear():
    store = SeriesSelectionStore(["A", "B"])
    assert store.set("A") is True
    assert store.get() == "A"
    assert store.clear() is True
    assert store.get() is None


def test_unknown_series_rejected():
    store = SeriesSelectionStore(["A"])
    with pytest.raises(SelectionError):
        store.set("Z")
    assert store.get() is None


def test_subscribers_only_hear_real_changes():
    store = SeriesSelectionStore(["A", "B"])
    changes = []
    store.subscribe(lambda old, new: changes.append((old, new)))

    store.set("A")
    store.set("A")
    store.set("B")
    store.set(None)
    store.clear()

    assert changes == [(None, "A"), ("A", "B"), ("B", None)]


def test_failing_subscriber_does_not_block_others():
    store = SeriesSelectionStore(["A"])
    changes = []

    def broken(old, new):
        raise RuntimeError("redraw failed")

    store.subscribe(broken)
    store.subscribe(lambda old, new: changes.append(new))

    assert store.set("A") is True
    assert store.get() == "A"
    assert changes == ["A"]


def test_unsubscribe():
    store = SeriesSelectionStore(["A"])
    changes = []
    unsubscribe = store.subscribe(lambda old, new: changes.append(new))
    unsubscribe()
    store.set("A")
    assert changes == []


def test_register_series_keeps_selection():
    store = SeriesSelectionStore(["A"])
    store.set("A")
    store.register_series(["B", "A"])
    assert store.known_series == ["A", "B"]
    assert store.get() == "A"


def test_update_series_clears_missing_selection():
    store = SeriesSelectionStore(["A", "B"])
    store.set("B")
    store.update_series(["A", "C"])
    assert store.get() is None
    assert store.known_series == ["A", "C"]


def test_update_series_keeps_present_selection():
    store = SeriesSelectionStore(["A", "B"])
    store.set("A")
    store.update_series(["A"])
    assert store.get() == "A"
