# tests/test_selection.py

from __future__ import annotations

from todo_palette.core.selection import Selection
from todo_palette.todos.todo_models import Filter
from todo_palette.todos.todo_store import TodoStore


def _selection(store: TodoStore, flt: list[Filter]) -> Selection:
    # flt is a one-item box so tests can switch the filter under the selection.
    return Selection(store, lambda: flt[0])


def test_navigation_on_empty_list_is_noop(store: TodoStore) -> None:
    sel = _selection(store, [Filter.ALL])
    assert sel.move_next() is None
    assert sel.move_previous() is None
    assert sel.selected_id is None


def test_first_move_selects_first_or_last(store: TodoStore) -> None:
    ids = [store.add(x).id for x in ("a", "b", "c")]  # type: ignore[union-attr]
    # visible order: c, b, a
    sel = _selection(store, [Filter.ALL])
    assert sel.move_next() == ids[2]

    sel.clear()
    assert sel.move_previous() == ids[0]


def test_navigation_wraps_in_both_directions(store: TodoStore) -> None:
    ids = [store.add(x).id for x in ("a", "b", "c")]  # type: ignore[union-attr]
    c, b, a = ids[2], ids[1], ids[0]
    sel = _selection(store, [Filter.ALL])

    assert [sel.move_next() for _ in range(4)] == [c, b, a, c]
    assert [sel.move_previous() for _ in range(2)] == [a, b]


def test_move_next_n_times_returns_to_start(store: TodoStore) -> None:
    for x in ("a", "b", "c", "d", "e"):
        store.add(x)
    sel = _selection(store, [Filter.ALL])
    sel.move_next()
    start = sel.move_next()  # start mid-list

    for _ in range(len(store)):
        sel.move_next()
    assert sel.selected_id == start


def test_navigation_only_visits_visible_todos(store: TodoStore) -> None:
    a = store.add("a")
    b = store.add("b")
    c = store.add("c")
    assert a and b and c
    store.toggle(b.id)

    flt = [Filter.PENDING]
    sel = _selection(store, flt)
    seen = {sel.move_next() for _ in range(6)}
    assert seen == {a.id, c.id}


def test_select_requires_visibility(store: TodoStore) -> None:
    a = store.add("a")
    b = store.add("b")
    assert a and b
    store.toggle(b.id)

    flt = [Filter.PENDING]
    sel = _selection(store, flt)
    assert sel.select(b.id) is False
    assert sel.selected_id is None
    assert sel.select(a.id) is True
    assert sel.select(999) is False
    assert sel.selected_id == a.id


def test_stale_selection_restarts_from_edges(store: TodoStore) -> None:
    a = store.add("a")
    b = store.add("b")
    c = store.add("c")
    assert a and b and c
    flt = [Filter.ALL]
    sel = _selection(store, flt)
    sel.select(b.id)

    store.toggle(b.id)
    flt[0] = Filter.PENDING
    # b is no longer visible: next starts over at the first visible todo
    assert sel.move_next() == c.id

    sel.select(c.id)
    store.toggle(c.id)
    assert sel.move_previous() == a.id


def test_toggle_and_delete_selected(store: TodoStore) -> None:
    a = store.add("a")
    assert a
    sel = _selection(store, [Filter.ALL])

    assert sel.toggle_selected() is False
    assert sel.delete_selected() is False

    sel.select(a.id)
    assert sel.toggle_selected() is True
    assert store.get(a.id).completed is True  # type: ignore[union-attr]

    assert sel.delete_selected() is True
    assert sel.selected_id is None
    assert store.get(a.id) is None


def test_prune_drops_selection_that_left_the_filter(store: TodoStore) -> None:
    a = store.add("a")
    assert a
    sel = _selection(store, [Filter.PENDING])
    sel.select(a.id)

    sel.prune()
    assert sel.selected_id == a.id

    store.toggle(a.id)
    assert sel.current() is None
    sel.prune()
    assert sel.selected_id is None
