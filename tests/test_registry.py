# tests/test_registry.py

from __future__ import annotations

import pytest

from errors import NotFoundError
from models import Client, TaskStatus
from registry import ClientRegistry, TaskRegistry


def _clients(n: int) -> ClientRegistry:
    reg = ClientRegistry()
    for i in range(n):
        reg.add(Client(f"Student{i}", "Parent"))
    return reg


def test_add_assigns_post_add_size() -> None:
    reg = ClientRegistry()
    for expected in range(1, 6):
        c = Client("Anna", "Maria")
        assert reg.add(c) == expected
        assert c.id == expected == len(reg)


@pytest.mark.parametrize("removed", [1, 3, 5])
def test_remove_shifts_following_ids_down_by_one(removed: int) -> None:
    reg = _clients(5)
    before = {c.student_name: c.id for c in reg}

    reg.remove_by_id(removed)

    for c in reg:
        original = before[c.student_name]
        assert original != removed
        assert c.id == (original - 1 if original > removed else original)
    assert [c.id for c in reg] == list(range(1, 5))


def test_remove_returns_record_and_clears_its_id() -> None:
    reg = _clients(2)
    first = reg.get_by_id(1)
    removed = reg.remove_by_id(1)
    assert removed is first
    assert removed.id == 0
    assert first not in reg


@pytest.mark.parametrize("bad_id", [0, -1, 4, 100000000, "1", None, True])
def test_remove_out_of_range_raises_not_found(bad_id) -> None:
    reg = _clients(3)
    with pytest.raises(NotFoundError) as exc_info:
        reg.remove_by_id(bad_id)
    assert exc_info.value.entity_kind == "client"
    assert exc_info.value.id == bad_id
    assert len(reg) == 3


def test_remove_last_record_leaves_empty_registry() -> None:
    reg = _clients(1)
    reg.remove_by_id(1)
    assert len(reg) == 0
    assert reg.list() == []
    with pytest.raises(NotFoundError):
        reg.remove_by_id(1)


def test_get_by_id_uses_same_bounds_as_remove() -> None:
    reg = _clients(3)
    assert reg.get_by_id(1).student_name == "Student0"
    assert reg.get_by_id(3).student_name == "Student2"
    for bad_id in (0, 4, -1):
        with pytest.raises(NotFoundError):
            reg.get_by_id(bad_id)


def test_list_is_a_copy() -> None:
    reg = _clients(2)
    listed = reg.list()
    listed.clear()
    assert len(reg) == 2


def test_task_scenario_renumbers(make_task) -> None:
    reg = TaskRegistry()
    t1, t2 = make_task("First"), make_task("Second")
    assert reg.add(t1) == 1
    assert reg.add(t2) == 2

    reg.remove_by_id(1)

    assert t2.id == 1
    assert reg.get_by_id(1) is t2
    with pytest.raises(NotFoundError) as exc_info:
        reg.get_by_id(2)
    assert exc_info.value.entity_kind == "task"


def test_filter_by_status_preserves_order_and_registry(make_task, today) -> None:
    reg = TaskRegistry()
    for subject, days in [("a", 10), ("b", 1), ("c", 5), ("d", 0), ("e", 30)]:
        reg.add(make_task(subject, days_ahead=days))

    soon = reg.filter_by_status(TaskStatus.DUE_SOON, today)
    week = reg.filter_by_status("week", today)
    long_term = reg.filter_by_status(TaskStatus.LONG_TERM, today)

    assert [t.subject for t in soon] == ["b", "d"]
    assert [t.subject for t in week] == ["c"]
    assert [t.subject for t in long_term] == ["a", "e"]
    assert [t.id for t in reg] == [1, 2, 3, 4, 5]


def test_for_client(make_task) -> None:
    reg = TaskRegistry()
    reg.add(make_task("a", client_id=1))
    reg.add(make_task("b", client_id=2))
    reg.add(make_task("c", client_id=1))
    assert [t.subject for t in reg.for_client(1)] == ["a", "c"]
    assert reg.for_client(3) == []
