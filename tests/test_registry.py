# tests/test_registry.py

from __future__ import annotations

import pytest

from get_everything_done.core.errors import InvalidInput
from get_everything_done.focus.registry import TaskRegistry


def _titles(registry: TaskRegistry) -> list[str]:
    return [t.title for t in registry]


def test_add_appends_in_order_with_base_duration() -> None:
    reg = TaskRegistry(initial_seconds=600)
    a = reg.add("write report")
    b = reg.add("  review PR  ")

    assert _titles(reg) == ["write report", "review PR"]
    assert a.remaining_seconds == 600
    assert a.completed_session_count == 0
    assert b.id > a.id


@pytest.mark.parametrize("title", ["", "   ", "\t\n", None])
def test_add_rejects_blank_titles(title) -> None:
    reg = TaskRegistry(initial_seconds=600)
    with pytest.raises(InvalidInput):
        reg.add(title)
    assert len(reg) == 0


def test_ids_are_not_reused_after_remove() -> None:
    reg = TaskRegistry(initial_seconds=60)
    a = reg.add("a")
    reg.remove(a)
    b = reg.add("b")
    assert b.id != a.id


def test_remove_unknown_task_returns_false() -> None:
    reg = TaskRegistry(initial_seconds=60)
    other = TaskRegistry(initial_seconds=60).add("elsewhere")
    reg.add("here")
    assert reg.remove(other) is False
    assert _titles(reg) == ["here"]


def test_move_up_and_down_swap_neighbours() -> None:
    reg = TaskRegistry(initial_seconds=60)
    for title in ("a", "b", "c"):
        reg.add(title)

    assert reg.move_up(2) == 1
    assert _titles(reg) == ["a", "c", "b"]

    assert reg.move_down(0) == 1
    assert _titles(reg) == ["c", "a", "b"]


def test_moves_at_the_edges_are_noops() -> None:
    reg = TaskRegistry(initial_seconds=60)
    for title in ("a", "b", "c"):
        reg.add(title)

    assert reg.move_up(0) == 0
    assert reg.move_down(2) == 2
    assert _titles(reg) == ["a", "b", "c"]


def test_same_title_tasks_are_distinct() -> None:
    reg = TaskRegistry(initial_seconds=60)
    first = reg.add("same")
    second = reg.add("same")

    reg.remove(second)
    assert reg.tasks == [first]
    assert reg.index_of(first) == 0
