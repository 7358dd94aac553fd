# tests/test_table.py

from __future__ import annotations

from table import (
    ANSI_RE,
    CLIENT_COLUMNS,
    TASK_COLUMNS,
    Column,
    client_rows,
    compute_widths,
    render_table,
    task_rows,
    visible_len,
    wrap_cell,
)
from user import User


def _plain(lines: list[str]) -> list[str]:
    return [ANSI_RE.sub("", line) for line in lines]


def test_wrap_cell_on_word_boundaries() -> None:
    assert wrap_cell("alpha beta gamma", 10) == ["alpha beta", "gamma"]


def test_wrap_cell_splits_long_words() -> None:
    assert wrap_cell("abcdefghij", 4) == ["abcd", "efgh", "ij"]
    assert wrap_cell("ab abcdefgh", 4) == ["ab", "abcd", "efgh"]


def test_wrap_cell_empty() -> None:
    assert wrap_cell("", 5) == [""]


def test_visible_len_ignores_ansi() -> None:
    assert visible_len("\x1b[1mbold\x1b[0m") == 4


def test_client_rows(user: User) -> None:
    rows = client_rows(user)
    assert [r["student_name"] for r in rows] == ["Pati", "Bartek", "Michal"]
    assert [r["tasks"] for r in rows] == ["0", "1", "0"]


def test_client_rows_show_missing_phone(empty_user: User) -> None:
    from models import Client

    empty_user.add_client(Client("Anna", "Maria"))
    assert client_rows(empty_user)[0]["phone_number"] == "-"


def test_task_rows_carry_status(user: User, today) -> None:
    rows, colors = task_rows(user.list_tasks(), today)
    assert rows[0]["status"] == "DUE SOON"
    assert rows[0]["date"] == "2024-12-23"
    assert len(colors) == 1


def test_render_fits_terminal_width(user: User) -> None:
    lines = _plain(render_table(CLIENT_COLUMNS, client_rows(user), term_width=120))
    assert lines[0].split(" | ")[0].strip() == "ID"
    assert "DESCRIPTION" in lines[0]
    assert set(lines[1].replace(" | ", "")) == {"-"}
    assert any("Pati" in line and "432789234" in line for line in lines[2:])
    assert all(len(line) <= 120 for line in lines)


def test_render_wraps_on_narrow_terminal(user: User) -> None:
    user.update_client(1, description="a rather long description that cannot fit in one narrow column")
    lines = _plain(render_table(CLIENT_COLUMNS, client_rows(user), term_width=60))
    assert all(len(line) <= 60 for line in lines)
    assert len(lines) > 2 + len(user.list_clients())


def test_render_empty_table() -> None:
    lines = _plain(render_table(TASK_COLUMNS, [], term_width=100))
    assert lines[-1] == "(empty)"


def test_compute_widths_gives_spare_space_to_last_column() -> None:
    columns = (Column("a", "A", 3), Column("b", "B", 3))
    widths = compute_widths(columns, [{"a": "x", "b": "y"}], term_width=20)
    assert widths == {"a": 3, "b": 14}


def test_compute_widths_never_below_title() -> None:
    columns = (Column("a", "ALPHA", 2), Column("b", "B", 2))
    widths = compute_widths(columns, [{"a": "x" * 50, "b": "y" * 50}], term_width=10)
    assert widths["a"] >= len("ALPHA")
    assert widths["b"] >= 2
