# tests/test_user.py

from __future__ import annotations

import datetime as dt

import pytest

from errors import FormatError, NotFoundError, ValidationError
from models import Client, Task, TaskStatus
from user import User


def test_sample_data(user: User) -> None:
    clients = user.list_clients()
    assert [(c.id, c.student_name, c.parent_name, c.phone_number, c.description) for c in clients] == [
        (1, "Pati", "Monika", "432789234", "2class"),
        (2, "Bartek", "Klaudia", "506923876", "Good"),
        (3, "Michal", "Krzysztof", "123456780", "Bad"),
    ]
    (task,) = user.list_tasks()
    assert (task.id, task.subject, task.description, task.client_id) == (1, "Matematyka", "nowy lol", 2)
    assert (task.date_s, task.time_s) == ("2024-12-23", "12:30")
    assert str(user) == "Clients: 3, Tasks: 1"


def test_plain_user_is_empty(empty_user: User) -> None:
    assert empty_user.list_clients() == []
    assert empty_user.list_tasks() == []


@pytest.mark.parametrize("name", ["Maciek", "Anna", "John"])
def test_add_client_grows_list(user: User, name: str) -> None:
    new_id = user.add_client(Client(name, "Szymon", "123456789", "good student"))
    assert new_id == 4
    assert len(user.list_clients()) == 4
    assert user.get_client_by_id(4).student_name == name


@pytest.mark.parametrize("subject", ["Matematyka", "Biologia", "Fizyka"])
def test_add_task_grows_list(user: User, subject: str) -> None:
    new_id = user.add_task(Task.from_strings(subject, "123", 2, "2024-11-03", "11:30"))
    assert new_id == 2
    assert user.get_task_by_id(2).subject == subject


@pytest.mark.parametrize("client_id", [1, 2])
def test_remove_client_valid(user: User, client_id: int) -> None:
    user.remove_client(client_id)
    assert len(user.list_clients()) == 2
    assert [c.id for c in user.list_clients()] == [1, 2]


@pytest.mark.parametrize("client_id", [100000000, -1, 0])
def test_remove_client_invalid(user: User, client_id: int) -> None:
    with pytest.raises(NotFoundError):
        user.remove_client(client_id)
    assert len(user.list_clients()) == 3


def test_removing_client_does_not_cascade(user: User) -> None:
    user.remove_client(2)
    (task,) = user.list_tasks()
    assert task.client_id == 2
    assert user.get_client_by_id(2).student_name == "Michal"


def test_get_client_by_id_is_one_based(user: User) -> None:
    assert user.get_client_by_id(1).student_name == "Pati"
    with pytest.raises(NotFoundError):
        user.get_client_by_id(0)


def test_remove_task(user: User) -> None:
    user.remove_task(1)
    assert user.list_tasks() == []
    with pytest.raises(NotFoundError):
        user.remove_task(1)


def test_update_client(user: User) -> None:
    client = user.update_client(3, description="Better", phone_number="")
    assert client is user.get_client_by_id(3)
    assert (client.description, client.phone_number) == ("Better", "")

    with pytest.raises(ValidationError):
        user.update_client(3, parent_name="krzysztof")
    assert client.parent_name == "Krzysztof"

    with pytest.raises(NotFoundError):
        user.update_client(9, description="x")


def test_update_task(user: User) -> None:
    task = user.update_task(1, date="2025-01-05", client_id=3)
    assert (task.date_s, task.client_id) == ("2025-01-05", 3)

    with pytest.raises(FormatError):
        user.update_task(1, time="24:00")
    assert task.time_s == "12:30"


def test_filter_tasks_by_status(user: User) -> None:
    today = dt.date(2024, 12, 21)
    assert [t.id for t in user.filter_tasks_by_status(TaskStatus.DUE_SOON, today)] == [1]
    assert user.filter_tasks_by_status(TaskStatus.LONG_TERM, today) == []
    assert [t.id for t in user.filter_tasks_by_status("long", dt.date(2024, 12, 1))] == [1]
