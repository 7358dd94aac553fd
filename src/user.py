"""User aggregate: one client registry and one task registry.

The aggregate is built once in ``main`` and handed to every view; nothing in
the package reaches for a module-level instance.
"""
import datetime as dt
import logging
from typing import Any, List, Optional, Union

from models import Client, Task, TaskStatus
from registry import ClientRegistry, TaskRegistry

logger = logging.getLogger(__name__)

SAMPLE_CLIENTS = (
    ('Pati', 'Monika', '432789234', '2class'),
    ('Bartek', 'Klaudia', '506923876', 'Good'),
    ('Michal', 'Krzysztof', '123456780', 'Bad'),
)
SAMPLE_TASKS = (
    ('Matematyka', 'nowy lol', 2, '2024-12-23', '12:30'),
)


class User:
    def __init__(self) -> None:
        self.clients = ClientRegistry()
        self.tasks = TaskRegistry()

    @classmethod
    def with_sample_data(cls) -> 'User':
        """A user seeded with the fixed demonstration clients and task."""
        user = cls()
        for student, parent, phone, description in SAMPLE_CLIENTS:
            user.add_client(Client(student, parent, phone, description))
        for subject, description, client_id, date_s, time_s in SAMPLE_TASKS:
            user.add_task(Task.from_strings(subject, description, client_id, date_s, time_s))
        logger.debug('Seeded sample data: %s', user)
        return user

    # -------------------- clients --------------------
    def add_client(self, client: Client) -> int:
        return self.clients.add(client)

    def remove_client(self, client_id: int) -> Client:
        # tasks pointing at the removed client are left as they are
        return self.clients.remove_by_id(client_id)

    def get_client_by_id(self, client_id: int) -> Client:
        return self.clients.get_by_id(client_id)

    def list_clients(self) -> List[Client]:
        return self.clients.list()

    def update_client(self, client_id: int, **fields: Any) -> Client:
        client = self.clients.get_by_id(client_id)
        client.update(**fields)
        return client

    # -------------------- tasks --------------------
    def add_task(self, task: Task) -> int:
        return self.tasks.add(task)

    def remove_task(self, task_id: int) -> Task:
        return self.tasks.remove_by_id(task_id)

    def get_task_by_id(self, task_id: int) -> Task:
        return self.tasks.get_by_id(task_id)

    def list_tasks(self) -> List[Task]:
        return self.tasks.list()

    def filter_tasks_by_status(self, status: Union[TaskStatus, str],
                               today: Optional[dt.date] = None) -> List[Task]:
        return self.tasks.filter_by_status(status, today)

    def update_task(self, task_id: int, **fields: Any) -> Task:
        task = self.tasks.get_by_id(task_id)
        task.update(**fields)
        return task

    def __str__(self) -> str:
        return f'Clients: {len(self.clients)}, Tasks: {len(self.tasks)}'
