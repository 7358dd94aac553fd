"""Ordered registries with dense, 1-based ids.

A record's id is always its position in the registry: ``add`` appends and
hands out ``len(registry)``, ``remove_by_id`` closes the gap by shifting every
later record down by one. Lookups and removals share the same 1-based bounds.
"""
import datetime as dt
import logging
from typing import Generic, Iterator, List, Optional, TypeVar, Union

from errors import NotFoundError
from models import Client, Task, TaskStatus

logger = logging.getLogger(__name__)

Record = TypeVar('Record', Client, Task)


class Registry(Generic[Record]):
    entity_kind: str = 'record'

    def __init__(self) -> None:
        self._records: List[Record] = []

    # -------------------- id management --------------------
    def _index_of(self, record_id: int) -> int:
        if isinstance(record_id, bool) or not isinstance(record_id, int):
            raise NotFoundError(self.entity_kind, record_id)
        if record_id < 1 or record_id > len(self._records):
            raise NotFoundError(self.entity_kind, record_id)
        return record_id - 1

    def _renumber_from(self, index: int) -> None:
        """Reassign ids to records at ``index`` and after (1-based)."""
        for position in range(index, len(self._records)):
            self._records[position].id = position + 1

    # -------------------- operations --------------------
    def add(self, record: Record) -> int:
        self._records.append(record)
        record.id = len(self._records)
        logger.debug('Added %s %d', self.entity_kind, record.id)
        return record.id

    def remove_by_id(self, record_id: int) -> Record:
        idx = self._index_of(record_id)
        removed = self._records.pop(idx)
        removed.id = 0
        self._renumber_from(idx)
        logger.debug('Removed %s %d; renumbered %d following', self.entity_kind,
                     record_id, len(self._records) - idx)
        return removed

    def get_by_id(self, record_id: int) -> Record:
        return self._records[self._index_of(record_id)]

    def list(self) -> List[Record]:
        return list(self._records)

    # -------------------- container protocol --------------------
    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[Record]:
        return iter(list(self._records))

    def __contains__(self, record: object) -> bool:
        return any(r is record for r in self._records)

    def __str__(self) -> str:
        return f'{len(self._records)} {self.entity_kind}s'


class ClientRegistry(Registry[Client]):
    entity_kind = 'client'


class TaskRegistry(Registry[Task]):
    entity_kind = 'task'

    def filter_by_status(self, status: Union[TaskStatus, str],
                         today: Optional[dt.date] = None) -> List[Task]:
        """Tasks whose derived status is ``status``, in registry order."""
        if not isinstance(status, TaskStatus):
            status = TaskStatus.parse(status)
        day = today or dt.date.today()
        return [t for t in self._records if t.status_on(day) is status]

    def for_client(self, client_id: int) -> List[Task]:
        return [t for t in self._records if t.client_id == client_id]
