"""Data models for the client/task desk.

Exposes the Client and Task records and the derived TaskStatus. Both records
validate their own fields: the dataclass ``__init__`` and every later attribute
assignment go through ``__setattr__``, so a value is either stored or rejected
with a TaskDeskError and the record is left untouched.
"""
from __future__ import annotations
import copy
import datetime as dt
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, ClassVar, Dict, Optional, Tuple

from errors import ErrorKind, FormatError, ValidationError

PHONE_RE = re.compile(r'\d{9}', re.ASCII)
DATE_RE = re.compile(r'(\d{4})-(\d{2})-(\d{2})', re.ASCII)
TIME_RE = re.compile(r'(\d{2}):(\d{2})', re.ASCII)
DATE_FORMAT = '%Y-%m-%d'
TIME_FORMAT = '%H:%M'

DUE_SOON_DAYS = 3
DUE_THIS_WEEK_DAYS = 7


class TaskStatus(Enum):
    """Urgency bucket derived from a task's date; never stored."""

    DUE_SOON = 'due-soon'
    DUE_THIS_WEEK = 'due-this-week'
    LONG_TERM = 'long-term'

    @property
    def title(self) -> str:
        return self.name.replace('_', ' ')

    @classmethod
    def parse(cls, raw: str) -> TaskStatus:
        key = (raw or '').strip().lower().replace('_', '-')
        for status in cls:
            if key == status.value:
                return status
        status = _STATUS_ALIASES.get(key)
        if status is None:
            raise ValidationError(ErrorKind.INVALID_STATUS, 'status',
                                  f'Unknown status "{raw}". Use soon, week or long.')
        return status


_STATUS_ALIASES: Dict[str, TaskStatus] = {
    's': TaskStatus.DUE_SOON,
    'soon': TaskStatus.DUE_SOON,
    'w': TaskStatus.DUE_THIS_WEEK,
    'week': TaskStatus.DUE_THIS_WEEK,
    'l': TaskStatus.LONG_TERM,
    'long': TaskStatus.LONG_TERM,
}


def classify_status(day: dt.date, today: dt.date) -> TaskStatus:
    """Bucket ``day`` by whole calendar days from ``today``.

    Both ends are inclusive: three days ahead is still DUE_SOON and seven days
    ahead is still DUE_THIS_WEEK. Dates in the past count as DUE_SOON.
    """
    days = (day - today).days
    if days <= DUE_SOON_DAYS:
        return TaskStatus.DUE_SOON
    if days <= DUE_THIS_WEEK_DAYS:
        return TaskStatus.DUE_THIS_WEEK
    return TaskStatus.LONG_TERM


# -------------------- field checks --------------------
def _check_name(value: Any, field: str, label: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(ErrorKind.EMPTY_NAME, field, f'{label} cannot be empty.')
    if not value[0].isupper():
        raise ValidationError(ErrorKind.NAME_NOT_CAPITALIZED, field,
                              f'{label} must start with a capital letter.')
    return value


def _check_phone(value: Any) -> Optional[str]:
    if value is None or value == '':
        return value
    if not isinstance(value, str) or not PHONE_RE.fullmatch(value):
        raise ValidationError(ErrorKind.INVALID_PHONE_NUMBER, 'phone_number',
                              'Phone number must be 9 digits.')
    return value


def _check_text(value: Any) -> str:
    return '' if value is None else str(value)


def _check_id(value: Any) -> int:
    # bool is an int subclass but never a valid id
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValueError(f'id must be a non-negative int, got {value!r}')
    return value


def _check_subject(value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(ErrorKind.EMPTY_SUBJECT, 'subject', 'Subject cannot be empty.')
    return value


def _check_client_id(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ValidationError(ErrorKind.INVALID_CLIENT_ID, 'client_id', 'Invalid client ID.')
    return value


def parse_date(raw: Any) -> dt.date:
    """Parse ``YYYY-MM-DD``; impossible calendar dates are rejected too."""
    if isinstance(raw, dt.datetime):
        return raw.date()
    if isinstance(raw, dt.date):
        return raw
    m = DATE_RE.fullmatch(raw) if isinstance(raw, str) else None
    if not m:
        raise FormatError(ErrorKind.INVALID_DATE, raw)
    try:
        return dt.date(int(m.group(1)), int(m.group(2)), int(m.group(3)))
    except ValueError:
        raise FormatError(ErrorKind.INVALID_DATE, raw) from None


def parse_time(raw: Any) -> dt.time:
    """Parse 24-hour, zero padded ``HH:mm``."""
    if isinstance(raw, dt.time):
        return raw.replace(second=0, microsecond=0)
    m = TIME_RE.fullmatch(raw) if isinstance(raw, str) else None
    if not m:
        raise FormatError(ErrorKind.INVALID_TIME, raw)
    try:
        return dt.time(int(m.group(1)), int(m.group(2)))
    except ValueError:
        raise FormatError(ErrorKind.INVALID_TIME, raw) from None


class _Validated:
    """Mixin routing every attribute assignment through ``_VALIDATORS``."""

    _VALIDATORS: ClassVar[Dict[str, Callable[[Any], Any]]] = {}
    _EDITABLE: ClassVar[Tuple[str, ...]] = ()

    def __setattr__(self, name: str, value: Any) -> None:
        check = self._VALIDATORS.get(name)
        if check is not None:
            value = check(value)
        super().__setattr__(name, value)

    @classmethod
    def check_field(cls, name: str, value: Any) -> Any:
        """Validate ``value`` for field ``name`` without a record; returns the stored form."""
        check = cls._VALIDATORS.get(name)
        return value if check is None else check(value)

    def update(self, **fields: Any) -> None:
        """Apply several field edits at once; all of them or none.

        Every value is validated on a scratch copy first, so a failure on the
        last field leaves the earlier ones unapplied.
        """
        for name in fields:
            if name not in self._EDITABLE:
                raise ValidationError(ErrorKind.UNKNOWN_FIELD, name,
                                      f'Unknown field "{name}".')
        scratch = copy.copy(self)
        for name, value in fields.items():
            setattr(scratch, name, value)
        for name in fields:
            object.__setattr__(self, name, getattr(scratch, name))


@dataclass
class Client(_Validated):
    """A client (a student and the parent to contact).

    Fields:
        student_name: Non-empty, first character an uppercase letter.
        parent_name: Same rule as student_name.
        phone_number: Exactly 9 digits, or None / "" for no phone.
        description: Free text.
        id: Dense 1-based position in the owning registry (0 = unregistered).
    """
    student_name: str
    parent_name: str
    phone_number: Optional[str] = None
    description: str = ''
    id: int = 0

    _VALIDATORS: ClassVar[Dict[str, Callable[[Any], Any]]] = {
        'student_name': lambda v: _check_name(v, 'student_name', 'Student name'),
        'parent_name': lambda v: _check_name(v, 'parent_name', 'Parent name'),
        'phone_number': _check_phone,
        'description': _check_text,
        'id': _check_id,
    }
    _EDITABLE: ClassVar[Tuple[str, ...]] = ('student_name', 'parent_name', 'phone_number', 'description')

    def __repr__(self) -> str:  # pragma: no cover - convenience only
        return f"Client(id={self.id}, student_name={self.student_name}, parent_name={self.parent_name})"


@dataclass
class Task(_Validated):
    """A dated task linked to a client.

    ``client_id`` is a plain reference: nothing checks that the client exists
    and removing the client leaves the task alone.
    """
    subject: str
    description: str
    client_id: int
    date: dt.date
    time: dt.time
    id: int = 0

    _VALIDATORS: ClassVar[Dict[str, Callable[[Any], Any]]] = {
        'subject': _check_subject,
        'description': _check_text,
        'client_id': _check_client_id,
        'date': parse_date,
        'time': parse_time,
        'id': _check_id,
    }
    _EDITABLE: ClassVar[Tuple[str, ...]] = ('subject', 'description', 'client_id', 'date', 'time')

    @classmethod
    def from_strings(cls, subject: str, description: str, client_id: int,
                     date_s: str, time_s: str) -> Task:
        return cls(subject, description, client_id, parse_date(date_s), parse_time(time_s))

    # -------------------- string views --------------------
    @property
    def date_s(self) -> str:
        return self.date.strftime(DATE_FORMAT)

    @date_s.setter
    def date_s(self, value: str) -> None:
        self.date = parse_date(value) if isinstance(value, str) else _reject_date(value)

    @property
    def time_s(self) -> str:
        return self.time.strftime(TIME_FORMAT)

    @time_s.setter
    def time_s(self, value: str) -> None:
        self.time = parse_time(value) if isinstance(value, str) else _reject_time(value)

    # -------------------- derived --------------------
    def status_on(self, today: dt.date) -> TaskStatus:
        return classify_status(self.date, today)

    @property
    def status(self) -> TaskStatus:
        return self.status_on(dt.date.today())

    def __repr__(self) -> str:  # pragma: no cover - convenience only
        return f"Task(id={self.id}, subject={self.subject}, date={self.date_s}, time={self.time_s})"


def _reject_date(value: Any) -> dt.date:
    raise FormatError(ErrorKind.INVALID_DATE, value)


def _reject_time(value: Any) -> dt.time:
    raise FormatError(ErrorKind.INVALID_TIME, value)
