"""Error taxonomy shared by the records, the registries and the CLI.

Every failure raised by the domain layer is a TaskDeskError. The CLI catches
the base class at the command boundary, prints the message and redraws; the
model is left exactly as it was before the failed call.
"""
from __future__ import annotations
from enum import StrEnum
from typing import Any, Optional


class ErrorKind(StrEnum):
    NOT_FOUND = "NotFound"
    INVALID_PHONE_NUMBER = "InvalidPhoneNumber"
    EMPTY_NAME = "EmptyName"
    NAME_NOT_CAPITALIZED = "NameNotCapitalized"
    EMPTY_SUBJECT = "EmptySubject"
    INVALID_CLIENT_ID = "InvalidClientId"
    INVALID_STATUS = "InvalidStatus"
    UNKNOWN_FIELD = "UnknownField"
    INVALID_DATE = "InvalidDate"
    INVALID_TIME = "InvalidTime"


class TaskDeskError(Exception):
    """Base class; ``message`` is ready to show to the user."""

    kind: ErrorKind

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class NotFoundError(TaskDeskError):
    kind = ErrorKind.NOT_FOUND

    def __init__(self, entity_kind: str, id: Any):
        super().__init__(f'{entity_kind.capitalize()} with id {id} not found.')
        self.entity_kind = entity_kind
        self.id = id


class ValidationError(TaskDeskError):
    """A semantically invalid field value (bad phone number, empty subject...)."""

    def __init__(self, kind: ErrorKind, field: Optional[str], message: str):
        super().__init__(message)
        self.kind = kind
        self.field = field


class FormatError(TaskDeskError):
    """A malformed date or time string."""

    _MESSAGES = {
        ErrorKind.INVALID_DATE: 'Invalid date format. Correct format is YYYY-MM-DD.',
        ErrorKind.INVALID_TIME: 'Invalid time format. Correct format is HH:mm.',
    }

    def __init__(self, kind: ErrorKind, raw_input: Any):
        super().__init__(self._MESSAGES.get(kind, f'Invalid value: {raw_input!r}'))
        self.kind = kind
        self.raw_input = raw_input
