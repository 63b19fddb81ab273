# console/__init__.py

from .api import TaskApiClient
from .board import ConsoleState, TaskConsole, TaskRow
from .config import ConsoleSettings
from .errors import (
    ApiError,
    AuthError,
    ConsoleError,
    InvalidReferenceError,
    NetworkError,
    NotFoundError,
    UnexpectedResponseError,
    ValidationError,
)
from .form import UNSET, TaskForm
from .models import Reference, TaskPriority, TaskRecord, TaskStatus

__all__ = [
    "ApiError",
    "AuthError",
    "ConsoleError",
    "ConsoleSettings",
    "ConsoleState",
    "InvalidReferenceError",
    "NetworkError",
    "NotFoundError",
    "Reference",
    "TaskApiClient",
    "TaskConsole",
    "TaskForm",
    "TaskPriority",
    "TaskRecord",
    "TaskRow",
    "TaskStatus",
    "UNSET",
    "UnexpectedResponseError",
    "ValidationError",
]
