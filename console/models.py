# console/models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any


class TaskStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in progress"
    COMPLETED = "completed"


class TaskPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass(frozen=True)
class Reference:
    """Проект или пользователь из справочных списков."""

    id: int
    name: str

    @classmethod
    def from_json(cls, data: dict[str, Any] | None) -> Reference | None:
        if not data:
            return None
        return cls(id=int(data["id"]), name=str(data.get("name") or ""))


@dataclass(frozen=True)
class TaskRecord:
    id: int
    project_id: int
    title: str
    description: str | None
    status: TaskStatus
    priority: TaskPriority
    assigned_user_id: int | None
    due_date: date | None
    project: Reference | None = None
    assigned_user: Reference | None = None
    created_by: int | None = None

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> TaskRecord:
        project = Reference.from_json(data.get("project"))
        assigned_user = Reference.from_json(data.get("assigned_user"))
        project_id = data.get("project_id")
        if project_id is None and project is not None:
            project_id = project.id

        return cls(
            id=int(data["id"]),
            project_id=int(project_id),
            title=data.get("title") or "",
            description=data.get("description"),
            status=TaskStatus(data.get("status", TaskStatus.PENDING.value)),
            priority=TaskPriority(data.get("priority", TaskPriority.MEDIUM.value)),
            assigned_user_id=data.get("assigned_user_id"),
            due_date=parse_date(data.get("due_date")),
            project=project,
            assigned_user=assigned_user,
            created_by=data.get("created_by"),
        )


def parse_date(value: str | None) -> date | None:
    # API может отдать как дату, так и полную отметку времени ISO
    if not value:
        return None
    return date.fromisoformat(value.split("T")[0])
