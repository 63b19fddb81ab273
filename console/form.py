# console/form.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any

from .models import TaskPriority, TaskRecord, TaskStatus


class _Unset:
    """Отметка поля, которое не попадает в отправляемые данные."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNSET"


UNSET = _Unset()

EMPTY_TITLE_MESSAGE = "Название задачи не может быть пустым."
NO_PROJECT_MESSAGE = "Выберите проект."
BAD_DATE_MESSAGE = "Некорректная дата сдачи задания. Ожидается формат ГГГГ-ММ-ДД."


def optional_date(raw: str) -> date | _Unset:
    """Пустая дата означает "не задана": поле не отправляется вовсе."""
    raw = (raw or "").strip()
    if not raw:
        return UNSET
    return date.fromisoformat(raw)


def nullable_id(raw: Any) -> int | None:
    """Пустой выбор в списке означает отсутствие значения (для исполнителя это явный null)."""
    if raw is None or raw == "":
        return None
    return int(raw)


@dataclass
class TaskForm:
    """
    Буфер модальной формы задачи.

    Значения хранятся так, как их держат поля ввода (``due_date`` это строка
    ``ГГГГ-ММ-ДД``, пустая, если дата не задана), и преобразуются в ``to_payload``.
    """

    project_id: int | None
    title: str = ""
    description: str = ""
    status: TaskStatus = TaskStatus.PENDING
    priority: TaskPriority = TaskPriority.MEDIUM
    assigned_user_id: int | None = None
    due_date: str = ""

    @classmethod
    def blank(cls, project_id: int | None) -> TaskForm:
        return cls(project_id=project_id)

    @classmethod
    def from_task(cls, task: TaskRecord) -> TaskForm:
        return cls(
            project_id=task.project_id,
            title=task.title,
            description=task.description or "",
            status=task.status,
            priority=task.priority,
            assigned_user_id=task.assigned_user_id,
            due_date=task.due_date.isoformat() if task.due_date else "",
        )

    def set_field(self, name: str, value: Any) -> None:
        """Применяет изменение поля в том виде, в каком его отдает элемент формы."""
        if name == "project_id":
            self.project_id = nullable_id(value)
        elif name == "assigned_user_id":
            self.assigned_user_id = nullable_id(value)
        elif name == "status":
            self.status = TaskStatus(value)
        elif name == "priority":
            self.priority = TaskPriority(value)
        elif name in ("title", "description", "due_date"):
            setattr(self, name, "" if value is None else str(value))
        else:
            raise KeyError(name)

    def validate(self) -> str | None:
        if not self.title.strip():
            return EMPTY_TITLE_MESSAGE
        if not self.project_id:
            return NO_PROJECT_MESSAGE
        try:
            optional_date(self.due_date)
        except ValueError:
            return BAD_DATE_MESSAGE
        return None

    def to_payload(self, include_project: bool = True) -> dict[str, Any]:
        fields: dict[str, Any] = {
            "title": self.title,
            "description": self.description,
            "status": self.status.value,
            "priority": self.priority.value,
            "assigned_user_id": self.assigned_user_id,
            "due_date": optional_date(self.due_date),
        }
        if include_project:
            fields = {"project_id": self.project_id, **fields}

        payload = {}
        for key, value in fields.items():
            if value is UNSET:
                continue
            payload[key] = value.isoformat() if isinstance(value, date) else value
        return payload
