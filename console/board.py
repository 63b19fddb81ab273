# console/board.py

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from .api import TaskApiClient
from .errors import AuthError, ConsoleError, NetworkError, NotFoundError, UnexpectedResponseError, ValidationError
from .form import TaskForm
from .models import Reference, TaskPriority, TaskRecord, TaskStatus

logger = logging.getLogger(__name__)

NO_PROJECTS_WARNING = "Создайте проект, прежде чем добавлять задачи."
DELETE_PROMPT = "Вы уверены, что хотите удалить эту задачу?"
DELETE_FAILED_MESSAGE = "Не удалось удалить задачу. Попробуйте еще раз."
CHECK_CONNECTION_HINT = "Проверьте подключение к сети и адрес API."

STATUS_BADGES = {
    TaskStatus.PENDING: "secondary",
    TaskStatus.IN_PROGRESS: "info",
    TaskStatus.COMPLETED: "success",
}

PRIORITY_BADGES = {
    TaskPriority.LOW: "success",
    TaskPriority.MEDIUM: "warning",
    TaskPriority.HIGH: "danger",
}


def status_badge(status) -> str:
    value = getattr(status, "value", status)
    try:
        return STATUS_BADGES[TaskStatus(str(value).lower())]
    except ValueError:
        return "light"


def priority_badge(priority) -> str:
    try:
        return PRIORITY_BADGES[TaskPriority(priority)]
    except ValueError:
        return "light"


class ConsoleState(Enum):
    IDLE = "idle"
    CREATING = "creating"
    EDITING = "editing"


@dataclass(frozen=True)
class TaskRow:
    id: int
    title: str
    project: str
    status: str
    status_badge: str
    priority: str
    priority_badge: str
    due_date: str
    assignee: str


class TaskConsole:
    """
    Таблица задач с модальной формой создания и редактирования.

    Форма управляется ``state``: в ``IDLE`` формы нет, в ``CREATING`` форма
    пустая, в ``EDITING`` форма заполнена из редактируемой задачи. После
    каждого успешного изменения список загружается заново целиком.

    Ошибки попадают в ``form_error``, пока форма открыта, иначе в ``error``;
    ``warning`` хранит некритичные подсказки, например об отсутствии проектов.
    """

    def __init__(self, api: TaskApiClient) -> None:
        self.api = api
        self.tasks: list[TaskRecord] = []
        self.projects: list[Reference] = []
        self.users: list[Reference] = []
        self.loading = False
        self.error: str | None = None
        self.form_error: str | None = None
        self.warning: str | None = None
        self.state = ConsoleState.IDLE
        self.form: TaskForm | None = None
        self.editing_task: TaskRecord | None = None

    @property
    def modal_open(self) -> bool:
        return self.state is not ConsoleState.IDLE

    def _surface(self, message: str) -> None:
        if self.modal_open:
            self.form_error = message
        else:
            self.error = message

    async def load(self) -> bool:
        self.loading = True
        self.error = None
        try:
            tasks, projects, users = await self.api.load_all()
        except ConsoleError as exc:
            logger.error("Не удалось загрузить данные: %s", exc.message)
            if isinstance(exc, AuthError):
                self._surface(exc.message)
            else:
                self._surface(f"Не удалось загрузить данные: {exc.message}. {CHECK_CONNECTION_HINT}")
            return False
        finally:
            self.loading = False

        self.tasks, self.projects, self.users = tasks, projects, users
        if self.projects:
            self.warning = None
        return True

    def open_create(self) -> bool:
        if not self.projects:
            self.warning = NO_PROJECTS_WARNING
            return False

        self.warning = None
        self.form_error = None
        self.editing_task = None
        self.form = TaskForm.blank(self.projects[0].id)
        self.state = ConsoleState.CREATING
        return True

    def open_edit(self, task: TaskRecord) -> None:
        self.form_error = None
        self.editing_task = task
        self.form = TaskForm.from_task(task)
        self.state = ConsoleState.EDITING

    def cancel(self) -> None:
        self.state = ConsoleState.IDLE
        self.form = None
        self.editing_task = None
        self.form_error = None

    async def submit(self) -> bool:
        if not self.modal_open:
            return False

        self.form_error = None
        problem = self.form.validate()
        if problem:
            self.form_error = problem
            return False

        try:
            if self.state is ConsoleState.CREATING:
                await self.api.create_task(self.form.to_payload(include_project=True))
            else:
                await self.api.update_task(self.editing_task.id, self.form.to_payload(include_project=False))
        except ConsoleError as exc:
            logger.error("Не удалось сохранить задачу: %s", exc.message)
            self.form_error = self._save_failure_message(exc)
            return False

        self.cancel()
        await self.load()
        return True

    def _save_failure_message(self, exc: ConsoleError) -> str:
        if isinstance(exc, (ValidationError, AuthError)):
            return f"Не удалось сохранить задачу: {exc.message}"
        if isinstance(exc, (NetworkError, UnexpectedResponseError)):
            return f"Не удалось сохранить задачу: {exc.message}. {CHECK_CONNECTION_HINT}"
        if isinstance(exc, NotFoundError):
            return "Не удалось сохранить задачу: задача не найдена."
        return "Не удалось сохранить задачу. Попробуйте еще раз."

    async def delete(self, task_id: int, confirm: Callable[[str], bool]) -> bool:
        if not confirm(DELETE_PROMPT):
            return False

        self.error = None
        try:
            await self.api.delete_task(task_id)
        except AuthError as exc:
            self._surface(exc.message)
            return False
        except (NetworkError, UnexpectedResponseError) as exc:
            logger.error("Не удалось удалить задачу %s: %s", task_id, exc.message)
            self._surface(f"{DELETE_FAILED_MESSAGE} {CHECK_CONNECTION_HINT}")
            return False
        except ConsoleError as exc:
            logger.error("Не удалось удалить задачу %s: %s", task_id, exc.message)
            self._surface(DELETE_FAILED_MESSAGE)
            return False

        await self.load()
        return True

    def rows(self) -> list[TaskRow]:
        return [
            TaskRow(
                id=task.id,
                title=task.title,
                project=task.project.name if task.project else "N/A",
                status=task.status.value,
                status_badge=status_badge(task.status),
                priority=task.priority.value,
                priority_badge=priority_badge(task.priority),
                due_date=task.due_date.strftime("%d.%m.%Y") if task.due_date else "N/A",
                assignee=task.assigned_user.name if task.assigned_user else "Не назначен",
            )
            for task in self.tasks
        ]
