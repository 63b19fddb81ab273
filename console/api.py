# console/api.py

from __future__ import annotations

import asyncio
import logging
from typing import Any

import httpx

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
    join_messages,
)
from .models import Reference, TaskRecord

logger = logging.getLogger(__name__)

UNEXPECTED_RESPONSE_MESSAGE = "Сервер вернул неожиданный ответ"


def parse_records(record_class, data: Any, many: bool = False):
    """Разбирает тело успешного ответа; неподходящая форма данных становится ``UnexpectedResponseError``."""
    try:
        if many:
            return [record_class.from_json(item) for item in data]
        return record_class.from_json(data)
    except (ValueError, KeyError, TypeError, AttributeError) as exc:
        logger.error("Не удалось разобрать ответ API: %r", exc)
        raise UnexpectedResponseError(UNEXPECTED_RESPONSE_MESSAGE) from exc


def error_from_response(response: httpx.Response) -> ConsoleError:
    """Переводит неуспешный ответ API в исключение консоли."""
    try:
        body = response.json()
    except ValueError:
        body = response.text or f"Ошибка HTTP, статус {response.status_code}"

    message = join_messages(body) or f"Ошибка HTTP, статус {response.status_code}"
    code = response.status_code
    errors = body.get("errors", body) if isinstance(body, dict) and "detail" not in body else None

    if code in (401, 403):
        return AuthError(message, code)
    if code == 400:
        return ValidationError(message, errors, code)
    if code == 422:
        return InvalidReferenceError(message, errors, code)
    if code == 404:
        return NotFoundError(message, code)
    return ApiError(message, code)


class TaskApiClient:
    """
    Асинхронный клиент для задач, проектов и пользователей.

    Каждый запрос несет bearer-токен и ожидает JSON. Ошибки поднимаются
    как наследники ``ConsoleError``, исключения ``httpx`` наружу не выходят.
    """

    def __init__(self, settings: ConsoleSettings, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self.settings = settings
        self._client = httpx.AsyncClient(
            base_url=settings.api_url,
            headers={
                "Authorization": f"Bearer {settings.token}",
                "Accept": "application/json",
            },
            transport=transport,
        )

    async def __aenter__(self) -> TaskApiClient:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, path: str, payload: dict[str, Any] | None = None) -> Any:
        try:
            response = await self._client.request(method, path, json=payload)
        except httpx.RequestError as exc:
            logger.error("Запрос %s %s не выполнен: %s", method, path, exc)
            raise NetworkError(str(exc) or exc.__class__.__name__) from exc

        if response.is_success:
            if response.status_code == 204 or not response.content:
                return None
            try:
                return response.json()
            except ValueError as exc:
                logger.error("%s %s вернул не JSON: %s", method, path, response.headers.get("content-type"))
                raise UnexpectedResponseError(UNEXPECTED_RESPONSE_MESSAGE, response.status_code) from exc

        error = error_from_response(response)
        logger.warning("%s %s -> %s: %s", method, path, response.status_code, error.message)
        raise error

    async def list_tasks(self) -> list[TaskRecord]:
        data = await self._request("GET", "tasks/")
        return parse_records(TaskRecord, data, many=True)

    async def list_projects(self) -> list[Reference]:
        data = await self._request("GET", "projects/")
        return parse_records(Reference, data, many=True)

    async def list_users(self) -> list[Reference]:
        data = await self._request("GET", "users/")
        return parse_records(Reference, data, many=True)

    async def load_all(self) -> tuple[list[TaskRecord], list[Reference], list[Reference]]:
        # ошибка любого из трех запросов прерывает всю загрузку
        tasks, projects, users = await asyncio.gather(
            self.list_tasks(),
            self.list_projects(),
            self.list_users(),
        )
        return tasks, projects, users

    async def create_task(self, payload: dict[str, Any]) -> TaskRecord:
        logger.info("Создание задачи: %s", payload)
        data = await self._request("POST", "tasks/", payload)
        return parse_records(TaskRecord, data)

    async def update_task(self, task_id: int, payload: dict[str, Any]) -> TaskRecord:
        logger.info("Изменение задачи %s: %s", task_id, payload)
        data = await self._request("PUT", f"tasks/{task_id}/", payload)
        return parse_records(TaskRecord, data)

    async def delete_task(self, task_id: int) -> None:
        await self._request("DELETE", f"tasks/{task_id}/")
