# console/errors.py

from __future__ import annotations


class ConsoleError(Exception):
    """Базовая ошибка, которую консоль показывает пользователю."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class AuthError(ConsoleError):
    """Токен не передан, истек или отклонен (401/403)."""


class ValidationError(ConsoleError):
    """API отклонил переданные поля задачи (400)."""

    def __init__(self, message: str, errors: dict[str, list[str]] | None = None, status_code: int | None = None) -> None:
        super().__init__(message, status_code)
        self.errors = errors or {}


class InvalidReferenceError(ValidationError):
    """Переданный идентификатор ссылается на несуществующую запись (422)."""


class NotFoundError(ConsoleError):
    """Задача удалена или никогда не существовала (404)."""


class NetworkError(ConsoleError):
    """Запрос не дошел до сервера: HTTP-ответа нет."""


class ApiError(ConsoleError):
    """Любой другой неуспешный ответ."""


class UnexpectedResponseError(ApiError):
    """Ответ пришел, но это не JSON API задач: обычно неверный адрес API."""


def join_messages(payload) -> str:
    """
    Склеивает тело ошибки в одну строку для показа.

    Понимает словарь "поле -> список сообщений", тело ``{"detail": "..."}``
    и обычную строку.
    """
    if isinstance(payload, str):
        return payload
    if isinstance(payload, list):
        return " ".join(join_messages(item) for item in payload)
    if isinstance(payload, dict):
        if "detail" in payload:
            return join_messages(payload["detail"])
        if "errors" in payload:
            return join_messages(payload["errors"])
        if "message" in payload:
            return join_messages(payload["message"])
        return " ".join(join_messages(value) for value in payload.values())
    return str(payload)
