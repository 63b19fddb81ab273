# tasks/exceptions.py

from rest_framework import status
from rest_framework.exceptions import APIException


class TaskReferenceError(APIException):
    """
    Ссылка задачи на несуществующую запись (например, на удаленного пользователя).
    Отдается отдельно от ошибок валидации полей, с кодом 422.
    """
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    default_detail = 'Связанная запись не найдена.'
    default_code = 'invalid_reference'
