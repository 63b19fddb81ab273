# tests/conftest.py

import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from projects.models import Project
from users.models import User


@pytest.fixture()
def make_user(db):
    def factory(username, **kwargs):
        kwargs.setdefault('email', f'{username}@example.com')
        return User.objects.create(username=username, password='!', **kwargs)
    return factory


@pytest.fixture()
def author(make_user):
    return make_user('author', first_name='Иван', last_name='Петров')


@pytest.fixture()
def assignee(make_user):
    return make_user('assignee', first_name='Анна', last_name='Смирнова', notifications_status=True)


@pytest.fixture()
def project(author):
    return Project.objects.create(name='Сайт компании', created_by=author)


def client_for(user):
    client = APIClient()
    token = RefreshToken.for_user(user).access_token
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {token}')
    return client


@pytest.fixture()
def api_client(author):
    """
    Клиент с действующим bearer-токеном автора задач.
    """
    return client_for(author)


@pytest.fixture()
def anonymous_client():
    return APIClient()
