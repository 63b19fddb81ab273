# tests/test_tasks_api.py

import datetime

import pytest

from projects.models import Project
from tasks.models import Task, TaskPriority, TaskStatus
from users.models import User_action

from .conftest import client_for

pytestmark = pytest.mark.django_db

TASKS_URL = '/api/tasks/'


def task_url(task_id):
    return f'/api/tasks/{task_id}/'


def make_task(project, author, **kwargs):
    kwargs.setdefault('title', 'Сверстать главную')
    return Task.objects.create(project=project, created_by=author, **kwargs)


def test_list_requires_credentials(anonymous_client):
    response = anonymous_client.get(TASKS_URL)

    assert response.status_code == 401
    assert response['WWW-Authenticate'].startswith('Bearer')


def test_invalid_token_is_rejected_before_validation(project):
    client = client_for(project.created_by)
    client.credentials(HTTP_AUTHORIZATION='Bearer not-a-token')

    response = client.post(TASKS_URL, {'title': ''}, format='json')

    assert response.status_code == 401
    assert Task.objects.count() == 0


@pytest.mark.parametrize('method, payload', [
    ('put', {'title': ''}),
    ('put', {'status': 'completed'}),
    ('delete', None),
])
def test_invalid_token_leaves_existing_task_untouched(project, author, method, payload):
    task = make_task(project, author)
    client = client_for(author)
    client.credentials(HTTP_AUTHORIZATION='Bearer not-a-token')

    response = getattr(client, method)(task_url(task.id), payload, format='json')

    assert response.status_code == 401
    task.refresh_from_db()
    assert task.title == 'Сверстать главную'
    assert task.status == TaskStatus.PENDING
    assert not User_action.objects.exists()


def test_create_applies_default_status_and_priority(api_client, project, author):
    response = api_client.post(TASKS_URL, {'project_id': project.id, 'title': 'Написать ТЗ'}, format='json')

    assert response.status_code == 201
    assert response.data['status'] == 'pending'
    assert response.data['priority'] == 'medium'
    assert response.data['created_by'] == author.id
    assert response.data['assigned_user_id'] is None
    assert response.data['assigned_user'] is None
    assert response.data['created_at'] is not None

    task = Task.objects.get(pk=response.data['id'])
    assert task.status == TaskStatus.PENDING
    assert task.priority == TaskPriority.MEDIUM


def test_create_takes_creator_from_credentials(api_client, project, author, assignee):
    response = api_client.post(
        TASKS_URL,
        {'project_id': project.id, 'title': 'Написать ТЗ', 'created_by': assignee.id},
        format='json'
    )

    assert response.status_code == 201
    assert Task.objects.get().created_by == author


@pytest.mark.parametrize('title', ['', '   '])
def test_create_rejects_empty_title(api_client, project, title):
    response = api_client.post(TASKS_URL, {'project_id': project.id, 'title': title}, format='json')

    assert response.status_code == 400
    assert 'title' in response.data
    assert Task.objects.count() == 0


def test_create_rejects_unknown_project(api_client, project):
    response = api_client.post(TASKS_URL, {'project_id': project.id + 100, 'title': 'Задача'}, format='json')

    assert response.status_code == 400
    assert response.data['project_id'] == ['Проект не найден, операция невозможна.']
    assert Task.objects.count() == 0


def test_create_rejects_missing_project(api_client):
    response = api_client.post(TASKS_URL, {'title': 'Задача'}, format='json')

    assert response.status_code == 400
    assert 'project_id' in response.data


def test_create_reports_unknown_assignee_as_reference_error(api_client, project):
    response = api_client.post(
        TASKS_URL,
        {'project_id': project.id, 'title': 'Задача', 'assigned_user_id': 9999},
        format='json'
    )

    assert response.status_code == 422
    assert response.data['assigned_user_id'] == ['Пользователь не найден, операция невозможна.']
    assert Task.objects.count() == 0


@pytest.mark.parametrize('field, value', [('status', 'done'), ('priority', 'urgent')])
def test_create_rejects_values_outside_enumerations(api_client, project, field, value):
    response = api_client.post(
        TASKS_URL,
        {'project_id': project.id, 'title': 'Задача', field: value},
        format='json'
    )

    assert response.status_code == 400
    assert field in response.data


def test_create_then_list_shows_resolved_project(api_client, project):
    created = api_client.post(
        TASKS_URL,
        {'project_id': project.id, 'title': 'Write spec', 'status': 'pending', 'priority': 'high'},
        format='json'
    )
    assert created.status_code == 201

    response = api_client.get(TASKS_URL)

    assert response.status_code == 200
    assert len(response.data) == 1
    row = response.data[0]
    assert row['title'] == 'Write spec'
    assert row['priority'] == 'high'
    assert row['status'] == 'pending'
    assert row['project'] == {'id': project.id, 'name': 'Сайт компании'}


def test_list_joins_project_and_assignee_eagerly(api_client, project, author, assignee, django_assert_max_num_queries):
    for number in range(3):
        make_task(project, author, title=f'Задача {number}', assigned_user=assignee)

    with django_assert_max_num_queries(3):
        response = api_client.get(TASKS_URL)

    assert [row['assigned_user'] for row in response.data] == [{'id': assignee.id, 'name': 'Анна Смирнова'}] * 3


def test_retrieve_single_task(api_client, project, author):
    task = make_task(project, author, due_date=datetime.date(2030, 1, 15))

    response = api_client.get(task_url(task.id))

    assert response.status_code == 200
    assert response.data['id'] == task.id
    assert response.data['due_date'] == '2030-01-15'


def test_update_status_only_keeps_other_attributes(api_client, project, author, assignee):
    task = make_task(
        project, author,
        description='Подробности',
        priority=TaskPriority.HIGH,
        assigned_user=assignee,
        due_date=datetime.date(2030, 5, 1),
    )
    before = api_client.get(task_url(task.id)).data

    response = api_client.put(task_url(task.id), {'status': 'completed'}, format='json')

    assert response.status_code == 200
    after = api_client.get(task_url(task.id)).data
    assert after['status'] == 'completed'
    for field in ('title', 'description', 'priority', 'assigned_user_id', 'due_date', 'project_id', 'created_by'):
        assert after[field] == before[field]


def test_update_null_assignee_clears_it_and_absent_key_keeps_it(api_client, project, author, assignee):
    task = make_task(project, author, assigned_user=assignee)

    api_client.put(task_url(task.id), {'title': 'Новое название'}, format='json')
    task.refresh_from_db()
    assert task.assigned_user == assignee

    api_client.put(task_url(task.id), {'assigned_user_id': None}, format='json')
    task.refresh_from_db()
    assert task.assigned_user is None


def test_update_does_not_move_task_to_another_project(api_client, project, author):
    other = Project.objects.create(name='Другой проект', created_by=author)
    task = make_task(project, author)

    response = api_client.put(task_url(task.id), {'project_id': other.id, 'title': 'Задача'}, format='json')

    assert response.status_code == 200
    task.refresh_from_db()
    assert task.project == project


def test_update_validates_present_attributes(api_client, project, author):
    task = make_task(project, author)

    blank = api_client.put(task_url(task.id), {'title': ''}, format='json')
    dangling = api_client.put(task_url(task.id), {'assigned_user_id': 4242}, format='json')

    assert blank.status_code == 400
    assert dangling.status_code == 422
    task.refresh_from_db()
    assert task.title == 'Сверстать главную'
    assert task.assigned_user is None


def test_update_unknown_task_is_not_found(api_client):
    response = api_client.put(task_url(4242), {'status': 'completed'}, format='json')

    assert response.status_code == 404


def test_delete_twice_fails_the_second_time(api_client, project, author):
    task = make_task(project, author)

    first = api_client.delete(task_url(task.id))
    second = api_client.delete(task_url(task.id))

    assert first.status_code == 204
    assert second.status_code == 404
    assert Task.objects.count() == 0


def test_mutations_are_written_to_audit_log(api_client, project, author):
    created = api_client.post(TASKS_URL, {'project_id': project.id, 'title': 'Задача'}, format='json')
    api_client.put(task_url(created.data['id']), {'priority': 'low'}, format='json')
    api_client.delete(task_url(created.data['id']))

    actions = User_action.objects.filter(user=author, type__name='Задачи').order_by('id')
    assert [action.description for action in actions] == [
        'Пользователь создал задачу «Задача»',
        'Пользователь изменил задачу «Задача»',
        'Пользователь удалил задачу «Задача».',
    ]
    assert {action.status for action in actions} == {'Успешно'}


def test_unchanged_update_is_not_logged(api_client, project, author):
    task = make_task(project, author, title='Задача')

    api_client.put(task_url(task.id), {'title': 'Задача'}, format='json')

    assert not User_action.objects.filter(user=author).exists()


def test_assignee_is_notified_by_mail(api_client, project, assignee, mailoutbox):
    api_client.post(
        TASKS_URL,
        {'project_id': project.id, 'title': 'Задача', 'assigned_user_id': assignee.id},
        format='json'
    )

    assert len(mailoutbox) == 1
    assert mailoutbox[0].subject == 'Новая задача'
    assert mailoutbox[0].to == [assignee.email]


def test_users_without_notifications_get_no_mail(api_client, project, make_user, mailoutbox):
    quiet = make_user('quiet')

    api_client.post(
        TASKS_URL,
        {'project_id': project.id, 'title': 'Задача', 'assigned_user_id': quiet.id},
        format='json'
    )

    assert mailoutbox == []


@pytest.fixture()
def smtp_down(monkeypatch):
    def send_mail(*args, **kwargs):
        raise OSError('smtp down')

    monkeypatch.setattr('users.utils.send_mail', send_mail)


def test_mail_failure_rolls_back_created_task(api_client, project, assignee, smtp_down):
    with pytest.raises(OSError):
        api_client.post(
            TASKS_URL,
            {'project_id': project.id, 'title': 'Задача', 'assigned_user_id': assignee.id},
            format='json'
        )

    assert Task.objects.count() == 0
    assert not User_action.objects.exists()


def test_mail_failure_rolls_back_reassignment(api_client, project, author, assignee, smtp_down):
    task = make_task(project, author)

    with pytest.raises(OSError):
        api_client.put(task_url(task.id), {'assigned_user_id': assignee.id, 'title': 'Другое'}, format='json')

    task.refresh_from_db()
    assert task.assigned_user is None
    assert task.title == 'Сверстать главную'
    assert not User_action.objects.exists()


def test_mail_failure_keeps_deleted_task(api_client, project, author, assignee, smtp_down):
    task = make_task(project, author, assigned_user=assignee)

    with pytest.raises(OSError):
        api_client.delete(task_url(task.id))

    assert Task.objects.filter(pk=task.pk).exists()
    assert not User_action.objects.exists()


def test_plain_edit_does_not_mail_assignee(api_client, project, author, assignee, mailoutbox):
    task = make_task(project, author, assigned_user=assignee)

    response = api_client.put(task_url(task.id), {'priority': 'high'}, format='json')

    assert response.status_code == 200
    assert mailoutbox == []


def test_reassignment_mails_new_assignee(api_client, project, author, assignee, mailoutbox):
    task = make_task(project, author)

    api_client.put(task_url(task.id), {'assigned_user_id': assignee.id}, format='json')

    assert [message.subject for message in mailoutbox] == ['Новая задача']
    assert mailoutbox[0].to == [assignee.email]
