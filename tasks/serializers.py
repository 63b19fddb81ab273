# tasks/serializers.py

from projects.serializers import ProjectReferenceSerializer
from users.serializers import UserReferenceSerializer
from rest_framework import serializers
from .exceptions import TaskReferenceError
from users.utils import *
from .models import *


TASK_FIELD_ERRORS = {
    'title': {
        'error_messages': {
            'required': 'Название задачи обязательно.',
            'blank': 'Название задачи не может быть пустым.',
            'null': 'Название задачи не может быть пустым.',
        }
    },
    'status': {
        'error_messages': {'invalid_choice': 'Недопустимый статус задачи «{input}».'}
    },
    'priority': {
        'error_messages': {'invalid_choice': 'Недопустимый приоритет задачи «{input}».'}
    },
    'due_date': {
        'error_messages': {'invalid': 'Некорректная дата сдачи задания. Ожидается формат ГГГГ-ММ-ДД.'}
    },
}


def check_assigned_user(data):
    """
    Проверяет, что указанный исполнитель существует.
    Пустое значение означает, что задача никому не назначена.
    """
    assigned_user_id = data.get('assigned_user_id')

    if assigned_user_id is not None and not User.objects.filter(pk=assigned_user_id).exists():
        raise TaskReferenceError({'assigned_user_id': ['Пользователь не найден, операция невозможна.']})


# Сериализатор для создания задачи
class CreateTaskSerializer(serializers.ModelSerializer):
    project_id = serializers.PrimaryKeyRelatedField(
        queryset=Project.objects.all(),
        error_messages={
            'required': 'Выберите проект.',
            'null': 'Выберите проект.',
            'does_not_exist': 'Проект не найден, операция невозможна.',
            'incorrect_type': 'Некорректный идентификатор проекта.',
        }
    )
    assigned_user_id = serializers.IntegerField(required=False, allow_null=True)

    class Meta:
        model = Task
        fields = ['project_id', 'title', 'description', 'status', 'priority', 'assigned_user_id', 'due_date']
        extra_kwargs = TASK_FIELD_ERRORS

    def validate(self, data):
        check_assigned_user(data)

        return data

    def create(self, validated_data):
        validated_data['project'] = validated_data.pop('project_id')

        task = super().create(validated_data)

        log_user_action(
            user=task.created_by,
            action_name="Задачи",
            description=f"Пользователь создал задачу «{task.title}»"
        )

        send_mail_notification(
            users=[task.assigned_user],
            header="Новая задача",
            text=f"Обнаружена новая порученная Вам задача «{task.title}» в проекте «{task.project.name}»."
        )

        return task


# Сериализатор для получения информации о задачах
class GetTaskSerializer(serializers.ModelSerializer):
    project_id = serializers.IntegerField(read_only=True)
    project = ProjectReferenceSerializer(read_only=True)
    assigned_user_id = serializers.IntegerField(read_only=True)
    assigned_user = UserReferenceSerializer(read_only=True)

    class Meta:
        model = Task
        fields = ['id', 'project_id', 'project', 'title', 'description',
                  'status', 'priority',
                  'assigned_user_id', 'assigned_user', 'created_by',
                  'due_date', 'created_at', 'updated_at',
                ]
        read_only_fields = fields


# Сериализатор для изменения информации о задаче
class ChangeTaskSerializer(serializers.ModelSerializer):
    assigned_user_id = serializers.IntegerField(required=False, allow_null=True)

    class Meta:
        model = Task
        fields = ['title', 'description', 'status', 'priority', 'assigned_user_id', 'due_date']
        extra_kwargs = TASK_FIELD_ERRORS

    def validate(self, data):
        check_assigned_user(data)

        return data

    def update(self, instance, validated_data):
        previous_assignee_id = instance.assigned_user_id
        fields_changed = False

        for field in validated_data:
            if getattr(instance, field) != validated_data[field]:
                fields_changed = True
                break

        if fields_changed:
            instance = super().update(instance, validated_data)

            log_user_action(
                user=self.context['request'].user,
                action_name="Задачи",
                description=f"Пользователь изменил задачу «{instance.title}»"
            )

            if instance.assigned_user_id != previous_assignee_id:
                send_mail_notification(
                    users=[instance.assigned_user],
                    header="Новая задача",
                    text=f"Обнаружена новая порученная Вам задача «{instance.title}» в проекте «{instance.project.name}»."
                )

        return instance
