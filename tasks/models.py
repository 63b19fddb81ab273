# tasks/models.py

from django.db import models
from users.models import User
from projects.models import Project


class TaskStatus(models.TextChoices):
    PENDING = 'pending', 'Ожидает'
    IN_PROGRESS = 'in progress', 'В работе'
    COMPLETED = 'completed', 'Завершена'


class TaskPriority(models.TextChoices):
    LOW = 'low', 'Низкий'
    MEDIUM = 'medium', 'Средний'
    HIGH = 'high', 'Высокий'


class Task(models.Model):
    project = models.ForeignKey(
        Project,
        related_name='project_tasks',
        on_delete=models.CASCADE
    )
    title = models.CharField(max_length=255)
    description = models.TextField(null=True, blank=True)
    status = models.CharField(max_length=20, choices=TaskStatus.choices, default=TaskStatus.PENDING)
    priority = models.CharField(max_length=20, choices=TaskPriority.choices, default=TaskPriority.MEDIUM)
    assigned_user = models.ForeignKey(
        User,
        related_name='user_tasks_to_do',
        null=True,
        blank=True,
        on_delete=models.SET_NULL
    )
    created_by = models.ForeignKey(
        User,
        related_name='user_created_tasks',
        on_delete=models.CASCADE
    )
    due_date = models.DateField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'tasks'
        ordering = ['id']
        indexes = [
            models.Index(fields=['status'], name='tasks_status_idx'),
            models.Index(fields=['priority'], name='tasks_priority_idx'),
            models.Index(fields=['due_date'], name='tasks_due_date_idx'),
        ]
        constraints = [
            models.CheckConstraint(condition=models.Q(status__in=TaskStatus.values), name='tasks_status_valid'),
            models.CheckConstraint(condition=models.Q(priority__in=TaskPriority.values), name='tasks_priority_valid'),
        ]

    def __str__(self):
        return f"Задание '{self.title}' в проекте '{self.project.name}'."
