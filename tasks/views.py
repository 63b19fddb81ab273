# tasks/views.py

from rest_framework.generics import ListCreateAPIView, RetrieveUpdateDestroyAPIView
from rest_framework.response import Response
from rest_framework import status
from django.db import transaction
from .serializers import *
from users.utils import *
from .models import *


# Вью для получения списка всех задач и создания задачи
class TaskListCreateView(ListCreateAPIView):
    queryset = Task.objects.select_related('project', 'assigned_user')

    def get_serializer_class(self):
        if self.request.method == 'POST':
            return CreateTaskSerializer
        return GetTaskSerializer

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        # запись, журнал и письмо либо проходят вместе, либо откатываются
        with transaction.atomic():
            task = serializer.save(created_by=request.user)

        return Response(GetTaskSerializer(task).data, status=status.HTTP_201_CREATED)


# Вью для получения, изменения и удаления задачи
class TaskDetailView(RetrieveUpdateDestroyAPIView):
    queryset = Task.objects.select_related('project', 'assigned_user')

    def get_serializer_class(self):
        if self.request.method in ('PUT', 'PATCH'):
            return ChangeTaskSerializer
        return GetTaskSerializer

    # PUT принимает любое подмножество полей, как и PATCH
    def update(self, request, *args, **kwargs):
        instance = self.get_object()
        serializer = self.get_serializer(instance, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        with transaction.atomic():
            task = serializer.save()

        return Response(GetTaskSerializer(task).data)

    @transaction.atomic
    def perform_destroy(self, instance):
        user = self.request.user
        task_title = instance.title
        project_name = instance.project.name
        reciever = instance.assigned_user

        instance.delete()

        log_user_action(
            user=user, 
            action_name="Задачи", 
            description=f"Пользователь удалил задачу «{task_title}»."
        )
        send_mail_notification(
            users=[reciever], 
            header="Удаление задачи", 
            text=f"Задача «{task_title}» проекта «{project_name}» была удалена."
        )
