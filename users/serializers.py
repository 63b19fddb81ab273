# users/serializers.py

from rest_framework import serializers
from .models import *


# Сериализатор для получения списка пользователей (для выбора исполнителя задачи)
class UserReferenceSerializer(serializers.ModelSerializer):
    name = serializers.CharField(read_only=True)

    class Meta:
        model = User
        fields = ['id', 'name']
