# projects/serializers.py

from rest_framework import serializers
from .models import *


# Сериализатор для получения списка проектов (для выбора проекта задачи)
class ProjectReferenceSerializer(serializers.ModelSerializer):
    class Meta:
        model = Project
        fields = ['id', 'name']
