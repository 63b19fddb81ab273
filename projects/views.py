# projects/views.py

from rest_framework.generics import ListAPIView
from .serializers import *
from .models import *


# Вью для получения списка всех проектов
class GetAllProjectsListView(ListAPIView):
    queryset = Project.objects.order_by('id')
    serializer_class = ProjectReferenceSerializer
