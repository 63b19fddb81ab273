# users/views.py

from rest_framework.generics import ListAPIView
from .serializers import *
from .models import *


# Вью для получения списка всех пользователей
class GetAllUsersListView(ListAPIView):
    serializer_class = UserReferenceSerializer
    queryset = User.objects.order_by('id')
