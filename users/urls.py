# users/urls.py

from django.urls import path
from .views import *


urlpatterns = [
    path('users/', GetAllUsersListView.as_view(), name='users-list'),
]
