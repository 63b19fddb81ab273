# projects/urls.py

from django.urls import path
from .views import *

urlpatterns = [
    path('projects/', GetAllProjectsListView.as_view(), name='projects-list'),
]
