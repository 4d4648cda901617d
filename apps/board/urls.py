# apps/board/urls.py

from django.urls import path
from . import views

app_name = 'board'

urlpatterns = [
    # Estado do relay
    path('status/', views.relay_status, name='status'),
]
