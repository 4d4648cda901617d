# apps/core/urls.py

from django.urls import path
from . import views

app_name = 'core'

urlpatterns = [
    # Identidade
    path('signup/', views.sign_up_view, name='signup'),
    path('signin/', views.sign_in_view, name='signin'),
    path('csrf/', views.csrf_token_view, name='csrf'),
    path('signout/', views.sign_out_view, name='signout'),
    path('user/', views.current_user_view, name='current_user'),
]
