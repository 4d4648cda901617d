# config/urls.py

from django.contrib import admin
from django.urls import path, include

urlpatterns = [
    # Admin
    path('admin/', admin.site.urls),

    # Aplicações principais
    path('api/auth/', include('apps.core.urls')),
    path('board/', include('apps.board.urls')),
]

# Customizar títulos do admin
admin.site.site_header = 'Kanban Relay Admin'
admin.site.site_title = 'Kanban Relay'
admin.site.index_title = 'Administração do Sistema'
