# apps/board/admin.py

from django.contrib import admin
from django.utils.html import format_html

from .models import Task


@admin.register(Task)
class TaskAdmin(admin.ModelAdmin):
    """Admin para as tarefas persistidas"""

    list_display = [
        'title', 'user_id', 'column', 'prioridade_badge',
        'category', 'archived', 'is_favorite', 'created_at'
    ]
    list_filter = ['column', 'priority', 'archived', 'is_favorite']
    search_fields = ['title', 'description', 'user_id']
    ordering = ['-created_at']
    readonly_fields = ['id', 'created_at']

    def prioridade_badge(self, obj):
        """Exibe a prioridade com badge colorido"""
        cores = {
            'High': '#EF4444',  # vermelho
            'Medium': '#F59E0B',  # amarelo
            'Low': '#3B82F6'  # azul
        }
        cor = cores.get(obj.priority, '#6B7280')
        return format_html(
            '<span style="background-color: {}; color: white; '
            'padding: 3px 8px; border-radius: 4px; font-size: 11px;">{}</span>',
            cor, obj.priority
        )

    prioridade_badge.short_description = 'Prioridade'
