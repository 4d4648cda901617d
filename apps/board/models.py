# apps/board/models.py

import uuid
from django.db import models
from django.utils import timezone

from .commands import COLUMNS, TODO


def gerar_task_id():
    return str(uuid.uuid4())


class Task(models.Model):
    """
    Tarefa persistida

    Substituto planejado da coleção em memória do relay; o relay em si
    não lê nem escreve nesta tabela.
    """

    PRIORIDADE_CHOICES = [
        ('Low', 'Low'),
        ('Medium', 'Medium'),
        ('High', 'High'),
    ]

    COLUNA_CHOICES = [(coluna, coluna) for coluna in COLUMNS]

    id = models.CharField(primary_key=True, max_length=64, default=gerar_task_id, editable=False)
    user_id = models.CharField(max_length=128, db_index=True)

    title = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    priority = models.CharField(max_length=10, choices=PRIORIDADE_CHOICES, default='Medium')
    # Aberta na prática: o cliente pode enviar categorias novas
    category = models.CharField(max_length=50, blank=True, default='Feature')
    column = models.CharField(max_length=20, choices=COLUNA_CHOICES, default=TODO)

    archived = models.BooleanField(default=False)
    is_favorite = models.BooleanField(default=False)

    # === CAMPOS DESCRITIVOS (sem validação) ===
    due_date = models.CharField(max_length=40, blank=True, null=True)
    time_estimate = models.CharField(max_length=40, blank=True, null=True)
    tags = models.JSONField(default=list, blank=True)
    attachments = models.JSONField(default=list, blank=True)

    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = 'board_task'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['user_id', 'created_at'], name='board_task_user_created_idx'),
        ]

    def __str__(self):
        return f"{self.title} [{self.column}] ({self.user_id})"
