# apps/board/repository.py

"""
Repositório persistente de tarefas (Django ORM)

Mesma forma de dados do relay (dict camelCase), com leitura/escrita por
usuário e por tarefa e assinatura de mudanças via sinais do Django.
Não participa do caminho de broadcast do relay em memória.
"""

import logging
import uuid
from typing import Any, Callable, Dict, List, Optional

from django.db.models.signals import post_delete, post_save
from django.utils.dateparse import parse_datetime

from .models import Task

logger = logging.getLogger(__name__)

# Campo do protocolo -> campo do model
CAMPOS = {
    'title': 'title',
    'description': 'description',
    'priority': 'priority',
    'category': 'category',
    'column': 'column',
    'archived': 'archived',
    'isFavorite': 'is_favorite',
    'dueDate': 'due_date',
    'timeEstimate': 'time_estimate',
    'tags': 'tags',
    'attachments': 'attachments',
}

ChangeCallback = Callable[[Dict[str, Any]], None]


def task_to_dict(task: Task) -> Dict[str, Any]:
    """Converte o model para o formato usado no protocolo"""
    data = {'id': task.id, 'userId': task.user_id}
    for chave, campo in CAMPOS.items():
        data[chave] = getattr(task, campo)
    data['createdAt'] = task.created_at.isoformat() if task.created_at else None
    return data


def _aplicar_campos(task: Task, dados: Dict[str, Any]):
    for chave, valor in dados.items():
        campo = CAMPOS.get(chave)
        if campo is None:
            continue
        if campo in ('tags', 'attachments') and valor is None:
            valor = []
        if campo in ('description', 'category') and valor is None:
            valor = ''
        setattr(task, campo, valor)

    created_at = dados.get('createdAt')
    if isinstance(created_at, str) and parse_datetime(created_at):
        task.created_at = parse_datetime(created_at)


class Subscription:
    """Assinatura ativa de mudanças das tarefas de um usuário"""

    def __init__(self, user_id: str, callback: ChangeCallback):
        self.user_id = user_id
        self.callback = callback
        self._uid = f'task-subscription-{uuid.uuid4()}'
        self.active = False

    def start(self):
        post_save.connect(self._on_save, sender=Task, weak=False, dispatch_uid=self._uid)
        post_delete.connect(self._on_delete, sender=Task, weak=False, dispatch_uid=self._uid)
        self.active = True

    def unsubscribe(self):
        post_save.disconnect(sender=Task, dispatch_uid=self._uid)
        post_delete.disconnect(sender=Task, dispatch_uid=self._uid)
        self.active = False

    def _on_save(self, sender, instance, created, **kwargs):
        if instance.user_id != self.user_id:
            return
        self.callback({
            'eventType': 'INSERT' if created else 'UPDATE',
            'new': task_to_dict(instance),
            'old': None if created else {'id': instance.id},
        })

    def _on_delete(self, sender, instance, **kwargs):
        if instance.user_id != self.user_id:
            return
        self.callback({
            'eventType': 'DELETE',
            'new': None,
            'old': task_to_dict(instance),
        })


class TaskRepository:
    """
    Operações de persistência por usuário e por tarefa

    Erros de banco propagam para o chamador.
    """

    def get_tasks(self, user_id: str) -> List[Dict[str, Any]]:
        """Tarefas do usuário, mais recentes primeiro"""
        tarefas = Task.objects.filter(user_id=user_id).order_by('-created_at')
        return [task_to_dict(task) for task in tarefas]

    def get_task(self, task_id: str) -> Optional[Dict[str, Any]]:
        task = Task.objects.filter(pk=task_id).first()
        return task_to_dict(task) if task else None

    def create_task(self, dados: Dict[str, Any], user_id: str) -> Dict[str, Any]:
        task = Task(user_id=user_id)
        _aplicar_campos(task, dados)
        task.save()
        logger.info(f"💾 Tarefa {task.id} persistida para {user_id}")
        return task_to_dict(task)

    def update_task(self, task_id: str, updates: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        task = Task.objects.filter(pk=task_id).first()
        if task is None:
            return None

        _aplicar_campos(task, updates)
        task.save()
        return task_to_dict(task)

    def delete_task(self, task_id: str) -> bool:
        task = Task.objects.filter(pk=task_id).first()
        if task is None:
            return False

        # delete() da instância dispara post_delete para os assinantes
        task.delete()
        return True

    def subscribe(self, user_id: str, callback: ChangeCallback) -> Subscription:
        """Chama callback a cada INSERT/UPDATE/DELETE de tarefas do usuário"""
        subscription = Subscription(user_id, callback)
        subscription.start()
        return subscription
