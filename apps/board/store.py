# apps/board/store.py

import copy
import uuid
from typing import Any, Dict, List, Optional

from django.utils import timezone

from .commands import TODO

Task = Dict[str, Any]


class TaskStore:
    """
    Coleção plana, em memória, com as tarefas de todos os usuários

    A ordem de inserção é preservada e é a ordem da lista enviada em sync:tasks.
    Não há relação entre tarefas; a ordenação de exibição é feita pelo cliente.
    """

    def __init__(self):
        self._tasks: List[Task] = []

    def __len__(self):
        return len(self._tasks)

    def create(self, user_id: str, fields: Dict[str, Any]) -> Task:
        """
        Cria tarefa para o usuário

        O id e o dono são sempre atribuídos aqui; os demais campos do cliente
        são guardados como vieram.
        """
        task = dict(fields)
        task['id'] = self._new_id()
        task['userId'] = user_id
        task['column'] = fields.get('column') or TODO
        task['attachments'] = fields.get('attachments') or []
        task.setdefault('archived', False)
        task.setdefault('createdAt', timezone.now().isoformat())

        self._tasks.append(task)
        return task

    def get(self, task_id: str) -> Optional[Task]:
        for task in self._tasks:
            if task['id'] == task_id:
                return task
        return None

    def update(self, task_id: str, fields: Dict[str, Any]) -> Optional[Task]:
        """Shallow merge dos campos sobre a tarefa existente (id e dono preservados)"""
        task = self.get(task_id)
        if task is None:
            return None

        for key, value in fields.items():
            if key in ('id', 'userId'):
                continue
            task[key] = value
        return task

    def move(self, user_id: str, task_id: str, column: str) -> Optional[Task]:
        task = self.get(task_id)
        if task is None or task['userId'] != user_id:
            return None

        task['column'] = column
        return task

    def delete(self, user_id: str, task_id: str) -> Optional[Task]:
        task = self.get(task_id)
        if task is None or task['userId'] != user_id:
            return None

        self._tasks.remove(task)
        return task

    def tasks_for(self, user_id: str) -> List[Task]:
        """
        Lista completa de tarefas do usuário

        Retorna cópias: o snapshot entregue às conexões não muda depois.
        """
        return [copy.deepcopy(task) for task in self._tasks if task['userId'] == user_id]

    def clear(self):
        self._tasks.clear()

    def _new_id(self) -> str:
        return str(uuid.uuid4())
