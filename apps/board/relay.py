# apps/board/relay.py

"""
Relay de sincronização de tarefas por usuário

Aplica os comandos de um socket à coleção compartilhada e calcula quais
conexões devem receber a lista completa atualizada. Toda mutação acontece
de forma síncrona dentro de handle(); o envio fica a cargo do consumer.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from .commands import (
    Command, RegisterUser, CreateTask, UpdateTask, MoveTask, DeleteTask, Ping
)
from .registry import ConnectionRegistry
from .store import Task, TaskStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Push:
    """Lista de tarefas a ser entregue a uma conexão como sync:tasks"""

    connection: str
    tasks: List[Task]


class TaskRelay:
    """
    Dono do TaskStore e do ConnectionRegistry

    Comandos de uma conexão sem usuário registrado são descartados.
    Depois de toda mutação bem-sucedida, todas as conexões do usuário afetado
    recebem a lista completa dele (nunca um delta).
    """

    def __init__(self, store: Optional[TaskStore] = None,
                 registry: Optional[ConnectionRegistry] = None,
                 enforce_update_ownership: bool = True):
        self.store = store if store is not None else TaskStore()
        self.registry = registry if registry is not None else ConnectionRegistry()
        self.enforce_update_ownership = enforce_update_ownership

    def handle(self, connection: str, command: Command) -> List[Push]:
        """Ponto único de despacho dos comandos"""
        if isinstance(command, Ping):
            return []

        if isinstance(command, RegisterUser):
            return self._register(connection, command)

        user_id = self.registry.user_for(connection)
        if user_id is None:
            logger.warning(
                f"⚠️ {type(command).__name__} recebido sem registro de usuário ({connection})"
            )
            return []

        if isinstance(command, CreateTask):
            return self._create(user_id, command)
        if isinstance(command, UpdateTask):
            return self._update(user_id, command)
        if isinstance(command, MoveTask):
            return self._move(user_id, command)
        if isinstance(command, DeleteTask):
            return self._delete(user_id, command)

        raise TypeError(f"Comando não suportado: {command!r}")

    def disconnect(self, connection: str) -> Optional[str]:
        user_id = self.registry.unregister(connection)
        if user_id is not None:
            remaining = len(self.registry.connections_for(user_id))
            logger.info(f"🔌 Usuário {user_id} desconectou. Sockets ativos: {remaining}")
        return user_id

    def broadcast(self, user_id: str) -> List[Push]:
        """Lista completa do usuário para cada conexão viva dele"""
        return [
            Push(connection=connection, tasks=self.store.tasks_for(user_id))
            for connection in self.registry.connections_for(user_id)
        ]

    # === Handlers ===

    def _register(self, connection: str, command: RegisterUser) -> List[Push]:
        self.registry.register(connection, command.user_id)

        active = len(self.registry.connections_for(command.user_id))
        logger.info(f"✅ Usuário {command.user_id} registrado. Sockets ativos: {active}")

        # Sync apenas para a conexão que acabou de se registrar
        return [Push(connection=connection, tasks=self.store.tasks_for(command.user_id))]

    def _create(self, user_id: str, command: CreateTask) -> List[Push]:
        task = self.store.create(user_id, command.fields)
        logger.info(f"📝 Tarefa {task['id']} criada para {user_id}")
        return self.broadcast(user_id)

    def _update(self, user_id: str, command: UpdateTask) -> List[Push]:
        task = self.store.get(command.task_id)
        if task is None:
            logger.debug(f"Update ignorado - tarefa {command.task_id} não encontrada")
            return []

        if self.enforce_update_ownership and task['userId'] != user_id:
            logger.warning(f"⚠️ Update ignorado - {user_id} não é dono da tarefa {command.task_id}")
            return []

        self.store.update(command.task_id, command.fields)
        logger.info(f"✏️ Tarefa {command.task_id} atualizada por {user_id}")

        # A lista que mudou é a do dono da tarefa
        return self.broadcast(task['userId'])

    def _move(self, user_id: str, command: MoveTask) -> List[Push]:
        task = self.store.move(user_id, command.task_id, command.column)
        if task is None:
            logger.debug(f"Move ignorado - tarefa {command.task_id} ausente ou de outro usuário")
            return []

        logger.info(f"➡️ Tarefa {command.task_id} movida para '{command.column}' por {user_id}")
        return self.broadcast(user_id)

    def _delete(self, user_id: str, command: DeleteTask) -> List[Push]:
        task = self.store.delete(user_id, command.task_id)
        if task is None:
            logger.debug(f"Delete ignorado - tarefa {command.task_id} ausente ou de outro usuário")
            return []

        logger.info(f"🗑️ Tarefa {command.task_id} removida por {user_id}")
        return self.broadcast(user_id)
