# apps/board/commands.py

"""
Comandos do protocolo de sincronização de tarefas

Cada frame recebido pelo WebSocket tem o formato {"type": <evento>, "data": <payload>}
e é convertido em uma das variantes abaixo antes de chegar ao relay.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Union

# === EVENTOS DO PROTOCOLO ===

REGISTER_USER = 'register:user'
TASK_CREATE = 'task:create'
TASK_UPDATE = 'task:update'
TASK_MOVE = 'task:move'
TASK_DELETE = 'task:delete'
PING = 'ping'

SYNC_TASKS = 'sync:tasks'
PONG = 'pong'

# === COLUNAS DO BOARD ===

TODO = 'To Do'
IN_PROGRESS = 'In Progress'
DONE = 'Done'

COLUMNS = (TODO, IN_PROGRESS, DONE)

# Campos atribuídos pelo servidor, nunca aceitos do cliente na criação
SERVER_FIELDS = ('id', 'userId')


class MalformedCommand(ValueError):
    """Frame recebido não corresponde a nenhum comando válido"""


@dataclass(frozen=True)
class RegisterUser:
    user_id: str


@dataclass(frozen=True)
class CreateTask:
    fields: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class UpdateTask:
    task_id: str
    fields: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class MoveTask:
    task_id: str
    column: str


@dataclass(frozen=True)
class DeleteTask:
    task_id: str


@dataclass(frozen=True)
class Ping:
    pass


Command = Union[RegisterUser, CreateTask, UpdateTask, MoveTask, DeleteTask, Ping]


def parse_command(frame: Any) -> Command:
    """
    Converte um frame JSON já decodificado em um comando

    Raises:
        MalformedCommand: tipo desconhecido ou payload com formato inválido
    """
    if not isinstance(frame, dict):
        raise MalformedCommand('frame deve ser um objeto JSON')

    event = frame.get('type')
    data = frame.get('data')

    if event == PING:
        return Ping()

    if event == REGISTER_USER:
        if not isinstance(data, str) or not data:
            raise MalformedCommand('register:user exige o id do usuário')
        return RegisterUser(user_id=data)

    if event == TASK_CREATE:
        if not isinstance(data, dict):
            raise MalformedCommand('task:create exige um objeto')
        fields = {key: value for key, value in data.items() if key not in SERVER_FIELDS}
        return CreateTask(fields=fields)

    if event == TASK_UPDATE:
        task_id = _task_id_from(data, event)
        fields = {key: value for key, value in data.items() if key != 'id'}
        return UpdateTask(task_id=task_id, fields=fields)

    if event == TASK_MOVE:
        task_id = _task_id_from(data, event)
        column = _check_column(data.get('column'))
        return MoveTask(task_id=task_id, column=column)

    if event == TASK_DELETE:
        if not isinstance(data, str) or not data:
            raise MalformedCommand('task:delete exige o id da tarefa')
        return DeleteTask(task_id=data)

    raise MalformedCommand(f'evento desconhecido: {event!r}')


def _task_id_from(data: Any, event: str) -> str:
    if not isinstance(data, dict):
        raise MalformedCommand(f'{event} exige um objeto')
    task_id = data.get('id')
    if not isinstance(task_id, str) or not task_id:
        raise MalformedCommand(f'{event} exige o id da tarefa')
    return task_id


def _check_column(column: Any) -> str:
    if column not in COLUMNS:
        raise MalformedCommand(f'coluna inválida: {column!r}')
    return column
