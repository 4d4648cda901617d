# apps/board/session.py

"""
Sessão do cliente (uma por aba)

Mantém o espelho da última lista recebida em sync:tasks e deriva todo o
estado de exibição (filtros, ordenação, estatísticas, exportação CSV).
Ações do usuário apenas emitem comandos; o espelho só muda quando o
servidor reenviar a lista.
"""

import base64
import copy
import csv
import io
import uuid
from datetime import datetime, timezone as dt_timezone
from typing import Any, Callable, Dict, List, Optional

from django.utils import timezone
from django.utils.dateparse import parse_date, parse_datetime

from .commands import (
    COLUMNS, DONE, REGISTER_USER, TASK_CREATE, TASK_DELETE, TASK_MOVE, TASK_UPDATE
)

Emit = Callable[[str, Any], None]

TODOS = 'All'

# Ordem de exibição ao ordenar por prioridade
PRIORIDADE_RANK = {'High': 1, 'Medium': 2, 'Low': 3}

CSV_CABECALHO = ['Title', 'Description', 'Status', 'Priority', 'Category', 'Due Date', 'Created Date']


def _parse_momento(valor) -> Optional[datetime]:
    """Interpreta datas do cliente (ISO date ou datetime); None se inválida"""
    if not valor or not isinstance(valor, str):
        return None
    try:
        momento = parse_datetime(valor)
        if momento is None:
            dia = parse_date(valor)
            if dia is None:
                return None
            momento = datetime(dia.year, dia.month, dia.day)
    except ValueError:
        return None

    if timezone.is_naive(momento):
        momento = timezone.make_aware(momento, dt_timezone.utc)
    return momento


def _chave_prazo(task):
    # Sem prazo vão para o fim
    prazo = _parse_momento(task.get('dueDate'))
    if prazo is None:
        return (1, datetime.min.replace(tzinfo=dt_timezone.utc))
    return (0, prazo)


def _horas(valor) -> int:
    """Equivalente tolerante a parseInt: '3h' -> 3, inválido -> 0"""
    if isinstance(valor, (int, float)):
        return int(valor)
    digitos = ''
    for caractere in str(valor or '').strip():
        if caractere.isdigit() or (caractere == '-' and not digitos):
            digitos += caractere
        else:
            break
    try:
        return int(digitos)
    except ValueError:
        return 0


class ClientSession:
    """
    Espelho local das tarefas de um usuário

    Args:
        emit: função que envia um evento ao relay, emit(evento, payload)
    """

    def __init__(self, emit: Emit):
        self._emit = emit
        self.tasks: List[Dict[str, Any]] = []
        self.loading = True

    # === Sincronização ===

    def register(self, user_id: str):
        if user_id:
            self._emit(REGISTER_USER, user_id)

    def apply_sync(self, tasks: List[Dict[str, Any]]):
        """Substitui o espelho inteiro pela lista do servidor"""
        self.tasks = list(tasks)
        self.loading = False

    def find(self, task_id: str) -> Optional[Dict[str, Any]]:
        return next((task for task in self.tasks if task.get('id') == task_id), None)

    # === Comandos ===

    def create_task(self, title: str, description: str = '', priority: str = 'Medium',
                    category: str = 'Feature', **extra) -> bool:
        if not title or not title.strip():
            return False

        payload = {
            'title': title,
            'description': description,
            'priority': priority,
            'category': category,
            'column': extra.pop('column', COLUMNS[0]),
        }
        payload.update(extra)
        self._emit(TASK_CREATE, payload)
        return True

    def update_task(self, task_id: str, **fields):
        self._emit(TASK_UPDATE, {'id': task_id, **fields})

    def move_task(self, task_id: str, column: str) -> bool:
        """Usado pelo drag-and-drop; soltar na mesma coluna não envia nada"""
        task = self.find(task_id)
        if task is None or task.get('column') == column:
            return False
        self._emit(TASK_MOVE, {'id': task_id, 'column': column})
        return True

    def change_status(self, task_id: str, column: str):
        self.update_task(task_id, column=column)

    def delete_task(self, task_id: str):
        self._emit(TASK_DELETE, task_id)

    def duplicate_task(self, task_id: str) -> bool:
        task = self.find(task_id)
        if task is None:
            return False

        copia = copy.deepcopy(task)
        copia.pop('id', None)
        copia.pop('userId', None)
        copia['title'] = f"{task.get('title', '')} (Copy)"
        self._emit(TASK_CREATE, copia)
        return True

    def toggle_favorite(self, task_id: str):
        task = self.find(task_id) or {}
        self.update_task(task_id, isFavorite=not task.get('isFavorite'))

    def toggle_archive(self, task_id: str):
        task = self.find(task_id) or {}
        self.update_task(task_id, archived=not task.get('archived'))

    def attach_file(self, task_id: str, name: str, mime_type: str, content: bytes) -> bool:
        """
        Anexa arquivo à tarefa

        O conteúdo vai inline como data URL; a lista enviada é a atual
        mais o novo anexo.
        """
        task = self.find(task_id)
        if task is None:
            return False

        encoded = base64.b64encode(content).decode('ascii')
        anexo = {
            'id': str(uuid.uuid4()),
            'name': name,
            'type': mime_type,
            'data': f"data:{mime_type};base64,{encoded}",
        }
        self.update_task(task_id, attachments=list(task.get('attachments') or []) + [anexo])
        return True

    def delete_archived(self) -> int:
        arquivadas = [task['id'] for task in self.tasks if task.get('archived')]
        for task_id in arquivadas:
            self.delete_task(task_id)
        return len(arquivadas)

    # === Projeções ===

    def visible_tasks(self, search: str = '', priority: str = TODOS, category: str = TODOS,
                      show_archived: bool = False, sort_by: str = 'created') -> List[Dict[str, Any]]:
        """
        Tarefas filtradas e ordenadas para exibição

        show_archived alterna entre a visão de arquivadas e a visão normal.
        """
        termo = (search or '').lower()

        def corresponde(task):
            if bool(task.get('archived')) != show_archived:
                return False
            titulo = (task.get('title') or '').lower()
            descricao = (task.get('description') or '').lower()
            if termo not in titulo and termo not in descricao:
                return False
            if priority != TODOS and task.get('priority') != priority:
                return False
            if category != TODOS and task.get('category') != category:
                return False
            return True

        filtradas = [task for task in self.tasks if corresponde(task)]

        if sort_by == 'priority':
            filtradas.sort(key=lambda t: PRIORIDADE_RANK.get(t.get('priority'), len(PRIORIDADE_RANK) + 1))
        elif sort_by == 'dueDate':
            filtradas.sort(key=_chave_prazo)
        elif sort_by == 'created':
            epoch = datetime.fromtimestamp(0, tz=dt_timezone.utc)
            filtradas.sort(key=lambda t: _parse_momento(t.get('createdAt')) or epoch, reverse=True)

        return filtradas

    def tasks_in_column(self, column: str, **filtros) -> List[Dict[str, Any]]:
        return [task for task in self.visible_tasks(**filtros) if task.get('column') == column]

    def categories(self) -> List[str]:
        """Categorias distintas, na ordem em que aparecem"""
        vistas = []
        for task in self.tasks:
            categoria = task.get('category')
            if categoria not in vistas:
                vistas.append(categoria)
        return vistas

    def progress_stats(self) -> Dict[str, int]:
        ativas = [task for task in self.tasks if not task.get('archived')]
        concluidas = [task for task in ativas if task.get('column') == DONE]
        total = len(ativas)
        return {
            'total': total,
            'done': len(concluidas),
            'percentage': int(len(concluidas) * 100 / total + 0.5) if total else 0,
            'archived': len(self.tasks) - total,
        }

    def task_stats(self, now: Optional[datetime] = None) -> Dict[str, Any]:
        agora = now or timezone.now()
        ativas = [task for task in self.tasks if not task.get('archived')]

        def atrasada(task):
            if task.get('column') == DONE:
                return False
            prazo = _parse_momento(task.get('dueDate'))
            return prazo is not None and prazo < agora

        return {
            'total': len(ativas),
            'favorite': len([task for task in ativas if task.get('isFavorite')]),
            'totalHours': sum(_horas(task.get('timeEstimate')) for task in ativas),
            'overdue': len([task for task in ativas if atrasada(task)]),
            'byPriority': {
                'high': len([task for task in ativas if task.get('priority') == 'High']),
                'medium': len([task for task in ativas if task.get('priority') == 'Medium']),
                'low': len([task for task in ativas if task.get('priority') == 'Low']),
            },
        }

    def export_csv(self, show_archived: bool = False) -> str:
        """CSV das tarefas visíveis (todas, se show_archived)"""
        tarefas = self.tasks if show_archived else [t for t in self.tasks if not t.get('archived')]

        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator='\n')
        writer.writerow(CSV_CABECALHO)
        for task in tarefas:
            writer.writerow([
                task.get('title', ''),
                task.get('description') or '',
                task.get('column', ''),
                task.get('priority', ''),
                task.get('category', ''),
                task.get('dueDate') or 'N/A',
                task.get('createdAt') or 'N/A',
            ])
        return buffer.getvalue()
