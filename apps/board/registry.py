# apps/board/registry.py

import logging
from typing import Dict, List, Optional, Set

logger = logging.getLogger(__name__)


class ConnectionRegistry:
    """
    Mapa usuário -> conexões vivas

    Uma conexão é identificada pelo channel_name do consumer. Quando o
    último socket de um usuário sai, a entrada do usuário é removida.
    """

    def __init__(self):
        self._connections: Dict[str, Set[str]] = {}
        self._owners: Dict[str, str] = {}

    def register(self, connection: str, user_id: str):
        """
        Associa a conexão ao usuário

        Uma conexão já associada a outro usuário é movida para o novo.
        """
        previous = self._owners.get(connection)
        if previous is not None and previous != user_id:
            self._discard(connection, previous)

        self._owners[connection] = user_id
        self._connections.setdefault(user_id, set()).add(connection)

    def unregister(self, connection: str) -> Optional[str]:
        """Remove a conexão; chamar de novo não tem efeito"""
        user_id = self._owners.pop(connection, None)
        if user_id is not None:
            self._discard(connection, user_id)
        return user_id

    def user_for(self, connection: str) -> Optional[str]:
        return self._owners.get(connection)

    def connections_for(self, user_id: str) -> List[str]:
        return sorted(self._connections.get(user_id, ()))

    def users(self) -> List[str]:
        return list(self._connections)

    def _discard(self, connection: str, user_id: str):
        sockets = self._connections.get(user_id)
        if sockets is None:
            return

        sockets.discard(connection)
        if not sockets:
            del self._connections[user_id]
            logger.debug(f"Usuário {user_id} sem conexões ativas - entrada removida")
