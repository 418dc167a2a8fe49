"""Interface AuthProvider - Puerto hacia el sistema de autenticación."""

from abc import ABC, abstractmethod


class AuthProvider(ABC):
    """
    Colaborador externo que conoce al usuario actual.

    El ledger nunca lo consulta directamente: la capa de entrada resuelve el
    usuario y lo pasa explícitamente a cada operación.
    """

    @abstractmethod
    def current_user_id(self) -> str | None:
        raise NotImplementedError

    def is_authenticated(self) -> bool:
        return self.current_user_id() is not None


class StaticAuthProvider(AuthProvider):
    """Implementación fija, útil para tests y para adaptar cabeceras HTTP."""

    def __init__(self, user_id: str | None = None):
        self._user_id = user_id

    def current_user_id(self) -> str | None:
        return self._user_id
