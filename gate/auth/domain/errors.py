from __future__ import annotations


class AuthProviderError(Exception):
    """Falla del proveedor: intercambio de token o llamada a su API."""

    def __init__(self, provider: str, message: str, status: int | None = None) -> None:
        super().__init__(f"{provider}: {message}")
        self.provider = provider
        self.status = status


class SessionError(Exception):
    """No hay identificador de usuario al (de)serializar la sesión."""
