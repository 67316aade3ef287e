# bazaar/domain/errors.py


class DomainError(Exception):
    pass


class ValidationError(DomainError):
    """Niepoprawne dane wejsciowe, odrzucone przed jakakolwiek zmiana stanu."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field


class NotFoundError(DomainError):
    pass


class PermissionDenied(DomainError):
    pass


class InvalidTransition(DomainError):
    """Niedozwolona zmiana statusu zamowienia, stan bez zmian."""


class UnauthorizedTransition(InvalidTransition):
    """Zmiana statusu przez niewlasciwego aktora (nie sprzedawca / nie kupujacy)."""


class ConflictError(DomainError):
    pass


class PersistenceError(DomainError):
    pass
