# app/domain/errors.py


class UserServiceError(Exception):
    """Bazowy błąd warstwy serwisowej."""


class InvalidUserIdError(UserServiceError):
    def __init__(self, raw_id: str):
        super().__init__(f"invalid user id: {raw_id!r}")
        self.raw_id = raw_id


class UserNotFoundError(UserServiceError):
    def __init__(self, user_id: int):
        super().__init__(f"user {user_id} not found")
        self.user_id = user_id


class StorageError(UserServiceError):
    """Błąd bazy danych w trakcie obsługi pojedynczego requestu."""


class QueryTimeoutError(UserServiceError):
    """Baza przerwała zapytanie po przekroczeniu limitu czasu (nic nie zostało zapisane)."""
