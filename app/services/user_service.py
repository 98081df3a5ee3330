import re
from contextlib import contextmanager

from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.data.database import is_statement_timeout
from app.data.models.user import UserModel
from app.domain.errors import (
    InvalidUserIdError,
    QueryTimeoutError,
    StorageError,
    UserNotFoundError,
)
from app.domain.schemas import UserIn, UserRead
from app.repos.user_repo import UserRepo
from app.utils.logging import get_logger

logger = get_logger(__name__)

_ID_RE = re.compile(r"[+-]?[0-9]+")
_MAX_ID = 2**63 - 1


def parse_user_id(raw_id: str) -> int:
    """Id z path przychodzi jako tekst. Niepoprawny format to 400, a nie 404."""
    if not _ID_RE.fullmatch(raw_id):
        raise InvalidUserIdError(raw_id)
    user_id = int(raw_id)
    if abs(user_id) > _MAX_ID:
        raise InvalidUserIdError(raw_id)
    return user_id


class UserService:
    """
    Use case'y dla domeny users.
    Błędy bazy są ograniczone do jednego requestu: rollback, log i StorageError
    (albo QueryTimeoutError, gdy baza przerwała zapytanie po limicie czasu).
    """

    def __init__(self, db: Session):
        self.repo = UserRepo(db)

    @contextmanager
    def _storage_errors(self, action: str):
        try:
            yield
        except SQLAlchemyError as e:
            timed_out = isinstance(e, OperationalError) and is_statement_timeout(e)
            if timed_out:
                logger.warning(f"Statement timeout during {action}")
            else:
                logger.exception(f"Database error during {action}")
            try:
                self.repo.rollback()
            except SQLAlchemyError as rollback_error:
                logger.warning(f"Rollback after failed {action} also failed: {rollback_error}")
            if timed_out:
                raise QueryTimeoutError(f"statement timeout during {action}") from e
            raise StorageError(f"database error during {action}") from e

    # =====================================================
    # QUERY
    # =====================================================
    def list_users(self) -> list[UserRead]:
        with self._storage_errors("list"):
            users = self.repo.list_users()
        return [UserRead.model_validate(u) for u in users]

    def get_user(self, raw_id: str) -> UserRead:
        user_id = parse_user_id(raw_id)
        with self._storage_errors("get"):
            user = self.repo.get_user(user_id)
        if not user:
            logger.debug(f"User {user_id} not found")
            raise UserNotFoundError(user_id)
        return UserRead.model_validate(user)

    # =====================================================
    # COMMANDS
    # =====================================================
    def create_user(self, payload: UserIn) -> UserRead:
        with self._storage_errors("create"):
            created = self.repo.create_user(UserModel(name=payload.name, email=payload.email))
        logger.info(f"Created user {created.id}")
        return UserRead.model_validate(created)

    def update_user(self, raw_id: str, payload: UserIn) -> UserRead:
        user_id = parse_user_id(raw_id)
        with self._storage_errors("update"):
            rowcount = self.repo.update_user(user_id, payload.name, payload.email)
        if rowcount == 0:
            raise UserNotFoundError(user_id)
        logger.info(f"Updated user {user_id}")
        return UserRead(id=user_id, name=payload.name, email=payload.email)

    def delete_user(self, raw_id: str) -> None:
        user_id = parse_user_id(raw_id)
        with self._storage_errors("delete"):
            rowcount = self.repo.delete_user(user_id)
        if rowcount == 0:
            raise UserNotFoundError(user_id)
        logger.info(f"Deleted user {user_id}")
