from sqlalchemy import delete, select, update
from sqlalchemy.orm import Session
from app.data.models.user import UserModel

class UserRepo:
    """Każda metoda wykonuje jedno zapytanie SQL na tabeli users."""

    def __init__(self, db: Session):
        self.db = db

    def list_users(self) -> list[UserModel]:
        # bez ORDER BY, kolejność zależy od bazy
        return list(self.db.scalars(select(UserModel)).all())

    def get_user(self, user_id: int) -> UserModel | None:
        return self.db.get(UserModel, user_id)

    def create_user(self, user: UserModel) -> UserModel:
        self.db.add(user)
        self.db.commit()
        return user

    def update_user(self, user_id: int, name: str, email: str) -> int:
        stmt = (
            update(UserModel)
            .where(UserModel.id == user_id)
            .values(name=name, email=email)
            .execution_options(synchronize_session=False)
        )
        result = self.db.execute(stmt)
        self.db.commit()
        return result.rowcount

    def delete_user(self, user_id: int) -> int:
        stmt = (
            delete(UserModel)
            .where(UserModel.id == user_id)
            .execution_options(synchronize_session=False)
        )
        result = self.db.execute(stmt)
        self.db.commit()
        return result.rowcount

    def rollback(self):
        self.db.rollback()
