from datetime import datetime, timezone

from sqlalchemy import delete, select, update
from sqlalchemy.orm import Session

from storefront.data.models.user import UserModel


class UserRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_user(self, user_id: int) -> UserModel | None:
        return self.db.get(UserModel, user_id)

    def get_by_email(self, email: str) -> UserModel | None:
        return self.db.execute(select(UserModel).where(UserModel.email == email)).scalars().first()

    def get_users(self, user_ids) -> dict[int, UserModel]:
        ids = set(user_ids)
        if not ids:
            return {}
        rows = self.db.execute(select(UserModel).where(UserModel.id.in_(ids))).scalars()
        return {u.id: u for u in rows}

    def list_users(self) -> list[UserModel]:
        return list(self.db.execute(select(UserModel).order_by(UserModel.id)).scalars())

    def update_fields(self, user_id: int, fields: dict) -> int:
        res = self.db.execute(
            update(UserModel)
            .where(UserModel.id == user_id)
            .values(**fields, updated_at=datetime.now(timezone.utc))
        )
        return res.rowcount

    def delete_user(self, user_id: int) -> int:
        return self.db.execute(delete(UserModel).where(UserModel.id == user_id)).rowcount

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
