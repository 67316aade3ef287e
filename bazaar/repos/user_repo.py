from sqlalchemy import select

from bazaar.data.models.user import UserModel
from bazaar.repos.base import BaseRepo


class UserRepo(BaseRepo):
    def get_user(self, user_id: int) -> UserModel | None:
        return self.db.get(UserModel, user_id)

    def get_by_username(self, username: str) -> UserModel | None:
        return self.db.execute(
            select(UserModel).where(UserModel.username == username)
        ).scalar_one_or_none()

    def list_by_role(self, role: str) -> list[UserModel]:
        return list(
            self.db.execute(
                select(UserModel).where(UserModel.role == role).order_by(UserModel.name)
            ).scalars()
        )

    def create_user(self, user: UserModel) -> UserModel:
        self.db.add(user)
        self.commit()
        return self.refresh(user)

    def save(self, user: UserModel) -> UserModel:
        self.commit()
        return self.refresh(user)
