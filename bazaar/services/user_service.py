from pydantic.alias_generators import to_camel
from sqlalchemy.orm import Session

from bazaar.data.models.user import UserModel
from bazaar.domain.enums import Role
from bazaar.domain.errors import NotFoundError, ValidationError
from bazaar.domain.schemas import UserCreate, UserRead, UserUpdate
from bazaar.repos.user_repo import UserRepo
from bazaar.utils.logging import get_logger

logger = get_logger(__name__)

_REQUIRED_PROFILE_FIELDS = ("name", "mobile", "preferred_language")


class UserService:
    def __init__(self, db: Session):
        self.repo = UserRepo(db)

    def register(self, payload: UserCreate) -> UserRead:
        if self.repo.get_by_username(payload.username):
            raise ValidationError("Username already taken", field="username")

        user = UserModel(
            username=payload.username,
            name=payload.name,
            mobile=payload.mobile,
            address=payload.address,
            role=payload.role.value,
            document_type=payload.document_type.value if payload.document_type else None,
            document_number=payload.document_number,
            document_verified=False,
            preferred_language=payload.preferred_language.value,
        )
        created = self.repo.create_user(user)
        logger.info(f"Registered {created.role} {created.id} ({created.username})")
        return UserRead.model_validate(created)

    def get_user(self, user_id: int) -> UserModel:
        user = self.repo.get_user(user_id)
        if not user:
            raise NotFoundError("User not found")
        return user

    def update_profile(self, user: UserModel, payload: UserUpdate) -> UserRead:
        # null czysci pole, ale tylko opcjonalne (address)
        changes = payload.model_dump(exclude_unset=True)
        for field in _REQUIRED_PROFILE_FIELDS:
            if field in changes and changes[field] is None:
                raise ValidationError(f"{field} cannot be empty", field=to_camel(field))

        for field, value in changes.items():
            setattr(user, field, getattr(value, "value", value))

        updated = self.repo.save(user)
        logger.info(f"Profile of user {user.id} updated: {sorted(changes)}")
        return UserRead.model_validate(updated)

    def list_wholesalers(self) -> list[UserRead]:
        return [
            UserRead.model_validate(u)
            for u in self.repo.list_by_role(Role.WHOLESALER.value)
        ]
