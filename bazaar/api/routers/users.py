from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from bazaar.api.deps import get_current_user, http_error
from bazaar.data.database import get_db
from bazaar.data.models.user import UserModel
from bazaar.domain.errors import ValidationError
from bazaar.domain.schemas import UserCreate, UserRead, UserUpdate
from bazaar.services.user_service import UserService

router = APIRouter(prefix="/api", tags=["users"])


@router.post("/users", response_model=UserRead, status_code=201)
def register(payload: UserCreate, db: Session = Depends(get_db)):
    service = UserService(db)
    try:
        return service.register(payload)
    except ValidationError as e:
        raise http_error(400, e)


@router.get("/users/me", response_model=UserRead)
def get_me(user: UserModel = Depends(get_current_user)):
    return user


@router.patch("/users/me", response_model=UserRead)
def update_me(
    payload: UserUpdate,
    user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    service = UserService(db)
    try:
        return service.update_profile(user, payload)
    except ValidationError as e:
        raise http_error(400, e)


@router.get("/wholesalers", response_model=List[UserRead])
def list_wholesalers(db: Session = Depends(get_db)):
    return UserService(db).list_wholesalers()
