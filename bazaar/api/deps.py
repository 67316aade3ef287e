# bazaar/api/deps.py
from functools import lru_cache

from fastapi import Depends, Header, HTTPException
from sqlalchemy.orm import Session

from bazaar.data.database import get_db
from bazaar.data.models.user import UserModel
from bazaar.domain.errors import DomainError, ValidationError
from bazaar.repos.user_repo import UserRepo
from bazaar.services.lock_service import LockService


def get_current_user(
    x_user_id: int | None = Header(None),
    db: Session = Depends(get_db),
) -> UserModel:
    """
    Tozsamosc z naglowka X-User-Id (zamiast sesji providera auth).
    user_id do logow binduje middleware w main.py.
    """
    if x_user_id is None:
        raise HTTPException(status_code=401, detail="Missing X-User-Id header")

    user = UserRepo(db).get_user(x_user_id)
    if not user:
        raise HTTPException(status_code=401, detail="Unknown user")

    return user


@lru_cache(maxsize=1)
def get_lock_service() -> LockService:
    #jeden klient redis (pula polaczen) na proces
    return LockService()


def http_error(status_code: int, e: DomainError) -> HTTPException:
    if isinstance(e, ValidationError) and e.field:
        return HTTPException(status_code=status_code, detail={"message": str(e), "field": e.field})
    return HTTPException(status_code=status_code, detail=str(e))
