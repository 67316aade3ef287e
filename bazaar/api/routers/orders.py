# bazaar/api/routers/orders.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from bazaar.api.deps import get_current_user, get_lock_service, http_error
from bazaar.data.database import get_db
from bazaar.data.models.user import UserModel
from bazaar.domain.enums import OrderStatus
from bazaar.domain.errors import (
    ConflictError,
    InvalidTransition,
    NotFoundError,
    PermissionDenied,
    UnauthorizedTransition,
    ValidationError,
)
from bazaar.domain.lifecycle import STATUS_METADATA, allowed_targets
from bazaar.domain.schemas import (
    CheckoutIn,
    OrderCreate,
    OrderOut,
    StatusInfoOut,
    StatusUpdate,
)
from bazaar.services.lock_service import LockService
from bazaar.services.order_service import OrderService

router = APIRouter(prefix="/api/orders", tags=["orders"])
status_router = APIRouter(prefix="/api/order-statuses", tags=["orders"])


def get_service(db: Session, lock_service: LockService):
    return OrderService(db, lock_service)


@router.post("", response_model=OrderOut, status_code=201)
def create_order(
    payload: OrderCreate,
    user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
    lock_service: LockService = Depends(get_lock_service),
):
    """
    Tworzy jedno zamowienie u jednego sprzedawcy (grupa z koszyka).
    """
    svc = get_service(db, lock_service)
    try:
        return svc.create_order(user, payload)
    except ValidationError as e:
        raise http_error(400, e)
    except PermissionDenied as e:
        raise http_error(403, e)
    except NotFoundError as e:
        raise http_error(404, e)


@router.post("/checkout", response_model=List[OrderOut], status_code=201)
def checkout(
    payload: CheckoutIn,
    user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
    lock_service: LockService = Depends(get_lock_service),
):
    """
    Zamawia caly koszyk: jedno zamowienie na sprzedawce, atomowo.
    Pusty koszyk -> pusta lista.
    """
    svc = get_service(db, lock_service)
    try:
        return svc.checkout(user, payload.order_method)
    except PermissionDenied as e:
        raise http_error(403, e)
    except ConflictError as e:
        raise http_error(409, e)


@router.get("", response_model=List[OrderOut])
def list_orders(
    user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
    lock_service: LockService = Depends(get_lock_service),
):
    return get_service(db, lock_service).list_orders(user)


@router.get("/{order_id}", response_model=OrderOut)
def get_order(
    order_id: int,
    user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
    lock_service: LockService = Depends(get_lock_service),
):
    svc = get_service(db, lock_service)
    try:
        return svc.get_order(user, order_id)
    except PermissionDenied as e:
        raise http_error(403, e)
    except NotFoundError as e:
        raise http_error(404, e)


@router.put("/{order_id}/status", response_model=OrderOut)
def update_status(
    order_id: int,
    payload: StatusUpdate,
    user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
    lock_service: LockService = Depends(get_lock_service),
):
    svc = get_service(db, lock_service)
    try:
        return svc.transition(user, order_id, payload.status)
    except NotFoundError as e:
        raise http_error(404, e)
    except UnauthorizedTransition as e:
        raise http_error(403, e)
    except InvalidTransition as e:
        raise http_error(409, e)


@status_router.get("", response_model=List[StatusInfoOut])
def list_statuses():
    return [
        StatusInfoOut(
            status=status,
            label=info.label,
            icon=info.icon,
            color=info.color,
            terminal=info.terminal,
            next_statuses=[s for s in OrderStatus if s in allowed_targets(status)],
        )
        for status, info in STATUS_METADATA.items()
    ]
