#bazaar/api/routers/carts.py
from typing import List

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from bazaar.api.deps import get_current_user, http_error
from bazaar.data.database import get_db
from bazaar.data.models.user import UserModel
from bazaar.domain.errors import ConflictError, NotFoundError, PermissionDenied, ValidationError
from bazaar.domain.schemas import CartItemIn, CartItemOut, CartLineOut, CartQuantityIn
from bazaar.services.cart_service import CartService, cart_total

router = APIRouter(prefix="/api/cart", tags=["cart"])

CART_TOTAL_HEADER = "X-Cart-Total"


def get_service(db: Session):
    return CartService(db)


@router.post("", response_model=CartItemOut, status_code=201)
def add_item(
    payload: CartItemIn,
    user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        return svc.add_product(user, payload.product_id, payload.quantity)
    except ValidationError as e:
        raise http_error(400, e)
    except PermissionDenied as e:
        raise http_error(403, e)
    except NotFoundError as e:
        raise http_error(404, e)
    except ConflictError as e:
        raise http_error(409, e)


@router.get("", response_model=List[CartLineOut])
def get_cart(
    response: Response,
    user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Lista pozycji z aktualnym produktem, total na zywo w naglowku X-Cart-Total.
    """
    items = get_service(db).get_cart(user.id)
    response.headers[CART_TOTAL_HEADER] = str(cart_total(items))
    return items


@router.patch("/{item_id}", response_model=CartItemOut)
def update_quantity(
    item_id: int,
    payload: CartQuantityIn,
    user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        return svc.update_quantity(user.id, item_id, payload.quantity)
    except ValidationError as e:
        raise http_error(400, e)
    except NotFoundError as e:
        raise http_error(404, e)


@router.delete("/{item_id}", status_code=204)
def remove_item(
    item_id: int,
    user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    #idempotentne, brak pozycji to tez 204
    get_service(db).remove_item(user.id, item_id)
    return Response(status_code=204)


@router.delete("", status_code=204)
def clear_cart(
    user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    get_service(db).clear_cart(user.id)
    return Response(status_code=204)
