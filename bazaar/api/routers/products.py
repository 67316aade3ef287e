# bazaar/api/routers/products.py
from typing import List

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from bazaar.api.deps import get_current_user, http_error
from bazaar.data.database import get_db
from bazaar.data.models.user import UserModel
from bazaar.domain.enums import ProductCategory
from bazaar.domain.errors import NotFoundError, PermissionDenied
from bazaar.domain.schemas import ProductCreate, ProductOut
from bazaar.services.product_service import ProductService

router = APIRouter(prefix="/api/products", tags=["products"])


def get_service(db: Session):
    return ProductService(db)


@router.get("", response_model=List[ProductOut])
def list_products(
    category: ProductCategory | None = Query(None),
    wholesaler_id: int | None = Query(None, alias="wholesalerId"),
    db: Session = Depends(get_db),
):
    return get_service(db).list_products(category=category, wholesaler_id=wholesaler_id)


@router.get("/{product_id}", response_model=ProductOut)
def get_product(product_id: int, db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        return svc.get_product(product_id)
    except NotFoundError as e:
        raise http_error(404, e)


@router.post("", response_model=ProductOut, status_code=201)
def create_product(
    payload: ProductCreate,
    user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        return svc.create_product(user, payload)
    except PermissionDenied as e:
        raise http_error(403, e)


@router.delete("/{product_id}", status_code=204)
def delete_product(
    product_id: int,
    user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        svc.delete_product(user, product_id)
    except PermissionDenied as e:
        raise http_error(403, e)
    except NotFoundError as e:
        raise http_error(404, e)
    return Response(status_code=204)
