# bazaar/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict
from pydantic.alias_generators import to_camel
from typing import List
from decimal import Decimal
from datetime import datetime

from bazaar.utils.settings import DEFAULT_LANGUAGE
from bazaar.domain.enums import (
    DocumentType,
    Language,
    OrderMethod,
    OrderStatus,
    ProductCategory,
    ProductUnit,
    Role,
)


class ApiModel(BaseModel):
    """JSON w camelCase (productId, totalAmount), wejscie przyjmuje tez snake_case."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# users

class UserCreate(ApiModel):
    username: str = Field(..., min_length=3, max_length=64)
    name: str = Field(..., min_length=1, max_length=100)
    mobile: str = Field(..., min_length=6, max_length=20)
    address: str | None = None
    role: Role
    document_type: DocumentType | None = None
    document_number: str | None = Field(None, max_length=64)
    preferred_language: Language = Language(DEFAULT_LANGUAGE)


class UserUpdate(ApiModel):
    """Tylko pola profilu, rola i dokumenty sa niezmienne."""

    name: str | None = Field(None, min_length=1, max_length=100)
    mobile: str | None = Field(None, min_length=6, max_length=20)
    address: str | None = None
    preferred_language: Language | None = None


class UserRead(ApiModel):
    id: int
    username: str
    name: str
    mobile: str
    address: str | None = None
    role: Role
    document_type: DocumentType | None = None
    document_verified: bool
    preferred_language: Language
    created_at: datetime


# catalog

class ProductCreate(ApiModel):
    name: str = Field(..., min_length=1, max_length=100)
    name_hi: str | None = Field(None, max_length=100)
    name_te: str | None = Field(None, max_length=100)
    category: ProductCategory
    price: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2)
    unit: ProductUnit
    image_url: str | None = None
    in_stock: bool = True
    min_quantity: int = Field(1, gt=0)


class ProductOut(ApiModel):
    id: int
    name: str
    name_hi: str | None = None
    name_te: str | None = None
    category: ProductCategory
    price: Decimal
    unit: ProductUnit
    wholesaler_id: int | None = None
    image_url: str | None = None
    rating: Decimal
    in_stock: bool
    min_quantity: int
    created_at: datetime


# cart

class CartItemIn(ApiModel):
    product_id: int = Field(..., gt=0)
    quantity: int = Field(..., gt=0)


class CartItemOut(ApiModel):
    id: int
    user_id: int
    product_id: int
    quantity: int
    created_at: datetime


class CartProductOut(ApiModel):
    """Aktualny stan produktu (cena na zywo, nie snapshot)."""

    id: int
    name: str
    name_hi: str | None = None
    name_te: str | None = None
    price: Decimal
    unit: ProductUnit
    wholesaler_id: int | None = None
    in_stock: bool
    is_deleted: bool


class CartLineOut(CartItemOut):
    product: CartProductOut


class CartQuantityIn(ApiModel):
    quantity: int = Field(..., gt=0)


# orders

class OrderItemIn(ApiModel):
    product_id: int = Field(..., gt=0)
    quantity: int = Field(..., gt=0)
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)


class OrderCreate(ApiModel):
    wholesaler_id: int = Field(..., gt=0)
    items: List[OrderItemIn] = Field(..., min_length=1)
    total_amount: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    order_method: OrderMethod = OrderMethod.MANUAL


class CheckoutIn(ApiModel):
    order_method: OrderMethod = OrderMethod.MANUAL


class OrderItemOut(ApiModel):
    product_id: int
    quantity: int
    price: Decimal


class OrderOut(ApiModel):
    id: int
    vendor_id: int
    wholesaler_id: int
    items: List[OrderItemOut]
    total_amount: Decimal
    status: OrderStatus
    order_method: OrderMethod
    created_at: datetime
    updated_at: datetime


class StatusUpdate(ApiModel):
    status: OrderStatus


class StatusInfoOut(ApiModel):
    status: OrderStatus
    label: str
    icon: str
    color: str
    terminal: bool
    next_statuses: List[OrderStatus]


# voice

class VoiceIntentIn(ApiModel):
    transcript: str = Field(..., min_length=1, max_length=500)
    language: Language = Language(DEFAULT_LANGUAGE)


class VoiceIntentOut(ApiModel):
    matched: bool
    key: str | None = None
    name_key: str | None = None
    spoken_name: str | None = None
    locale: str
    confirmation: str | None = None


class VoiceCommandOut(ApiModel):
    key: str
    name_key: str
    spoken_name: str


class VoiceCommandsOut(ApiModel):
    locale: str
    announcement: str
    commands: List[VoiceCommandOut]


class VoiceCartIn(VoiceIntentIn):
    quantity: int = Field(1, gt=0)
    wholesaler_id: int | None = Field(None, gt=0)


class VoiceCartOut(ApiModel):
    intent: VoiceIntentOut
    item: CartItemOut
