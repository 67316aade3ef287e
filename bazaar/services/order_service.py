# bazaar/services/order_service.py
from datetime import datetime, timezone
from decimal import Decimal
from typing import Dict, List, Tuple

import redis
from sqlalchemy.orm import Session

from bazaar.data.models.cart_item import CartItemModel
from bazaar.data.models.order import OrderModel
from bazaar.data.models.order_item import OrderItemModel
from bazaar.data.models.user import UserModel
from bazaar.domain.enums import OrderMethod, OrderStatus, Role
from bazaar.domain.errors import (
    ConflictError,
    InvalidTransition,
    NotFoundError,
    PermissionDenied,
    ValidationError,
)
from bazaar.domain.lifecycle import check_actor, check_transition
from bazaar.domain.schemas import OrderCreate
from bazaar.repos.cart_repo import CartRepo
from bazaar.repos.order_repo import OrderRepo
from bazaar.repos.product_repo import ProductRepo
from bazaar.repos.user_repo import UserRepo
from bazaar.services.lock_service import LockService
from bazaar.utils.logging import get_logger

logger = get_logger(__name__)


def group_by_seller(items: List[CartItemModel]) -> Tuple[Dict[int, List[CartItemModel]], List[CartItemModel]]:
    """
    Dzieli pozycje koszyka na grupy per sprzedawca (kolejnosc pierwszego wystapienia).

    Pozycje z usunietym produktem albo produktem bez sprzedawcy sa odrzucane
    (zwracane osobno, checkout usuwa je z koszyka bez zamowienia). Grupa oprozniona przez odrzucenia nie powstaje wcale.
    """
    groups: Dict[int, List[CartItemModel]] = {}
    dropped: List[CartItemModel] = []

    for item in items:
        product = item.product
        if product is None or product.is_deleted or product.wholesaler_id is None:
            logger.warning(
                f"Cart item {item.id} references unavailable product {item.product_id}, dropping it"
            )
            dropped.append(item)
            continue
        groups.setdefault(product.wholesaler_id, []).append(item)

    skipped = {
        i.product.wholesaler_id
        for i in dropped
        if i.product is not None and i.product.wholesaler_id is not None
    } - groups.keys()
    for seller_id in skipped:
        logger.warning(f"All items for seller {seller_id} were dropped, skipping the group")

    return groups, dropped


def order_total(lines: List[OrderItemModel]) -> Decimal:
    #Decimal, bez floatow
    return sum((line.price * line.quantity for line in lines), Decimal("0.00"))


def build_order(buyer_id: int, seller_id: int, items: List[CartItemModel], order_method: OrderMethod) -> OrderModel:
    """Snapshot ceny z chwili budowania zamowienia, pozniejsze zmiany produktu go nie dotycza."""
    lines = [
        OrderItemModel(
            position=position,
            product_id=item.product_id,
            quantity=item.quantity,
            price=Decimal(str(item.product.price)),
        )
        for position, item in enumerate(items)
    ]
    now = datetime.now(timezone.utc)

    return OrderModel(
        vendor_id=buyer_id,
        wholesaler_id=seller_id,
        status=OrderStatus.PENDING.value,
        order_method=order_method.value,
        total_amount=order_total(lines),
        items=lines,
        created_at=now,
        updated_at=now,
    )


class OrderService:
    """
    Serwis odpowiedzialny za domene zamowien:
    checkout (koszyk -> zamowienie per sprzedawca), pojedyncze zamowienie,
    odczyt i zmiany statusu.
    """

    def __init__(self, db: Session, lock_service: LockService):
        self.repo = OrderRepo(db)
        self.carts = CartRepo(db)
        self.products = ProductRepo(db)
        self.users = UserRepo(db)
        self.lock_service = lock_service

    @staticmethod
    def _require_vendor(user: UserModel) -> None:
        if Role(user.role) != Role.VENDOR:
            raise PermissionDenied("Only vendors can place orders")

    def checkout(self, buyer: UserModel, order_method: OrderMethod = OrderMethod.MANUAL) -> List[OrderModel]:
        """
        Use Case: Zamowienie calego koszyka.

        1. Lock checkoutu kupujacego (drugi rownolegly checkout dostaje ConflictError)
        2. Odczyt koszyka z produktami (FOR UPDATE)
        3. Grupowanie po sprzedawcy, snapshot cen, jedno zamowienie na grupe
        4. Usuniecie dokladnie odczytanych pozycji koszyka (optimistic check)
        5. Jeden commit - albo wszystkie zamowienia i pusty koszyk, albo nic
        """
        self._require_vendor(buyer)
        buyer_id = buyer.id

        token = self.lock_service.new_token()
        if not self.lock_service.acquire_checkout_lock(buyer_id, token):
            raise ConflictError("Checkout already in progress for this buyer")

        try:
            return self._checkout_locked(buyer_id, order_method)
        finally:
            self._release_lock(buyer_id, token)

    def _release_lock(self, buyer_id: int, token: str) -> None:
        # lock ma TTL, wygasnie sam
        try:
            self.lock_service.release_checkout_lock(buyer_id, token)
        except redis.RedisError as e:
            logger.warning(f"Could not release checkout lock of user {buyer_id}: {e}")

    def _checkout_locked(self, buyer_id: int, order_method: OrderMethod) -> List[OrderModel]:
        items = self.carts.get_cart_items(buyer_id, for_update=True)

        if not items:
            logger.info(f"Checkout of empty cart for user {buyer_id}, nothing to do")
            self.repo.rollback()
            return []

        groups, dropped = group_by_seller(items)

        try:
            orders = [
                self.repo.add_order(build_order(buyer_id, seller_id, group, order_method))
                for seller_id, group in groups.items()
            ]

            # odrzucone pozycje tez znikaja, koszyk po checkoucie jest pusty
            read = [item for group in groups.values() for item in group] + dropped
            snapshot = [(item.id, item.quantity) for item in read]
            removed = sum(
                self.carts.delete_if_unchanged(buyer_id, item_id, quantity)
                for item_id, quantity in snapshot
            )
            if removed != len(snapshot):
                raise ConflictError("Cart changed during checkout, nothing was ordered")

        except Exception:
            self.repo.rollback()
            logger.error(f"Checkout for user {buyer_id} rolled back")
            raise

        self.repo.commit()

        logger.info(
            f"Checkout for user {buyer_id}: {len(orders)} orders "
            f"{[o.id for o in orders]}, {len(dropped)} items dropped"
        )
        return [self.repo.refresh(o) for o in orders]

    def create_order(self, buyer: UserModel, payload: OrderCreate) -> OrderModel:
        """
        Use Case: Jedno zamowienie u jednego sprzedawcy (POST /api/orders).

        Ceny z payloadu musza zgadzac sie z aktualnym katalogiem, a totalAmount
        z suma price x quantity. Koszyka nie rusza.
        """
        self._require_vendor(buyer)

        seller = self.users.get_user(payload.wholesaler_id)
        if not seller or Role(seller.role) != Role.WHOLESALER:
            raise NotFoundError("Wholesaler not found")

        lines = []
        for position, line in enumerate(payload.items):
            product = self.products.get_product(line.product_id)

            if not product:
                raise NotFoundError(f"Product {line.product_id} not found")

            if product.wholesaler_id != payload.wholesaler_id:
                raise ValidationError(
                    f"Product {line.product_id} is not sold by wholesaler {payload.wholesaler_id}",
                    field=f"items[{position}].productId",
                )

            price = Decimal(str(product.price))
            if line.price != price:
                raise ValidationError(
                    f"Price of product {line.product_id} is {price}, not {line.price}",
                    field=f"items[{position}].price",
                )

            lines.append(
                OrderItemModel(
                    position=position,
                    product_id=line.product_id,
                    quantity=line.quantity,
                    price=price,
                )
            )

        total = order_total(lines)
        if payload.total_amount != total:
            raise ValidationError(
                f"totalAmount {payload.total_amount} does not match items total {total}",
                field="totalAmount",
            )

        now = datetime.now(timezone.utc)
        order = OrderModel(
            vendor_id=buyer.id,
            wholesaler_id=payload.wholesaler_id,
            status=OrderStatus.PENDING.value,
            order_method=payload.order_method.value,
            total_amount=total,
            items=lines,
            created_at=now,
            updated_at=now,
        )

        self.repo.add_order(order)
        self.repo.commit()

        logger.info(f"Order {order.id} created by user {buyer.id} for wholesaler {payload.wholesaler_id}")
        return self.repo.refresh(order)

    def list_orders(self, user: UserModel) -> List[OrderModel]:
        """
        Use Case: Lista zamowien (Query). Vendor widzi swoje zakupy, wholesaler zamowienia do siebie.
        """
        if Role(user.role) == Role.WHOLESALER:
            return self.repo.list_orders(wholesaler_id=user.id)
        return self.repo.list_orders(vendor_id=user.id)

    def get_order(self, user: UserModel, order_id: int) -> OrderModel:
        order = self.repo.get_order(order_id)

        if not order:
            raise NotFoundError("Order not found")

        if user.id not in (order.vendor_id, order.wholesaler_id):
            raise PermissionDenied("No access to this order")

        return order

    def transition(self, actor: UserModel, order_id: int, target: OrderStatus) -> OrderModel:
        """
        Use Case: Zmiana statusu zamowienia.

        Sprzedawca przesuwa zamowienie o jeden krok albo anuluje, kupujacy moze
        tylko potwierdzic odbior (ready -> completed). Zapis jako compare-and-swap
        na aktualnym statusie, wiec z dwoch rownoleglych zmian wygrywa jedna.
        """
        order = self.repo.get_order(order_id)
        if not order:
            raise NotFoundError("Order not found")

        current = OrderStatus(order.status)
        check_actor(actor.id, order.vendor_id, order.wholesaler_id, current, target)
        check_transition(current, target)

        rowcount = self.repo.compare_and_set_status(
            order_id=order.id,
            expected=current.value,
            new=target.value,
            updated_at=datetime.now(timezone.utc),
        )

        if rowcount == 0:
            self.repo.rollback()
            raise InvalidTransition(
                f"Order {order_id} is no longer {current.value}, status changed concurrently"
            )

        self.repo.commit()

        logger.info(f"Order {order_id}: {current.value} -> {target.value} by user {actor.id}")
        return self.repo.refresh(order)
