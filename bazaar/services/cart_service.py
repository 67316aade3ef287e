from decimal import Decimal
from typing import List

from sqlalchemy.orm import Session

from bazaar.data.models.cart_item import CartItemModel
from bazaar.data.models.user import UserModel
from bazaar.domain.enums import Role
from bazaar.domain.errors import ConflictError, NotFoundError, PermissionDenied, ValidationError
from bazaar.repos.cart_repo import CartRepo
from bazaar.repos.product_repo import ProductRepo
from bazaar.utils.logging import get_logger

logger = get_logger(__name__)


def cart_total(items: List[CartItemModel]) -> Decimal:
    #total na zywo, moze sie roznic od pozniejszego zamowienia jesli cena sie zmieni
    return sum(
        (
            Decimal(str(i.product.price)) * i.quantity
            for i in items
            if i.product is not None and not i.product.is_deleted
        ),
        Decimal("0.00"),
    )


def _check_quantity(quantity) -> None:
    if not isinstance(quantity, int) or isinstance(quantity, bool) or quantity <= 0:
        raise ValidationError("Quantity must be a positive integer", field="quantity")


class CartService:
    """
    Koszyk kupujacego: mapa produkt -> ilosc, jeden wiersz na (buyer, product).
    commands (add, update, remove, clear) modyfikuja stan
    query (get) tylko odczyt, z aktualnymi cenami produktow
    """

    def __init__(self, db: Session):
        self.repo = CartRepo(db)
        self.products = ProductRepo(db)

    #query - odczyt
    def get_cart(self, user_id: int) -> List[CartItemModel]:
        return [i for i in self.repo.get_cart_items(user_id) if i.product is not None]

    #commands
    def add_product(self, user: UserModel, product_id: int, quantity: int) -> CartItemModel:
        _check_quantity(quantity)

        if Role(user.role) != Role.VENDOR:
            raise PermissionDenied("Only vendors can buy")

        if not self.products.get_product(product_id):
            raise NotFoundError("Product not found")

        # ta sama para (buyer, product) -> sumujemy ilosc, nigdy nie nadpisujemy
        item = self.repo.get_cart_item(user.id, product_id, for_update=True)

        if item is None:
            logger.info(f"Adding product {product_id} to cart of user {user.id}")
            item = self.repo.insert_cart_item(
                CartItemModel(user_id=user.id, product_id=product_id, quantity=quantity)
            )

            if item is None:
                #rownolegly add wygral wyscig o insert, robimy merge
                item = self.repo.get_cart_item(user.id, product_id, for_update=True)
                if item is None:
                    raise ConflictError("Cart changed concurrently, retry")
                self._increment(item, quantity)
        else:
            self._increment(item, quantity)

        self.repo.commit()
        return self.repo.refresh(item)

    def _increment(self, item: CartItemModel, quantity: int) -> None:
        logger.info(
            f"Product {item.product_id} already in cart of user {item.user_id}, "
            f"increasing quantity by {quantity}"
        )
        #inkrementacja po stronie SQL, nie read-modify-write
        item.quantity = CartItemModel.quantity + quantity

    def update_quantity(self, user_id: int, item_id: int, quantity: int) -> CartItemModel:
        """Ustawia ilosc (set, nie sumowanie), tylko we wlasnym koszyku."""
        _check_quantity(quantity)

        item = self.repo.get_owned_item(user_id, item_id, for_update=True)
        if item is None:
            raise NotFoundError("Cart item not found")

        item.quantity = quantity
        self.repo.commit()

        logger.info(f"Cart item {item_id} of user {user_id} set to quantity {quantity}")
        return self.repo.refresh(item)

    def remove_item(self, user_id: int, item_id: int) -> bool:
        """Idempotentne: brak pozycji (lub cudza pozycja) to sukces bez zmian."""
        removed = self.repo.delete_cart_item(user_id, item_id)
        self.repo.commit()

        if removed:
            logger.info(f"Cart item {item_id} removed for user {user_id}")
        else:
            logger.info(f"Cart item {item_id} not in cart of user {user_id}, nothing to remove")
        return bool(removed)

    def clear_cart(self, user_id: int) -> int:
        removed = self.repo.clear(user_id)
        self.repo.commit()
        logger.info(f"Cart of user {user_id} cleared ({removed} items)")
        return removed
