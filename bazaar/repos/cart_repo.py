# bazaar/repos/cart_repo.py
from sqlalchemy import select, delete
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import joinedload

from bazaar.data.models.cart_item import CartItemModel
from bazaar.repos.base import BaseRepo


class CartRepo(BaseRepo):
    def get_cart_item(
        self,
        user_id: int,
        product_id: int,
        for_update: bool = False,
    ) -> CartItemModel | None:
        stmt = select(CartItemModel).where(
            CartItemModel.user_id == user_id,
            CartItemModel.product_id == product_id,
        )
        if for_update:
            stmt = stmt.with_for_update()
        return self.db.execute(stmt).scalar_one_or_none()

    def get_owned_item(self, user_id: int, item_id: int, for_update: bool = False) -> CartItemModel | None:
        stmt = select(CartItemModel).where(
            CartItemModel.id == item_id,
            CartItemModel.user_id == user_id,
        )
        if for_update:
            stmt = stmt.with_for_update()
        return self.db.execute(stmt).scalar_one_or_none()

    def get_cart_items(self, user_id: int, for_update: bool = False) -> list[CartItemModel]:
        """Pozycje koszyka z dolaczonym aktualnym produktem, w kolejnosci dodania."""
        stmt = (
            select(CartItemModel)
            .options(joinedload(CartItemModel.product))
            .where(CartItemModel.user_id == user_id)
            .order_by(CartItemModel.id)
        )
        if for_update:
            stmt = stmt.with_for_update(of=CartItemModel)
        return list(self.db.execute(stmt).scalars().unique())

    def insert_cart_item(self, item: CartItemModel) -> CartItemModel | None:
        """None gdy rownolegly insert tej samej pary (user, product) byl pierwszy."""
        self.db.add(item)
        try:
            self.db.flush()
        except IntegrityError:
            self.db.rollback()
            return None
        return item

    def delete_cart_item(self, user_id: int, item_id: int) -> int:
        result = self.db.execute(
            delete(CartItemModel).where(
                CartItemModel.id == item_id,
                CartItemModel.user_id == user_id,
            )
        )
        return result.rowcount

    def delete_if_unchanged(self, user_id: int, item_id: int, quantity: int) -> int:
        # optimistic check: usuwamy tylko jesli ilosc dalej taka jak przy odczycie
        result = self.db.execute(
            delete(CartItemModel).where(
                CartItemModel.id == item_id,
                CartItemModel.user_id == user_id,
                CartItemModel.quantity == quantity,
            )
        )
        return result.rowcount

    def clear(self, user_id: int) -> int:
        result = self.db.execute(
            delete(CartItemModel).where(CartItemModel.user_id == user_id)
        )
        return result.rowcount
