# bazaar/repos/order_repo.py
from datetime import datetime

from sqlalchemy import select, update, or_
from sqlalchemy.orm import selectinload

from bazaar.data.models.order import OrderModel
from bazaar.repos.base import BaseRepo


class OrderRepo(BaseRepo):
    def add_order(self, order: OrderModel) -> OrderModel:
        """Bez commita, transakcje zamyka serwis (checkout = wiele zamowien naraz)."""
        self.db.add(order)
        self.db.flush()
        return order

    def get_order(self, order_id: int) -> OrderModel | None:
        return self.db.get(OrderModel, order_id)

    def list_orders(self, vendor_id: int | None = None, wholesaler_id: int | None = None) -> list[OrderModel]:
        conditions = []
        if vendor_id is not None:
            conditions.append(OrderModel.vendor_id == vendor_id)
        if wholesaler_id is not None:
            conditions.append(OrderModel.wholesaler_id == wholesaler_id)

        stmt = (
            select(OrderModel)
            .options(selectinload(OrderModel.items))
            .where(or_(*conditions))
            .order_by(OrderModel.created_at.desc(), OrderModel.id.desc())
        )
        return list(self.db.execute(stmt).scalars())

    def compare_and_set_status(
        self,
        order_id: int,
        expected: str,
        new: str,
        updated_at: datetime,
    ) -> int:
        # np. update orders set status='confirmed' where id=1 and status='pending'
        result = self.db.execute(
            update(OrderModel)
            .where(OrderModel.id == order_id, OrderModel.status == expected)
            .values(status=new, updated_at=updated_at)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount
