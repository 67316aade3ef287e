# bazaar/repos/product_repo.py
from datetime import datetime, timezone

from sqlalchemy import select

from bazaar.data.models.product import ProductModel
from bazaar.repos.base import BaseRepo


class ProductRepo(BaseRepo):
    def get_product(self, product_id: int, include_deleted: bool = False) -> ProductModel | None:
        product = self.db.get(ProductModel, product_id)
        if product is None or (product.is_deleted and not include_deleted):
            return None
        return product

    def list_products(
        self,
        category: str | None = None,
        wholesaler_id: int | None = None,
    ) -> list[ProductModel]:
        stmt = select(ProductModel).where(ProductModel.deleted_at.is_(None))

        if category:
            stmt = stmt.where(ProductModel.category == category)
        if wholesaler_id:
            stmt = stmt.where(ProductModel.wholesaler_id == wholesaler_id)

        return list(self.db.execute(stmt.order_by(ProductModel.id)).scalars())

    def create_product(self, product: ProductModel) -> ProductModel:
        self.db.add(product)
        self.commit()
        return self.refresh(product)

    def soft_delete(self, product: ProductModel) -> ProductModel:
        product.deleted_at = datetime.now(timezone.utc)
        self.commit()
        return self.refresh(product)
