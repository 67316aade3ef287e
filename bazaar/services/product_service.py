# bazaar/services/product_service.py
from decimal import Decimal

from sqlalchemy.orm import Session

from bazaar.data.models.product import ProductModel
from bazaar.data.models.user import UserModel
from bazaar.domain.enums import ProductCategory, Role
from bazaar.domain.errors import NotFoundError, PermissionDenied
from bazaar.domain.schemas import ProductCreate
from bazaar.repos.product_repo import ProductRepo
from bazaar.utils.logging import get_logger

logger = get_logger(__name__)


class ProductService:
    """Katalog: wholesaler tworzy i usuwa swoje produkty, vendor tylko czyta."""

    def __init__(self, db: Session):
        self.repo = ProductRepo(db)

    def list_products(
        self,
        category: ProductCategory | None = None,
        wholesaler_id: int | None = None,
    ) -> list[ProductModel]:
        return self.repo.list_products(
            category=category.value if category else None,
            wholesaler_id=wholesaler_id,
        )

    def get_product(self, product_id: int) -> ProductModel:
        product = self.repo.get_product(product_id)
        if not product:
            raise NotFoundError("Product not found")
        return product

    def create_product(self, actor: UserModel, payload: ProductCreate) -> ProductModel:
        if Role(actor.role) != Role.WHOLESALER:
            raise PermissionDenied("Only wholesalers can list products")

        product = ProductModel(
            name=payload.name,
            name_hi=payload.name_hi,
            name_te=payload.name_te,
            category=payload.category.value,
            price=Decimal(str(payload.price)),
            unit=payload.unit.value,
            wholesaler_id=actor.id,
            image_url=payload.image_url,
            in_stock=payload.in_stock,
            min_quantity=payload.min_quantity,
        )
        created = self.repo.create_product(product)
        logger.info(f"Wholesaler {actor.id} listed product {created.id} ({created.name})")
        return created

    def delete_product(self, actor: UserModel, product_id: int) -> None:
        product = self.get_product(product_id)

        if product.wholesaler_id != actor.id:
            raise PermissionDenied("Only the owning wholesaler can remove a product")

        self.repo.soft_delete(product)
        logger.info(f"Product {product_id} removed from catalog by {actor.id}")
