from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, Boolean, DateTime, Numeric, ForeignKey
from sqlalchemy.orm import relationship

from bazaar.data.database import Base


class ProductModel(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True)
    name = Column(String(100), nullable=False)
    name_hi = Column(String(100), nullable=True)
    name_te = Column(String(100), nullable=True)

    category = Column(String(20), nullable=False, index=True)
    price = Column(Numeric(10, 2), nullable=False)
    unit = Column(String(10), nullable=False)
    wholesaler_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)

    image_url = Column(String, nullable=True)
    rating = Column(Numeric(3, 2), nullable=False, default=0)
    in_stock = Column(Boolean, nullable=False, default=True)
    min_quantity = Column(Integer, nullable=False, default=1)

    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
    # soft delete, historia zamowien dalej wskazuje na produkt
    deleted_at = Column(DateTime(timezone=True), nullable=True)

    wholesaler = relationship("UserModel", back_populates="products")

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None
