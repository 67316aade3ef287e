from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, Boolean, DateTime
from sqlalchemy.orm import relationship

from bazaar.data.database import Base


class UserModel(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    username = Column(String(64), nullable=False, unique=True)
    name = Column(String(100), nullable=False)
    mobile = Column(String(20), nullable=False)
    address = Column(String, nullable=True)

    role = Column(String(20), nullable=False)  # vendor, wholesaler
    document_type = Column(String(20), nullable=True)  # aadhaar, ration, voter
    document_number = Column(String(64), nullable=True)
    document_verified = Column(Boolean, nullable=False, default=False)
    preferred_language = Column(String(5), nullable=False, default="hi")

    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    products = relationship("ProductModel", back_populates="wholesaler")
