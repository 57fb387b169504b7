from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, DateTime, Numeric

from storefront.data.database import Base


def _now():
    return datetime.now(timezone.utc)


class ProductModel(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    category = Column(String, nullable=False, index=True)
    price = Column(Numeric(10, 2), nullable=False)
    image = Column(String, nullable=False, default="")
    description = Column(String, nullable=False, default="")
    stock = Column(Integer, nullable=False, default=0)
    created_by = Column(String, nullable=False, default="admin")
    created_at = Column(DateTime(timezone=True), nullable=False, default=_now, index=True)
    updated_at = Column(DateTime(timezone=True), nullable=True)


class CategoryModel(Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False, unique=True)
    description = Column(String, nullable=False, default="")
    created_by = Column(String, nullable=False, default="system")
    created_at = Column(DateTime(timezone=True), nullable=False, default=_now)
