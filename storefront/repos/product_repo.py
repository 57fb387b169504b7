from datetime import datetime, timezone

from sqlalchemy import delete, func, select, update
from sqlalchemy.orm import Session

from storefront.data.models.product import ProductModel, CategoryModel


class ProductRepo:
    def __init__(self, db: Session):
        self.db = db

    def list_products(self, category: str | None = None) -> list[ProductModel]:
        stmt = select(ProductModel).order_by(ProductModel.created_at.desc(), ProductModel.id.desc())
        if category:
            stmt = stmt.where(ProductModel.category == category)
        return list(self.db.execute(stmt).scalars())

    def add_product(self, product: ProductModel) -> ProductModel:
        self.db.add(product)
        self.db.flush()
        return product

    def update_product(self, product_id: int, fields: dict) -> int:
        res = self.db.execute(
            update(ProductModel)
            .where(ProductModel.id == product_id)
            .values(**fields, updated_at=datetime.now(timezone.utc))
        )
        return res.rowcount

    def delete_product(self, product_id: int) -> int:
        return self.db.execute(delete(ProductModel).where(ProductModel.id == product_id)).rowcount

    def list_categories(self) -> list[CategoryModel]:
        return list(self.db.execute(select(CategoryModel).order_by(CategoryModel.name)).scalars())

    def find_category(self, name: str) -> CategoryModel | None:
        # names compare case-insensitively
        stmt = select(CategoryModel).where(func.lower(CategoryModel.name) == name.lower())
        return self.db.execute(stmt).scalars().first()

    def add_category(self, category: CategoryModel) -> CategoryModel:
        self.db.add(category)
        self.db.flush()
        return category

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
