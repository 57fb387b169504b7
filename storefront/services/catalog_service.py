from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from storefront.data.models.product import CategoryModel, ProductModel
from storefront.domain.errors import InvalidRequest, NotFound, StorageFailure
from storefront.domain.schemas import CategoryIn, ProductIn
from storefront.repos.product_repo import ProductRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def _product_fields(payload: ProductIn) -> dict:
    if not payload.name or not payload.category or payload.price is None or payload.price <= 0:
        raise InvalidRequest("Name, category, and price are required")
    return {
        "name": payload.name,
        "category": payload.category,
        "price": payload.price,
        "image": payload.image or "",
        "description": payload.description or "",
        "stock": max(payload.stock or 0, 0),
    }


class CatalogService:
    """Products and categories. Reads are public, writes are admin only."""

    def __init__(self, db: Session):
        self.repo = ProductRepo(db)

    def list_products(self, category: str | None = None):
        return self.repo.list_products(category)

    def list_categories(self):
        return self.repo.list_categories()

    def create_product(self, payload: ProductIn) -> ProductModel:
        fields = _product_fields(payload)
        try:
            product = self.repo.add_product(ProductModel(**fields, created_by="admin"))
            self.repo.commit()
        except SQLAlchemyError as e:
            self.repo.rollback()
            logger.error(f"Creating product {fields['name']!r} failed: {e}")
            raise StorageFailure("Error creating product")

        logger.info(f"Product {product.id} created: {product.name!r} in {product.category!r}")
        return product

    def update_product(self, product_id: int, payload: ProductIn) -> None:
        fields = _product_fields(payload)
        try:
            matched = self.repo.update_product(product_id, fields)
            self.repo.commit()
        except SQLAlchemyError as e:
            self.repo.rollback()
            logger.error(f"Updating product {product_id} failed: {e}")
            raise StorageFailure("Error updating product")

        if matched == 0:
            raise NotFound("Product not found")
        logger.info(f"Product {product_id} updated")

    def delete_product(self, product_id: int) -> None:
        try:
            removed = self.repo.delete_product(product_id)
            self.repo.commit()
        except SQLAlchemyError as e:
            self.repo.rollback()
            logger.error(f"Deleting product {product_id} failed: {e}")
            raise StorageFailure("Error deleting product")

        if removed == 0:
            raise NotFound("Product not found")
        logger.info(f"Product {product_id} deleted")

    def create_category(self, payload: CategoryIn) -> CategoryModel:
        name = (payload.name or "").strip()
        if not name:
            raise InvalidRequest("Category name is required")
        if self.repo.find_category(name):
            raise InvalidRequest("Category already exists")

        try:
            category = self.repo.add_category(
                CategoryModel(name=name, description=payload.description or "", created_by="admin")
            )
            self.repo.commit()
        except SQLAlchemyError as e:
            self.repo.rollback()
            logger.error(f"Creating category {name!r} failed: {e}")
            raise StorageFailure("Error creating category")

        logger.info(f"Category {category.id} created: {name!r}")
        return category
