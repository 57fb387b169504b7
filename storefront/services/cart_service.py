# storefront/services/cart_service.py
from decimal import Decimal
from typing import Dict, Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from storefront.data.models.cart_line import CartLineModel
from storefront.domain.errors import NotFound, StorageFailure
from storefront.repos.cart_repo import CartRepo
from storefront.repos.user_repo import UserRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class CartService:
    """
    Server side cart, one line per (owner, product name).
    commands (add, remove, clear) modify state, query (list) only reads
    """

    def __init__(self, db: Session):
        self.repo = CartRepo(db)
        self.users = UserRepo(db)

    #query
    def list_lines(self, owner_id: int) -> list[CartLineModel]:
        return self.repo.get_lines(owner_id)

    #commands
    def add_or_increment(
        self,
        owner_id: int,
        product_name: str,
        unit_price: Decimal,
        quantity: int = 1,
    ) -> Dict[str, Any]:
        user = self.users.get_user(owner_id)
        if not user:
            raise NotFound("User not found")

        display_name = user.display_name

        try:
            line_id, inserted = self.repo.upsert_line(
                owner_id=owner_id,
                product_name=product_name,
                unit_price=unit_price,
                quantity=quantity,
                display_name=display_name,
            )
            self.repo.commit()
        except SQLAlchemyError as e:
            self.repo.rollback()
            logger.error(f"Cart upsert failed for owner {owner_id}: {e}")
            raise StorageFailure("Error updating cart")

        if inserted:
            logger.info(f"Added {product_name!r} to cart of owner {owner_id} as line {line_id}")
            return {"message": "Item added to cart successfully", "item_id": line_id}

        logger.info(f"Incremented {product_name!r} in cart of owner {owner_id}")
        return {"message": "Cart updated successfully"}

    def remove_one(self, owner_id: int, line_id: int) -> None:
        try:
            removed = self.repo.delete_line(owner_id, line_id)
            self.repo.commit()
        except SQLAlchemyError as e:
            self.repo.rollback()
            logger.error(f"Removing cart line {line_id} failed: {e}")
            raise StorageFailure("Error removing item")

        # someone else's line looks exactly like a missing one
        if removed == 0:
            raise NotFound("Item not found")

        logger.info(f"Removed cart line {line_id} of owner {owner_id}")

    def clear(self, owner_id: int) -> int:
        try:
            removed = self.repo.delete_all(owner_id)
            self.repo.commit()
        except SQLAlchemyError as e:
            self.repo.rollback()
            logger.error(f"Clearing cart of owner {owner_id} failed: {e}")
            raise StorageFailure("Error clearing cart")

        logger.info(f"Cleared {removed} cart lines of owner {owner_id}")
        return removed
