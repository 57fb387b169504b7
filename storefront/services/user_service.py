from typing import Dict

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from storefront.data.models.user import UserModel
from storefront.domain.errors import InvalidRequest, NotFound, StorageFailure
from storefront.domain.principal import ROLES
from storefront.domain.schemas import UserUpdateIn
from storefront.repos.address_repo import AddressRepo
from storefront.repos.cart_repo import CartRepo
from storefront.repos.order_repo import OrderRepo
from storefront.repos.user_repo import UserRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class UserService:
    def __init__(self, db: Session):
        self.repo = UserRepo(db)
        self.carts = CartRepo(db)
        self.addresses = AddressRepo(db)
        self.orders = OrderRepo(db)
        self.db = db

    def list_users(self) -> list[UserModel]:
        return self.repo.list_users()

    def update_user(self, user_id: int, payload: UserUpdateIn) -> None:
        if not self.repo.get_user(user_id):
            raise NotFound("User not found")

        email = (payload.email or "").strip()
        if not email:
            raise InvalidRequest("Email is required")
        role = payload.role or "user"
        if role not in ROLES:
            raise InvalidRequest("Invalid role")
        holder = self.repo.get_by_email(email)
        if holder and holder.id != user_id:
            raise InvalidRequest("Email already in use")

        fields = {
            "first_name": payload.first_name,
            "last_name": payload.last_name,
            "email": email,
            "phone": payload.phone,
            "role": role,
        }
        try:
            self.repo.update_fields(user_id, fields)
            self.repo.commit()
        except SQLAlchemyError as e:
            self.repo.rollback()
            logger.error(f"Updating user {user_id} failed: {e}")
            raise StorageFailure("Error updating user")

        logger.info(f"User {user_id} updated (role={role})")

    def delete_user(self, user_id: int) -> Dict[str, int]:
        """
        Cascade delete: cart lines, addresses, order items, orders, then the
        user record, all in one transaction. Returns the deleted counts.
        """
        if not self.repo.get_user(user_id):
            raise NotFound("User not found")

        try:
            cart_items = self.carts.delete_all(user_id)
            addresses = self.addresses.delete_all(user_id)
            order_ids = self.orders.order_ids_for_owner(user_id)
            order_items = self.orders.delete_items(order_ids)
            orders = self.orders.delete_orders(order_ids)
            if self.repo.delete_user(user_id) == 0:
                self.db.rollback()
                raise NotFound("User not found")
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Deleting user {user_id} failed: {e}")
            raise StorageFailure("Error deleting user")

        counts = {
            "cart_items": cart_items,
            "addresses": addresses,
            "orders": orders,
            "order_items": order_items,
        }
        logger.info(f"User {user_id} deleted with {counts}")
        return counts
