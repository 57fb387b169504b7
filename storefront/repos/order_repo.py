# storefront/repos/order_repo.py
from datetime import datetime, timezone

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from storefront.data.models.order import OrderModel
from storefront.data.models.order_item import OrderItemModel


class OrderRepo:
    def __init__(self, db: Session):
        self.db = db

    def add_order(self, order: OrderModel) -> OrderModel:
        self.db.add(order)
        self.db.flush()  # assigns order.id inside the open transaction
        return order

    def add_items(self, items: list[OrderItemModel]) -> None:
        self.db.add_all(items)
        self.db.flush()

    def get_order(self, order_id: int) -> OrderModel | None:
        return self.db.get(OrderModel, order_id)

    def list_orders(self, owner_id: int | None = None) -> list[OrderModel]:
        stmt = select(OrderModel).order_by(OrderModel.created_at.desc(), OrderModel.id.desc())
        if owner_id is not None:
            stmt = stmt.where(OrderModel.owner_id == owner_id)
        return list(self.db.execute(stmt).scalars())

    def get_items(self, order_id: int) -> list[OrderItemModel]:
        return list(
            self.db.execute(
                select(OrderItemModel)
                .where(OrderItemModel.order_id == order_id)
                .order_by(OrderItemModel.id)
            ).scalars()
        )

    def update_status(self, order: OrderModel, status: str | None, payment_status: str | None) -> OrderModel:
        if status:
            order.status = status
        if payment_status:
            order.payment_status = payment_status
        order.updated_at = datetime.now(timezone.utc)
        self.db.flush()
        return order

    def order_ids_for_owner(self, owner_id: int) -> list[int]:
        return list(self.db.execute(select(OrderModel.id).where(OrderModel.owner_id == owner_id)).scalars())

    def delete_items(self, order_ids: list[int]) -> int:
        if not order_ids:
            return 0
        return self.db.execute(
            delete(OrderItemModel).where(OrderItemModel.order_id.in_(order_ids))
        ).rowcount

    def delete_orders(self, order_ids: list[int]) -> int:
        if not order_ids:
            return 0
        return self.db.execute(delete(OrderModel).where(OrderModel.id.in_(order_ids))).rowcount

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
