# storefront/repos/cart_repo.py
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import delete, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session

from storefront.data.models.cart_line import CartLineModel

_UPSERT_DIALECTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class CartRepo:
    def __init__(self, db: Session):
        self.db = db

    def upsert_line(
        self,
        owner_id: int,
        product_name: str,
        unit_price: Decimal,
        quantity: int,
        display_name: str,
    ) -> tuple[int, bool]:
        """
        INSERT ... ON CONFLICT (owner_id, product_name) DO UPDATE quantity + 1.
        Returns (line id, inserted). Not committed.
        """
        insert = _UPSERT_DIALECTS.get(self.db.get_bind().dialect.name)
        if insert is None:
            raise RuntimeError(f"Unsupported dialect for cart upsert: {self.db.get_bind().dialect.name}")

        stmt = insert(CartLineModel).values(
            owner_id=owner_id,
            product_name=product_name,
            unit_price=unit_price,
            quantity=quantity,
            display_name=display_name,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["owner_id", "product_name"],
            set_={
                # repeat add is always +1, whatever quantity was sent
                "quantity": CartLineModel.quantity + 1,
                "display_name": stmt.excluded.display_name,
                "updated_at": datetime.now(timezone.utc),
            },
        ).returning(CartLineModel.id, CartLineModel.updated_at)

        row = self.db.execute(stmt).one()
        return row.id, row.updated_at is None

    def get_lines(self, owner_id: int) -> list[CartLineModel]:
        return list(
            self.db.execute(
                select(CartLineModel).where(CartLineModel.owner_id == owner_id)
            ).scalars()
        )

    def delete_line(self, owner_id: int, line_id: int) -> int:
        res = self.db.execute(
            delete(CartLineModel).where(
                CartLineModel.id == line_id,
                CartLineModel.owner_id == owner_id,
            )
        )
        return res.rowcount

    def delete_all(self, owner_id: int) -> int:
        res = self.db.execute(delete(CartLineModel).where(CartLineModel.owner_id == owner_id))
        return res.rowcount

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
