# storefront/repos/address_repo.py
from datetime import datetime, timezone

from sqlalchemy import delete, select, update
from sqlalchemy.orm import Session

from storefront.data.models.address import AddressModel


class AddressRepo:
    def __init__(self, db: Session):
        self.db = db

    def list_for_owner(self, owner_id: int) -> list[AddressModel]:
        stmt = (
            select(AddressModel)
            .where(AddressModel.owner_id == owner_id)
            .order_by(
                AddressModel.is_default.desc(),
                AddressModel.created_at.desc(),
                AddressModel.id.desc(),
            )
        )
        return list(self.db.execute(stmt).scalars())

    def get(self, address_id: int) -> AddressModel | None:
        return self.db.get(AddressModel, address_id)

    def clear_default(self, owner_id: int, keep_id: int | None = None) -> int:
        """Drop the default flag on every address of the owner except keep_id. Not committed."""
        stmt = update(AddressModel).where(
            AddressModel.owner_id == owner_id,
            AddressModel.is_default.is_(True),
        )
        if keep_id is not None:
            stmt = stmt.where(AddressModel.id != keep_id)
        return self.db.execute(stmt.values(is_default=False)).rowcount

    def add(self, address: AddressModel) -> AddressModel:
        self.db.add(address)
        self.db.flush()
        return address

    def update_fields(self, owner_id: int, address_id: int, fields: dict) -> int:
        res = self.db.execute(
            update(AddressModel)
            .where(AddressModel.id == address_id, AddressModel.owner_id == owner_id)
            .values(**fields, updated_at=datetime.now(timezone.utc))
        )
        return res.rowcount

    def delete(self, owner_id: int, address_id: int) -> int:
        res = self.db.execute(
            delete(AddressModel).where(
                AddressModel.id == address_id,
                AddressModel.owner_id == owner_id,
            )
        )
        return res.rowcount

    def delete_all(self, owner_id: int) -> int:
        return self.db.execute(delete(AddressModel).where(AddressModel.owner_id == owner_id)).rowcount

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
