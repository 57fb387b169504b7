# storefront/services/address_service.py
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from storefront.data.models.address import AddressModel
from storefront.domain.errors import NotFound, StorageFailure
from storefront.domain.schemas import AddressIn
from storefront.repos.address_repo import AddressRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class AddressService:
    """
    Shipping addresses of one owner.

    At most one address per owner carries is_default. Whenever an address is
    made the default, the sweep over its siblings and the write of the flag
    happen in the same transaction and are committed together.
    """

    def __init__(self, db: Session):
        self.repo = AddressRepo(db)

    def list_addresses(self, owner_id: int) -> list[AddressModel]:
        """Default first, then newest first."""
        return self.repo.list_for_owner(owner_id)

    def create_address(self, owner_id: int, fields: AddressIn) -> AddressModel:
        data = fields.model_dump()
        try:
            if data["is_default"]:
                self.repo.clear_default(owner_id)
            address = self.repo.add(AddressModel(owner_id=owner_id, **data))
            self.repo.commit()
        except SQLAlchemyError as e:
            self.repo.rollback()
            logger.error(f"Creating address for owner {owner_id} failed: {e}")
            raise StorageFailure("Error adding address")

        logger.info(f"Address {address.id} created for owner {owner_id} (default={address.is_default})")
        return address

    def update_address(self, owner_id: int, address_id: int, fields: AddressIn) -> None:
        data = fields.model_dump()
        try:
            if data["is_default"]:
                self.repo.clear_default(owner_id, keep_id=address_id)
            matched = self.repo.update_fields(owner_id, address_id, data)
            if matched == 0:
                # undo the sweep, nothing was updated
                self.repo.rollback()
                raise NotFound("Address not found")
            self.repo.commit()
        except SQLAlchemyError as e:
            self.repo.rollback()
            logger.error(f"Updating address {address_id} failed: {e}")
            raise StorageFailure("Error updating address")

        logger.info(f"Address {address_id} updated for owner {owner_id}")

    def set_default(self, owner_id: int, address_id: int) -> None:
        """Make one existing address the owner's only default."""
        try:
            self.repo.clear_default(owner_id, keep_id=address_id)
            matched = self.repo.update_fields(owner_id, address_id, {"is_default": True})
            if matched == 0:
                self.repo.rollback()
                raise NotFound("Address not found")
            self.repo.commit()
        except SQLAlchemyError as e:
            self.repo.rollback()
            logger.error(f"Setting default address {address_id} failed: {e}")
            raise StorageFailure("Error updating address")

        logger.info(f"Address {address_id} is now the default of owner {owner_id}")

    def delete_address(self, owner_id: int, address_id: int) -> None:
        # deleting the default leaves the owner without one, no re-election
        try:
            removed = self.repo.delete(owner_id, address_id)
            self.repo.commit()
        except SQLAlchemyError as e:
            self.repo.rollback()
            logger.error(f"Deleting address {address_id} failed: {e}")
            raise StorageFailure("Error deleting address")

        if removed == 0:
            raise NotFound("Address not found")

        logger.info(f"Address {address_id} deleted for owner {owner_id}")
