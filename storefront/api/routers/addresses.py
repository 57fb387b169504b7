# storefront/api/routers/addresses.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.api.deps import get_principal
from storefront.data.database import get_db
from storefront.domain.principal import Principal
from storefront.domain.schemas import AddressCreatedOut, AddressIn, AddressOut, MessageOut
from storefront.services.address_service import AddressService

router = APIRouter(prefix="/api/user/addresses", tags=["addresses"])


@router.get("", response_model=List[AddressOut])
def list_addresses(principal: Principal = Depends(get_principal), db: Session = Depends(get_db)):
    return AddressService(db).list_addresses(principal.id)


@router.post("", response_model=AddressCreatedOut, status_code=201)
def create_address(
    payload: AddressIn,
    principal: Principal = Depends(get_principal),
    db: Session = Depends(get_db),
):
    address = AddressService(db).create_address(principal.id, payload)
    return {"message": "Address added successfully", "address_id": address.id}


@router.put("/{address_id}", response_model=MessageOut)
def update_address(
    address_id: int,
    payload: AddressIn,
    principal: Principal = Depends(get_principal),
    db: Session = Depends(get_db),
):
    AddressService(db).update_address(principal.id, address_id, payload)
    return {"message": "Address updated successfully"}


@router.put("/{address_id}/default", response_model=MessageOut)
def set_default_address(
    address_id: int,
    principal: Principal = Depends(get_principal),
    db: Session = Depends(get_db),
):
    AddressService(db).set_default(principal.id, address_id)
    return {"message": "Default address updated successfully"}


@router.delete("/{address_id}", response_model=MessageOut)
def delete_address(
    address_id: int,
    principal: Principal = Depends(get_principal),
    db: Session = Depends(get_db),
):
    AddressService(db).delete_address(principal.id, address_id)
    return {"message": "Address deleted successfully"}
