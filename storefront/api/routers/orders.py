# storefront/api/routers/orders.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.api.deps import get_principal
from storefront.data.database import get_db
from storefront.domain.principal import Principal
from storefront.domain.schemas import OrderOut, OrderPlacedOut, PlaceOrderIn
from storefront.services.order_service import OrderService

router = APIRouter(prefix="/api/orders", tags=["orders"])


@router.get("", response_model=List[OrderOut])
def list_my_orders(principal: Principal = Depends(get_principal), db: Session = Depends(get_db)):
    """
    Orders of the caller, newest first, with items and per-item totals.
    """
    return OrderService(db).list_orders(principal.id)


@router.post("", response_model=OrderPlacedOut, status_code=201)
def place_order(
    payload: PlaceOrderIn,
    principal: Principal = Depends(get_principal),
    db: Session = Depends(get_db),
):
    """
    Checkout: validates the payload, writes the order and its items,
    then empties the caller's cart.
    """
    order_id = OrderService(db).place_order(principal.id, payload)
    return {"message": "Order created successfully", "order_id": order_id}
