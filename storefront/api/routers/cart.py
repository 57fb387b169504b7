# storefront/api/routers/cart.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.api.deps import get_principal
from storefront.data.database import get_db
from storefront.domain.principal import Principal
from storefront.domain.schemas import CartAddIn, CartAddOut, CartLineOut, MessageOut
from storefront.services.cart_service import CartService

router = APIRouter(prefix="/api/cart", tags=["cart"])


@router.get("", response_model=List[CartLineOut])
def list_cart(principal: Principal = Depends(get_principal), db: Session = Depends(get_db)):
    return CartService(db).list_lines(principal.id)


@router.post("", response_model=CartAddOut, response_model_exclude_none=True)
def add_to_cart(
    payload: CartAddIn,
    principal: Principal = Depends(get_principal),
    db: Session = Depends(get_db),
):
    """Adds a line, or bumps an existing line of the same product by one."""
    return CartService(db).add_or_increment(
        owner_id=principal.id,
        product_name=payload.product_name,
        unit_price=payload.price,
        quantity=payload.quantity,
    )


@router.delete("/{line_id}", response_model=MessageOut)
def remove_from_cart(
    line_id: int,
    principal: Principal = Depends(get_principal),
    db: Session = Depends(get_db),
):
    CartService(db).remove_one(principal.id, line_id)
    return {"message": "Item removed from cart successfully"}


@router.delete("", response_model=MessageOut)
def clear_cart(principal: Principal = Depends(get_principal), db: Session = Depends(get_db)):
    CartService(db).clear(principal.id)
    return {"message": "Cart cleared successfully"}
