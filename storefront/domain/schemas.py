# storefront/domain/schemas.py
from datetime import datetime
from decimal import Decimal
from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """snake_case in python, camelCase on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class MessageOut(CamelModel):
    message: str


# ---------------------------------------------------------------- cart

class CartAddIn(CamelModel):
    product_name: str = Field(..., min_length=1)
    price: Decimal = Field(..., ge=0)
    quantity: int = Field(1, gt=0)


class CartAddOut(CamelModel):
    message: str
    item_id: int | None = None


class CartLineOut(CamelModel):
    id: int
    owner_id: int
    product_name: str
    unit_price: Decimal
    quantity: int
    display_name: str | None = None
    created_at: datetime
    updated_at: datetime | None = None


# ---------------------------------------------------------------- addresses

class AddressIn(CamelModel):
    """Body of create and update. Update replaces every field."""

    kind: str | None = None
    recipient_name: str | None = None
    email: str | None = None
    phone: str | None = None
    house: str | None = None
    street: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    country: str | None = None
    is_default: bool = False


class AddressOut(AddressIn):
    id: int
    owner_id: int
    created_at: datetime
    updated_at: datetime | None = None


class AddressCreatedOut(CamelModel):
    message: str
    address_id: int


class ShippingSnapshot(CamelModel):
    name: str = ""
    email: str = ""
    phone: str = ""
    house: str = ""
    street: str = ""
    city: str = ""
    state: str = ""
    zip_code: str = ""
    country: str = "IN"


# ---------------------------------------------------------------- orders

class OrderLineIn(BaseModel):
    name: str
    price: Decimal
    quantity: int


class PlaceOrderIn(CamelModel):
    """Checkout payload. Typed checks happen in validate_checkout."""

    items: Any = None
    total_amount: Any = None
    shipping_address_id: Any = None
    payment_method: Any = None
    utr_number: Any = None


class OrderPlacedOut(CamelModel):
    message: str
    order_id: int


class OrderItemOut(CamelModel):
    id: int
    product_name: str
    unit_price: Decimal
    quantity: int
    total: Decimal


class OrderOut(CamelModel):
    id: int
    owner_id: int
    total_amount: Decimal
    status: str
    shipping_address: ShippingSnapshot | None = None
    payment_method: str
    utr_number: str | None = None
    payment_status: str | None = None
    created_at: datetime
    updated_at: datetime | None = None
    items: List[OrderItemOut] = []


class AdminOrderOut(OrderOut):
    customer_name: str


class OrderStatusIn(CamelModel):
    status: str | None = None
    payment_status: str | None = None


# ---------------------------------------------------------------- users

class UserOut(CamelModel):
    id: int
    first_name: str | None = None
    last_name: str | None = None
    email: str
    phone: str | None = None
    role: str
    created_at: datetime


class UserUpdateIn(CamelModel):
    """Full replace of the profile fields. Passwords are not handled here."""

    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    phone: str | None = None
    role: str | None = None


class DeletedCountsOut(CamelModel):
    cart_items: int
    addresses: int
    orders: int
    order_items: int


class UserDeletedOut(CamelModel):
    message: str
    deleted_items: DeletedCountsOut


# ---------------------------------------------------------------- catalog

class ProductOut(CamelModel):
    id: int
    name: str
    category: str
    price: Decimal
    image: str
    description: str
    stock: int
    created_at: datetime


class ProductIn(CamelModel):
    name: str | None = None
    category: str | None = None
    price: Decimal | None = None
    image: str | None = None
    description: str | None = None
    stock: int | None = None


class ProductCreatedOut(CamelModel):
    message: str
    product_id: int


class CategoryOut(CamelModel):
    id: int
    name: str
    description: str


class CategoryIn(CamelModel):
    name: str | None = None
    description: str | None = None


class CategoryCreatedOut(CamelModel):
    message: str
    category: CategoryOut
