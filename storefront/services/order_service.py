# storefront/services/order_service.py
import re
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from storefront.data.models.address import AddressModel
from storefront.data.models.order import OrderModel
from storefront.data.models.order_item import OrderItemModel
from storefront.domain.errors import InvalidRequest, NotFound, StorageFailure
from storefront.domain.schemas import OrderLineIn, PlaceOrderIn, ShippingSnapshot
from storefront.repos.address_repo import AddressRepo
from storefront.repos.cart_repo import CartRepo
from storefront.repos.order_repo import OrderRepo
from storefront.repos.user_repo import UserRepo
from storefront.utils import settings
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

COD_CHARGE_NAME = "Cash on Delivery Charge"
COD_CHARGE_PRICE = Decimal("10")

_UTR_RE = re.compile(r"^\d{12}$")


def validate_checkout(payload: PlaceOrderIn) -> tuple[List[OrderLineIn], Decimal, int | None]:
    """
    Checks run in a fixed order, the first failure wins:
    items, total, payment method, UTR (upi only), shipping address id,
    then the shape of each item. Nothing is written before all of them pass.

    Returns (lines, total, shipping address id).
    """
    items = payload.items
    if not isinstance(items, list) or not items:
        raise InvalidRequest("items required")

    total = _positive_amount(payload.total_amount)
    if total is None:
        raise InvalidRequest("valid total required")

    method = payload.payment_method
    if not isinstance(method, str) or not method:
        raise InvalidRequest("payment method required")

    if method == "upi":
        utr = payload.utr_number
        if not isinstance(utr, str) or len(utr) != 12 or not _UTR_RE.match(utr):
            raise InvalidRequest("UTR must be 12 digits")

    address_id = _address_id(payload.shipping_address_id)

    try:
        lines = [OrderLineIn.model_validate(item) for item in items]
    except ValidationError as e:
        raise InvalidRequest(f"invalid item: {e.errors()[0]['msg']}")

    return lines, total, address_id


def _address_id(value: Any) -> int | None:
    if value is None:
        return None
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    # ids may arrive as strings from form based clients
    if isinstance(value, str) and value.strip().isdigit():
        return int(value)
    raise InvalidRequest("invalid shipping address id")


def _positive_amount(value: Any) -> Decimal | None:
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        return None
    try:
        amount = Decimal(str(value))
    except InvalidOperation:
        return None
    if not amount.is_finite() or amount <= 0:
        return None
    return amount


def snapshot_address(address: AddressModel | None) -> dict | None:
    if address is None:
        return None
    snap = ShippingSnapshot(
        name=address.recipient_name or "",
        email=address.email or "",
        phone=address.phone or "",
        house=address.house or "",
        street=address.street or "",
        city=address.city or "",
        state=address.state or "",
        zip_code=address.zip_code or "",
        country=address.country or "IN",
    )
    return snap.model_dump()


class OrderService:
    """
    Checkout and order history.

    Placing an order writes the header, its items and clears the owner's
    cart in a single database transaction: either all of it is visible
    afterwards or none of it is.
    """

    def __init__(self, db: Session):
        self.db = db
        self.repo = OrderRepo(db)
        self.carts = CartRepo(db)
        self.addresses = AddressRepo(db)
        self.users = UserRepo(db)

    def resolve_address(self, owner_id: int, address_id: int | None) -> AddressModel | None:
        if address_id is None:
            return None
        address = self.addresses.get(address_id)
        if address is None:
            return None
        if settings.ENFORCE_ADDRESS_OWNERSHIP and address.owner_id != owner_id:
            # foreign ids behave like unknown ids
            logger.warning(f"Owner {owner_id} referenced address {address_id} of another owner")
            return None
        return address

    def place_order(self, owner_id: int, payload: PlaceOrderIn) -> int:
        """
        Use Case: checkout.

        1. validate the request (no writes on failure)
        2. snapshot the shipping address
        3. insert header (pending) + items (+ COD charge line)
        4. clear the whole cart of the owner
        5. commit once
        """
        try:
            lines, total, address_id = validate_checkout(payload)
        except InvalidRequest as e:
            logger.info(f"Checkout rejected for owner {owner_id}: {e.message}")
            raise

        method = payload.payment_method
        snapshot = snapshot_address(self.resolve_address(owner_id, address_id))

        try:
            order = self.repo.add_order(
                OrderModel(
                    owner_id=owner_id,
                    total_amount=total,
                    status="pending",
                    shipping_address=snapshot,
                    payment_method=method,
                    utr_number=payload.utr_number if method == "upi" else None,
                )
            )

            # names and prices come from the caller, the catalog is not consulted
            items = [
                OrderItemModel(
                    order_id=order.id,
                    product_name=line.name,
                    unit_price=line.price,
                    quantity=line.quantity,
                )
                for line in lines
            ]
            if method == "cod":
                items.append(
                    OrderItemModel(
                        order_id=order.id,
                        product_name=COD_CHARGE_NAME,
                        unit_price=COD_CHARGE_PRICE,
                        quantity=1,
                    )
                )
            self.repo.add_items(items)

            # the cart is the order source, so all of it goes
            cleared = self.carts.delete_all(owner_id)
            self.repo.commit()
        except SQLAlchemyError as e:
            self.repo.rollback()
            logger.error(f"Creating order for owner {owner_id} failed: {e}")
            raise StorageFailure("Error creating order")

        logger.info(
            f"Order {order.id} placed by owner {owner_id}: {len(items)} items, "
            f"method={method}, {cleared} cart lines cleared"
        )
        return order.id

    # ---------------------------------------------------------------- queries

    def _with_items(self, order: OrderModel) -> Dict[str, Any]:
        items = self.repo.get_items(order.id)
        return {
            "id": order.id,
            "owner_id": order.owner_id,
            "total_amount": order.total_amount,
            "status": order.status,
            "shipping_address": order.shipping_address,
            "payment_method": order.payment_method,
            "utr_number": order.utr_number,
            "payment_status": order.payment_status,
            "created_at": order.created_at,
            "updated_at": order.updated_at,
            "items": [
                {
                    "id": i.id,
                    "product_name": i.product_name,
                    "unit_price": i.unit_price,
                    "quantity": i.quantity,
                    "total": i.unit_price * i.quantity,
                }
                for i in items
            ],
        }

    def list_orders(self, owner_id: int) -> List[Dict[str, Any]]:
        """Orders of one owner, newest first, each with its items and per-item totals."""
        return [self._with_items(o) for o in self.repo.list_orders(owner_id)]

    # ---------------------------------------------------------------- admin

    def list_all_orders(self) -> List[Dict[str, Any]]:
        orders = self.repo.list_orders()
        owners = self.users.get_users(o.owner_id for o in orders)
        result = []
        for order in orders:
            view = self._with_items(order)
            owner = owners.get(order.owner_id)
            view["customer_name"] = (
                f"{owner.first_name or ''} {owner.last_name or ''}".strip() if owner else "Unknown"
            ) or "Unknown"
            result.append(view)
        return result

    def update_status(self, order_id: int, status: str | None, payment_status: str | None) -> None:
        order = self.repo.get_order(order_id)
        if not order:
            raise NotFound("Order not found")
        try:
            self.repo.update_status(order, status, payment_status)
            self.repo.commit()
        except SQLAlchemyError as e:
            self.repo.rollback()
            logger.error(f"Updating order {order_id} failed: {e}")
            raise StorageFailure("Error updating order")

        logger.info(f"Order {order_id} updated: status={order.status} payment_status={order.payment_status}")

    def delete_order(self, order_id: int) -> None:
        if not self.repo.get_order(order_id):
            raise NotFound("Order not found")
        try:
            # items before the header
            items = self.repo.delete_items([order_id])
            self.repo.delete_orders([order_id])
            self.repo.commit()
        except SQLAlchemyError as e:
            self.repo.rollback()
            logger.error(f"Deleting order {order_id} failed: {e}")
            raise StorageFailure("Error deleting order")

        logger.info(f"Order {order_id} deleted with {items} items")
