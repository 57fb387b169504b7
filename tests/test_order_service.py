"""Tests for checkout validation and order assembly."""

from decimal import Decimal

import pytest
from sqlalchemy.exc import OperationalError

from storefront.data.models import AddressModel, CartLineModel, OrderItemModel, OrderModel
from storefront.domain.errors import InvalidRequest, StorageFailure
from storefront.domain.schemas import PlaceOrderIn
from storefront.services.order_service import OrderService, validate_checkout
from storefront.utils import settings


def _payload(**overrides):
    body = {
        "items": [{"name": "Tee", "price": 300, "quantity": 2}],
        "totalAmount": 600,
        "paymentMethod": "cod",
    }
    body.update(overrides)
    return PlaceOrderIn.model_validate(body)


def _add_cart_line(db, owner_id, name="Tee"):
    db.add(CartLineModel(owner_id=owner_id, product_name=name, unit_price=Decimal("300"), quantity=1))
    db.commit()


class TestValidation:
    @pytest.mark.parametrize(
        "overrides, message",
        [
            ({"items": []}, "items required"),
            ({"items": None}, "items required"),
            ({"items": "Tee"}, "items required"),
            ({"totalAmount": 0}, "valid total required"),
            ({"totalAmount": -5}, "valid total required"),
            ({"totalAmount": "600"}, "valid total required"),
            ({"totalAmount": True}, "valid total required"),
            ({"paymentMethod": None}, "payment method required"),
            ({"paymentMethod": ""}, "payment method required"),
            ({"paymentMethod": "upi"}, "UTR must be 12 digits"),
            ({"paymentMethod": "upi", "utrNumber": "123456789AB"}, "UTR must be 12 digits"),
            ({"paymentMethod": "upi", "utrNumber": "12345678901"}, "UTR must be 12 digits"),
            ({"paymentMethod": "upi", "utrNumber": 123456789012}, "UTR must be 12 digits"),
            ({"paymentMethod": 5}, "payment method required"),
            ({"paymentMethod": ["cod"]}, "payment method required"),
            ({"shippingAddressId": "abc"}, "invalid shipping address id"),
            ({"shippingAddressId": True}, "invalid shipping address id"),
            ({"shippingAddressId": 1.5}, "invalid shipping address id"),
        ],
    )
    def test_rejections(self, overrides, message):
        with pytest.raises(InvalidRequest) as exc:
            validate_checkout(_payload(**overrides))
        assert exc.value.message == message

    def test_first_failure_wins(self):
        with pytest.raises(InvalidRequest) as exc:
            validate_checkout(_payload(items=[], totalAmount=0, paymentMethod=None))
        assert exc.value.message == "items required"

    def test_malformed_optional_fields_do_not_jump_the_queue(self):
        with pytest.raises(InvalidRequest) as exc:
            validate_checkout(_payload(items=[], paymentMethod=5, shippingAddressId="abc"))
        assert exc.value.message == "items required"

        with pytest.raises(InvalidRequest) as exc:
            validate_checkout(_payload(paymentMethod="upi", shippingAddressId="abc"))
        assert exc.value.message == "UTR must be 12 digits"

    def test_upi_with_twelve_digits_passes(self):
        lines, total, address_id = validate_checkout(_payload(paymentMethod="upi", utrNumber="123456789012"))
        assert total == Decimal("600")
        assert lines[0].name == "Tee"
        assert address_id is None

    def test_numeric_string_address_id_is_coerced(self):
        _, _, address_id = validate_checkout(_payload(shippingAddressId="17"))
        assert address_id == 17

    def test_malformed_item_rejected(self):
        with pytest.raises(InvalidRequest):
            validate_checkout(_payload(items=[{"name": "Tee"}]))


class TestPlaceOrder:
    def test_cod_order_adds_charge_line_and_clears_cart(self, db, user_id):
        _add_cart_line(db, user_id, "Tee")
        _add_cart_line(db, user_id, "Not ordered")

        order_id = OrderService(db).place_order(user_id, _payload())

        order = db.get(OrderModel, order_id)
        assert order.status == "pending"
        assert order.payment_method == "cod"
        assert order.utr_number is None
        assert order.shipping_address is None

        items = db.query(OrderItemModel).filter_by(order_id=order_id).order_by(OrderItemModel.id).all()
        assert [(i.product_name, i.unit_price, i.quantity) for i in items] == [
            ("Tee", Decimal("300"), 2),
            ("Cash on Delivery Charge", Decimal("10"), 1),
        ]
        assert db.query(CartLineModel).filter_by(owner_id=user_id).count() == 0

    def test_upi_order_keeps_utr_and_has_no_charge(self, db, user_id):
        order_id = OrderService(db).place_order(
            user_id, _payload(paymentMethod="upi", utrNumber="123456789012")
        )
        order = db.get(OrderModel, order_id)
        assert order.utr_number == "123456789012"
        names = [i.product_name for i in db.query(OrderItemModel).filter_by(order_id=order_id)]
        assert names == ["Tee"]

    def test_utr_dropped_for_other_methods(self, db, user_id):
        order_id = OrderService(db).place_order(user_id, _payload(paymentMethod="card", utrNumber="123456789012"))
        assert db.get(OrderModel, order_id).utr_number is None

    def test_rejected_checkout_writes_nothing(self, db, user_id):
        _add_cart_line(db, user_id)
        with pytest.raises(InvalidRequest):
            OrderService(db).place_order(user_id, _payload(paymentMethod="upi", utrNumber="bad"))
        assert db.query(OrderModel).count() == 0
        assert db.query(CartLineModel).filter_by(owner_id=user_id).count() == 1

    def test_address_is_snapshotted(self, db, user_id):
        address = AddressModel(owner_id=user_id, recipient_name="Ann", city="Pune", zip_code="411001")
        db.add(address)
        db.commit()

        order_id = OrderService(db).place_order(user_id, _payload(shippingAddressId=address.id))

        # later edits must not leak into the order
        address.city = "Goa"
        db.commit()

        snap = db.get(OrderModel, order_id).shipping_address
        assert snap["name"] == "Ann"
        assert snap["city"] == "Pune"
        assert snap["zip_code"] == "411001"
        assert snap["country"] == "IN"
        assert snap["street"] == ""

    def test_snapshot_survives_address_delete(self, db, user_id, query):
        address = AddressModel(owner_id=user_id, recipient_name="Ann", city="Pune", zip_code="411001")
        db.add(address)
        db.commit()
        order_id = OrderService(db).place_order(user_id, _payload(shippingAddressId=address.id))

        db.delete(address)
        db.commit()

        assert query(lambda s: s.get(AddressModel, address.id)) is None
        snap = query(lambda s: s.get(OrderModel, order_id).shipping_address)
        assert snap["name"] == "Ann"
        assert snap["city"] == "Pune"
        assert snap["zip_code"] == "411001"

    def test_unknown_address_gives_null_snapshot(self, db, user_id):
        order_id = OrderService(db).place_order(user_id, _payload(shippingAddressId=4242))
        assert db.get(OrderModel, order_id).shipping_address is None

    def test_foreign_address_ignored_when_ownership_enforced(self, db, user_id, make_user, monkeypatch):
        monkeypatch.setattr(settings, "ENFORCE_ADDRESS_OWNERSHIP", True)
        other = make_user(email="other@example.com")
        address = AddressModel(owner_id=other, recipient_name="Bob", city="Delhi")
        db.add(address)
        db.commit()

        order_id = OrderService(db).place_order(user_id, _payload(shippingAddressId=address.id))
        assert db.get(OrderModel, order_id).shipping_address is None

    def test_foreign_address_accepted_in_permissive_mode(self, db, user_id, make_user, monkeypatch):
        monkeypatch.setattr(settings, "ENFORCE_ADDRESS_OWNERSHIP", False)
        other = make_user(email="other@example.com")
        address = AddressModel(owner_id=other, recipient_name="Bob", city="Delhi")
        db.add(address)
        db.commit()

        order_id = OrderService(db).place_order(user_id, _payload(shippingAddressId=address.id))
        assert db.get(OrderModel, order_id).shipping_address["city"] == "Delhi"

    def test_storage_failure_rolls_everything_back(self, db, user_id, monkeypatch):
        _add_cart_line(db, user_id)
        svc = OrderService(db)

        def boom(items):
            raise OperationalError("INSERT", {}, Exception("disk full"))

        monkeypatch.setattr(svc.repo, "add_items", boom)

        with pytest.raises(StorageFailure) as exc:
            svc.place_order(user_id, _payload())
        assert exc.value.message == "Error creating order"
        assert db.query(OrderModel).count() == 0
        assert db.query(CartLineModel).filter_by(owner_id=user_id).count() == 1


class TestListOrders:
    def test_newest_first_with_item_totals(self, db, user_id):
        svc = OrderService(db)
        first = svc.place_order(user_id, _payload())
        second = svc.place_order(
            user_id, _payload(items=[{"name": "Jeans", "price": 900, "quantity": 3}], totalAmount=2700, paymentMethod="upi", utrNumber="123456789012")
        )

        orders = svc.list_orders(user_id)
        assert [o["id"] for o in orders] == [second, first]
        assert orders[0]["items"][0]["total"] == Decimal("2700")
        assert [i["total"] for i in orders[1]["items"]] == [Decimal("600"), Decimal("10")]

    def test_other_owners_orders_hidden(self, db, user_id, make_user):
        other = make_user(email="other@example.com")
        OrderService(db).place_order(other, _payload())
        assert OrderService(db).list_orders(user_id) == []
