#import all models so they register on Base.metadata

from storefront.data.models.user import UserModel
from storefront.data.models.cart_line import CartLineModel
from storefront.data.models.address import AddressModel
from storefront.data.models.order import OrderModel
from storefront.data.models.order_item import OrderItemModel
from storefront.data.models.product import ProductModel, CategoryModel

__all__ = [
    "UserModel",
    "CartLineModel",
    "AddressModel",
    "OrderModel",
    "OrderItemModel",
    "ProductModel",
    "CategoryModel",
]
