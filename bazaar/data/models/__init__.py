#import wszystkich modeli zeby SQLAlchemy je zarejestrowal w base metadata

from bazaar.data.models.user import UserModel
from bazaar.data.models.product import ProductModel
from bazaar.data.models.cart_item import CartItemModel
from bazaar.data.models.order import OrderModel
from bazaar.data.models.order_item import OrderItemModel

__all__ = ["UserModel", "ProductModel", "CartItemModel", "OrderModel", "OrderItemModel"]
