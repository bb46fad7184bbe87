#import wszystkich modeli zeby SQLAlchemy je zarejestrowal w base metadata

from storefront.data.models.product import ProductModel
from storefront.data.models.cart_item import CartItemModel
from storefront.data.models.user import UserModel

__all__ = ["ProductModel", "CartItemModel", "UserModel"]
