# Storage modules

from .products import ProductDatabase
from .carts import CartStore, decode_cart
from .orders import OrderStore, decode_orders

__all__ = [
    "ProductDatabase",
    "CartStore",
    "decode_cart",
    "OrderStore",
    "decode_orders",
]
