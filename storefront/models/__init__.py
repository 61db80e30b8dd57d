# Storefront Models

from .product import (
    Product,
    ProductCreate,
    ProductUpdate,
    ProductId,
    normalize_product,
    normalize_product_id,
)
from .cart import CartLineItem, AddToCartRequest, UpdateCartItemRequest, CartResponse
from .checkout import (
    Order,
    OrderLineItem,
    OrderStatus,
    CheckoutForm,
    CheckoutResponse,
    PaymentMethod,
)

__all__ = [
    "Product",
    "ProductCreate",
    "ProductUpdate",
    "ProductId",
    "normalize_product",
    "normalize_product_id",
    "CartLineItem",
    "AddToCartRequest",
    "UpdateCartItemRequest",
    "CartResponse",
    "Order",
    "OrderLineItem",
    "OrderStatus",
    "CheckoutForm",
    "CheckoutResponse",
    "PaymentMethod",
]
