"""Cart models for the storefront"""

from pydantic import BaseModel, Field
from typing import Optional

from .product import Product, ProductId


class CartLineItem(BaseModel):
    """One product-and-quantity row in a cart; price is captured at add time"""
    id: ProductId
    name: str
    price: float
    seller: str
    category: str
    image: Optional[str] = None
    quantity: int = Field(ge=1)

    @classmethod
    def from_product(cls, product: Product, quantity: int = 1) -> "CartLineItem":
        return cls(
            id=product.id,
            name=product.name,
            price=product.price,
            seller=product.seller,
            category=product.category,
            image=product.image,
            quantity=quantity,
        )

    @property
    def total_price(self) -> float:
        return self.price * self.quantity


class AddToCartRequest(BaseModel):
    """Request to add a catalog product to the cart"""
    product_id: ProductId
    quantity: int = Field(default=1, gt=0)


class UpdateCartItemRequest(BaseModel):
    """Request to set a line item's quantity; zero or less removes it"""
    quantity: int


class CartResponse(BaseModel):
    """Cart API response"""
    items: list[CartLineItem] = []
    total_items: int = 0
    total_price: float = 0.0
    message: Optional[str] = None
