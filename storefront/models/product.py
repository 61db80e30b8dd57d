"""Product models for the storefront catalog"""

from typing import Annotated, Any, Optional

from pydantic import BaseModel, BeforeValidator, Field

PLACEHOLDER_IMAGE = "https://via.placeholder.com/400x300"
DEFAULT_RATING = 5.0
DEFAULT_STOCK = 10


def _coerce_id(value: Any) -> Any:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return str(int(value)) if float(value).is_integer() else str(value)
    return value


# Catalog ids arrive as strings or numbers; everything downstream sees str.
ProductId = Annotated[str, BeforeValidator(_coerce_id)]


def normalize_product_id(value: Any) -> str:
    """Normalize a raw product id (str or number) to its canonical string"""
    return str(_coerce_id(value))


class Product(BaseModel):
    """Product in the catalog"""
    id: ProductId
    name: str
    price: float = Field(gt=0)
    category: str
    seller: str
    image: str = PLACEHOLDER_IMAGE
    rating: float = DEFAULT_RATING
    reviews: int = 0
    description: Optional[str] = None
    stock: int = Field(ge=0, default=DEFAULT_STOCK)

    class Config:
        from_attributes = True


class ProductCreate(BaseModel):
    """Request to create a product"""
    name: str = Field(min_length=1)
    price: float = Field(gt=0)
    category: str = Field(min_length=1)
    seller: str = Field(min_length=1)
    image: Optional[str] = None
    description: Optional[str] = None
    stock: Optional[int] = Field(default=None, ge=0)


class ProductUpdate(BaseModel):
    """Partial product update; omitted fields keep their current value"""
    name: Optional[str] = None
    price: Optional[float] = Field(default=None, gt=0)
    category: Optional[str] = None
    seller: Optional[str] = None
    image: Optional[str] = None
    description: Optional[str] = None
    stock: Optional[int] = Field(default=None, ge=0)


def normalize_product(raw: dict[str, Any]) -> Product:
    """
    Build a catalog Product from loosely-shaped input.

    This is the only place optional catalog fields get their defaults, so
    consumers (cart, views) never have to patch them up themselves.
    """
    data = {k: v for k, v in raw.items() if v is not None and v != ""}
    data.setdefault("image", PLACEHOLDER_IMAGE)
    data.setdefault("rating", DEFAULT_RATING)
    data.setdefault("reviews", 0)
    data.setdefault("stock", DEFAULT_STOCK)
    return Product.model_validate(data)
