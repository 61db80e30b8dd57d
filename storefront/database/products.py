"""In-memory product catalog"""

import time
from typing import Any, Optional

from ..models.product import (
    Product,
    ProductCreate,
    ProductUpdate,
    normalize_product,
    normalize_product_id,
)

# Seed catalog
SEED_PRODUCTS: list[dict[str, Any]] = [
    {
        "id": "1",
        "name": "Modern Sofa",
        "price": 129.99,
        "rating": 4.5,
        "reviews": 320,
        "seller": "FurniturePro",
        "image": "https://images.unsplash.com/photo-1555041469-a586c61ea9bc?w=400&h=300&fit=crop",
        "category": "Home",
        "description": "Comfortable modern sofa for living rooms",
        "stock": 15,
    },
    {
        "id": "2",
        "name": "Wooden Dining Table",
        "price": 299.99,
        "rating": 4.8,
        "reviews": 150,
        "seller": "WoodWorks",
        "image": "https://images.unsplash.com/photo-1552321554-5fefe8c9ef14?w=400&h=300&fit=crop",
        "category": "Home",
        "description": "Premium wooden dining table",
        "stock": 8,
    },
    {
        "id": "3",
        "name": "Office Chair Pro",
        "price": 199.99,
        "rating": 4.7,
        "reviews": 450,
        "seller": "OfficeHub",
        "image": "https://images.unsplash.com/photo-1592078615290-033ee584e267?w=400&h=300&fit=crop",
        "category": "Home",
        "description": "Ergonomic office chair",
        "stock": 20,
    },
]


class ProductDatabase:
    """In-memory product catalog keyed by product id"""

    def __init__(self, seed: Optional[list[dict[str, Any]]] = None):
        self.products: dict[str, Product] = {}
        for raw in SEED_PRODUCTS if seed is None else seed:
            product = normalize_product(raw)
            self.products[product.id] = product

    def _new_id(self) -> str:
        candidate = int(time.time() * 1000)
        while str(candidate) in self.products:
            candidate += 1
        return str(candidate)

    def get_product(self, product_id: Any) -> Optional[Product]:
        """Get a product by ID"""
        return self.products.get(normalize_product_id(product_id))

    def search_products(
        self,
        query: Optional[str] = None,
        category: Optional[str] = None,
    ) -> list[Product]:
        """
        List products, optionally filtered.

        Args:
            query: Case-insensitive match against name, description and seller
            category: Exact category match, case-insensitive
        """
        results = list(self.products.values())

        if query:
            query_lower = query.lower()
            results = [
                p for p in results
                if query_lower in p.name.lower()
                or query_lower in (p.description or "").lower()
                or query_lower in p.seller.lower()
            ]

        if category:
            results = [p for p in results if p.category.lower() == category.lower()]

        return results

    def create_product(self, request: ProductCreate) -> Product:
        """Add a product to the catalog with a fresh id"""
        product = normalize_product({"id": self._new_id(), **request.model_dump()})
        self.products[product.id] = product
        return product

    def update_product(self, product_id: Any, request: ProductUpdate) -> Optional[Product]:
        """Update the given fields of a product; returns None if it does not exist"""
        product = self.get_product(product_id)
        if not product:
            return None

        changes = request.model_dump(exclude_none=True)
        updated = normalize_product({**product.model_dump(), **changes})
        self.products[updated.id] = updated
        return updated

    def delete_product(self, product_id: Any) -> bool:
        """Delete a product"""
        product_id = normalize_product_id(product_id)
        if product_id in self.products:
            del self.products[product_id]
            return True
        return False
