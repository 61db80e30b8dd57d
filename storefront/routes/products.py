"""Product catalog API routes"""

from typing import Optional
from fastapi import APIRouter, HTTPException, Query, Request, Response, Depends

from ..models.product import Product, ProductCreate, ProductUpdate
from ..database.products import ProductDatabase

router = APIRouter(prefix="/api/products", tags=["Products"])


def get_product_db(request: Request) -> ProductDatabase:
    """Catalog shared by every session"""
    return request.app.state.product_db


@router.get("", response_model=list[Product])
async def list_products(
    query: Optional[str] = Query(None, description="Search query"),
    category: Optional[str] = Query(None, description="Filter by category"),
    product_db: ProductDatabase = Depends(get_product_db),
):
    """List products in the catalog"""
    return product_db.search_products(query=query, category=category)


@router.get("/{product_id}", response_model=Product)
async def get_product(
    product_id: str,
    product_db: ProductDatabase = Depends(get_product_db),
):
    """Get a product by ID"""
    product = product_db.get_product(product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product


@router.post("", response_model=Product, status_code=201)
async def create_product(
    request: ProductCreate,
    product_db: ProductDatabase = Depends(get_product_db),
):
    """Add a product to the catalog"""
    return product_db.create_product(request)


@router.put("/{product_id}", response_model=Product)
async def update_product(
    product_id: str,
    request: ProductUpdate,
    product_db: ProductDatabase = Depends(get_product_db),
):
    """Update a product"""
    product = product_db.update_product(product_id, request)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product


@router.delete("/{product_id}", status_code=204)
async def delete_product(
    product_id: str,
    product_db: ProductDatabase = Depends(get_product_db),
):
    """Delete a product"""
    if not product_db.delete_product(product_id):
        raise HTTPException(status_code=404, detail="Product not found")
    return Response(status_code=204)
