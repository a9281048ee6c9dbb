"""
Public catalog endpoints: categories and products.
"""

from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from storefront.database import get_db
from storefront.schemas import CategoryResponse, ProductResponse
from storefront.services.catalog_service import ProductFilter, catalog_service

router = APIRouter()


@router.get("/categories", response_model=List[CategoryResponse])
def list_categories(db: Session = Depends(get_db)):
    """List active categories by name."""
    return catalog_service.list_categories(db)


@router.get("/categories/{slug}", response_model=CategoryResponse)
def get_category(slug: str, db: Session = Depends(get_db)):
    return catalog_service.get_category_by_slug(db, slug)


@router.get("/products", response_model=List[ProductResponse])
def list_products(
    category_id: Optional[str] = Query(None, alias="categoryId"),
    search: Optional[str] = None,
    featured: Optional[bool] = None,
    db: Session = Depends(get_db),
):
    """List active products with optional category, search and featured filters."""
    filters = ProductFilter(
        category_id=category_id,
        search=search or None,
        is_featured=featured,
    )
    return catalog_service.list_products(db, filters)


@router.get("/products/{slug}", response_model=ProductResponse)
def get_product(slug: str, db: Session = Depends(get_db)):
    return catalog_service.get_product_by_slug(db, slug)


@router.get("/products/{slug}/related", response_model=List[ProductResponse])
def get_related_products(slug: str, db: Session = Depends(get_db)):
    """Up to three other products from the same category."""
    return catalog_service.related_products(db, slug)
