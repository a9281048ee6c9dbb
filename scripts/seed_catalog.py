"""
Load the jersey catalog (categories and products).

Entries are matched by slug, so running the script twice does not create
duplicates.
"""
import sys
import os
import logging
from decimal import Decimal

# Add parent directory to path to allow importing storefront modules
sys.path.append(os.path.join(os.path.dirname(__file__), '..', 'backend'))

from storefront.database import get_db_context, init_db
from storefront.models.category import Category
from storefront.models.product import Product
from storefront.schemas import CategoryCreate, ProductCreate
from storefront.services.catalog_service import catalog_service

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

CATEGORIES = [
    {"name": "Cricket Jersey", "slug": "cricket", "description": "High-quality cricket jerseys for teams and individuals"},
    {"name": "Football Jersey", "slug": "football", "description": "Professional football jerseys with premium materials"},
    {"name": "Esports Jersey", "slug": "esports", "description": "Gaming jerseys for esports teams and enthusiasts"},
    {"name": "Marathon Jersey", "slug": "marathon", "description": "Lightweight marathon and running jerseys"},
    {"name": "Biker Jersey", "slug": "biker", "description": "Protective and stylish biker jerseys"},
]

# (name, slug, short description, price, sale price, category slug, stock, featured)
PRODUCTS = [
    ("Premium Cricket Team Jersey - Blue", "premium-cricket-team-jersey-blue",
     "Professional cricket jersey with moisture-wicking fabric", "1299.00", "999.00", "cricket", 50, True),
    ("Classic Cricket Jersey - White", "classic-cricket-jersey-white",
     "Traditional white cricket jersey", "1199.00", "899.00", "cricket", 40, False),
    ("Modern Cricket Jersey - Red", "modern-cricket-jersey-red",
     "Contemporary red cricket jersey", "1399.00", "1099.00", "cricket", 35, False),
    ("Elite Football Jersey - Home Kit", "elite-football-jersey-home-kit",
     "Professional football home jersey", "1599.00", "1299.00", "football", 60, True),
    ("Classic Football Jersey - Away Kit", "classic-football-jersey-away-kit",
     "Traditional football away jersey", "1499.00", "1199.00", "football", 45, False),
    ("Modern Football Jersey - Third Kit", "modern-football-jersey-third-kit",
     "Contemporary football third jersey", "1699.00", "1399.00", "football", 30, False),
    ("Pro Gaming Jersey - Lightning Design", "pro-gaming-jersey-lightning-design",
     "Professional esports gaming jersey", "1799.00", "1499.00", "esports", 25, True),
    ("Elite Gaming Jersey - Fire Pattern", "elite-gaming-jersey-fire-pattern",
     "Elite esports jersey with fire design", "1699.00", "1399.00", "esports", 20, False),
    ("Team Gaming Jersey - Blue Storm", "team-gaming-jersey-blue-storm",
     "Team esports jersey with storm design", "1599.00", "1299.00", "esports", 30, False),
    ("Ultra Marathon Jersey - Lightweight", "ultra-marathon-jersey-lightweight",
     "Ultra-lightweight marathon running jersey", "1399.00", "1099.00", "marathon", 40, True),
    ("Performance Running Jersey - Reflective", "performance-running-jersey-reflective",
     "High-performance running jersey with reflective elements", "1299.00", "999.00", "marathon", 35, False),
    ("Marathon Elite Jersey - Pro Series", "marathon-elite-jersey-pro-series",
     "Elite marathon jersey for professional runners", "1599.00", "1299.00", "marathon", 25, False),
]


def seed_catalog():
    init_db()
    with get_db_context() as db:
        category_ids = {}
        for data in CATEGORIES:
            category = db.query(Category).filter(Category.slug == data["slug"]).first()
            if category is None:
                category = catalog_service.create_category(db, CategoryCreate(**data))
            category_ids[category.slug] = category.id

        created = 0
        for name, slug, short, price, sale_price, category_slug, stock, featured in PRODUCTS:
            if db.query(Product.id).filter(Product.slug == slug).first():
                continue
            catalog_service.create_product(
                db,
                ProductCreate(
                    name=name,
                    slug=slug,
                    short_description=short,
                    description=f"{short}. Customizable with player name and number.",
                    price=Decimal(price),
                    sale_price=Decimal(sale_price),
                    category_id=category_ids[category_slug],
                    stock=stock,
                    is_featured=featured,
                    tags=["jersey", category_slug, "sports", "team", "custom"],
                ),
            )
            created += 1

        logger.info(f"Catalog seeded: {len(category_ids)} categories, {created} new products")


if __name__ == "__main__":
    seed_catalog()
