"""
Catalog Service: categories and products.

Mutating operations are only reachable through admin routes; the service
itself never hard-deletes rows.
"""

import re
import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storefront.core.exceptions import ConflictError, NotFoundError, ValidationError
from storefront.core.retry import retry_with_backoff
from storefront.database import LIKE_ESCAPE, contains_pattern, transaction
from storefront.models.category import Category
from storefront.models.product import Product
from storefront.schemas import CategoryCreate, CategoryUpdate, ProductCreate, ProductUpdate

logger = logging.getLogger(__name__)

RELATED_PRODUCTS_LIMIT = 3


@dataclass
class ProductFilter:
    category_id: Optional[str] = None
    search: Optional[str] = None
    is_active: Optional[bool] = True
    is_featured: Optional[bool] = None


def slugify(value: str) -> str:
    """'Premium Cricket Jersey - Blue' -> 'premium-cricket-jersey-blue'"""
    slug = re.sub(r"[^a-z0-9]+", "-", value.lower()).strip("-")
    return slug or "item"


def _unique_tags(tags: List[str]) -> List[str]:
    seen = []
    for tag in tags:
        tag = tag.strip()
        if tag and tag not in seen:
            seen.append(tag)
    return seen


class CatalogService:
    # --- Categories ---

    @retry_with_backoff()
    def list_categories(self, db: Session) -> List[Category]:
        return (
            db.query(Category)
            .filter(Category.is_active.is_(True))
            .order_by(Category.name.asc())
            .all()
        )

    @retry_with_backoff()
    def get_category_by_slug(self, db: Session, slug: str) -> Category:
        category = (
            db.query(Category)
            .filter(Category.slug == slug, Category.is_active.is_(True))
            .first()
        )
        if category is None:
            raise NotFoundError("Category not found")
        return category

    def _get_category(self, db: Session, category_id: str) -> Category:
        category = db.query(Category).filter(Category.id == category_id).first()
        if category is None:
            raise NotFoundError("Category not found")
        return category

    def create_category(self, db: Session, data: CategoryCreate) -> Category:
        category = Category(
            name=data.name,
            slug=data.slug or slugify(data.name),
            description=data.description,
            image_url=data.image_url,
            is_active=data.is_active,
        )
        self._save(db, category, "Category with this slug already exists")
        logger.info(f"Created category {category.slug}")
        return category

    def update_category(self, db: Session, category_id: str, data: CategoryUpdate) -> Category:
        category = self._get_category(db, category_id)
        for field, value in data.model_dump(exclude_unset=True).items():
            if value is None and field in ("name", "slug", "is_active"):
                continue
            setattr(category, field, value)
        self._save(db, category, "Category with this slug already exists")
        logger.info(f"Updated category {category.slug}")
        return category

    def soft_delete_category(self, db: Session, category_id: str) -> None:
        category = self._get_category(db, category_id)
        with transaction(db):
            category.is_active = False
        logger.info(f"Deactivated category {category.slug}")

    # --- Products ---

    @retry_with_backoff()
    def list_products(self, db: Session, filters: Optional[ProductFilter] = None) -> List[Product]:
        """List products matching all given filters, newest first."""
        filters = filters or ProductFilter()
        query = db.query(Product)

        if filters.is_active is not None:
            query = query.filter(Product.is_active.is_(filters.is_active))

        if filters.category_id:
            query = query.filter(Product.category_id == filters.category_id)

        if filters.is_featured is not None:
            query = query.filter(Product.is_featured.is_(filters.is_featured))

        if filters.search:
            pattern = contains_pattern(filters.search)
            query = query.filter(
                or_(
                    Product.name.ilike(pattern, escape=LIKE_ESCAPE),
                    Product.description.ilike(pattern, escape=LIKE_ESCAPE),
                )
            )

        return query.order_by(Product.created_at.desc()).all()

    @retry_with_backoff()
    def search_admin_products(
        self,
        db: Session,
        search: Optional[str] = None,
        category_id: Optional[str] = None,
        skip: int = 0,
        limit: int = 10,
    ) -> Tuple[List[Product], int]:
        """Paginated listing including inactive products."""
        query = db.query(Product)
        if category_id:
            query = query.filter(Product.category_id == category_id)
        if search:
            pattern = contains_pattern(search)
            query = query.filter(
                or_(
                    Product.name.ilike(pattern, escape=LIKE_ESCAPE),
                    Product.description.ilike(pattern, escape=LIKE_ESCAPE),
                )
            )
        total = query.count()
        products = query.order_by(Product.created_at.desc()).offset(skip).limit(limit).all()
        return products, total

    @retry_with_backoff()
    def get_product_by_slug(self, db: Session, slug: str) -> Product:
        product = (
            db.query(Product)
            .filter(Product.slug == slug, Product.is_active.is_(True))
            .first()
        )
        if product is None:
            raise NotFoundError("Product not found")
        return product

    @retry_with_backoff()
    def get_product(self, db: Session, product_id: str, include_inactive: bool = False) -> Product:
        query = db.query(Product).filter(Product.id == product_id)
        if not include_inactive:
            query = query.filter(Product.is_active.is_(True))
        product = query.first()
        if product is None:
            raise NotFoundError("Product not found")
        return product

    def related_products(self, db: Session, slug: str, limit: int = RELATED_PRODUCTS_LIMIT) -> List[Product]:
        """Active products of the same category, excluding the product itself."""
        product = self.get_product_by_slug(db, slug)
        if product.category_id is None:
            return []
        return (
            db.query(Product)
            .filter(
                Product.category_id == product.category_id,
                Product.id != product.id,
                Product.is_active.is_(True),
            )
            .order_by(Product.created_at.desc())
            .limit(limit)
            .all()
        )

    def create_product(self, db: Session, data: ProductCreate) -> Product:
        values = data.model_dump(exclude={"slug"})
        self._check_category(db, values.get("category_id"))
        self._check_prices(values["price"], values.get("sale_price"))

        product = Product(
            slug=data.slug or slugify(data.name),
            **self._to_columns(values),
        )
        self._save(db, product, "Product with this slug already exists")
        logger.info(f"Created product {product.slug}")
        return product

    def update_product(self, db: Session, product_id: str, data: ProductUpdate) -> Product:
        product = self.get_product(db, product_id, include_inactive=True)
        values = data.model_dump(exclude_unset=True)
        for field in ("name", "slug", "price", "is_active", "is_featured", "stock"):
            if field in values and values[field] is None:
                del values[field]

        if "category_id" in values:
            self._check_category(db, values["category_id"])
        self._check_prices(
            values.get("price", product.price),
            values["sale_price"] if "sale_price" in values else product.sale_price,
        )

        for field, value in self._to_columns(values).items():
            setattr(product, field, value)
        self._save(db, product, "Product with this slug already exists")
        logger.info(f"Updated product {product.slug}")
        return product

    def soft_delete_product(self, db: Session, product_id: str) -> None:
        product = self.get_product(db, product_id, include_inactive=True)
        with transaction(db):
            product.is_active = False
        logger.info(f"Deactivated product {product.slug}")

    # --- Helpers ---

    def _check_category(self, db: Session, category_id: Optional[str]) -> None:
        if category_id is None:
            return
        if db.query(Category.id).filter(Category.id == category_id).first() is None:
            raise ValidationError.for_field("categoryId", "Unknown category")

    def _check_prices(self, price: Decimal, sale_price: Optional[Decimal]) -> None:
        if sale_price is not None and Decimal(sale_price) >= Decimal(price):
            raise ValidationError.for_field("salePrice", "Sale price must be lower than price")

    def _to_columns(self, values: Dict[str, Any]) -> Dict[str, Any]:
        """Convert validated schema values into JSON-column friendly data."""
        columns = dict(values)
        if columns.get("tags") is not None:
            columns["tags"] = _unique_tags(columns["tags"])
        if columns.get("available_sizes") is not None:
            columns["available_sizes"] = [getattr(s, "value", s) for s in columns["available_sizes"]]
        if columns.get("customization_options") is not None:
            columns["customization_options"] = {
                "allowPlayerName": columns["customization_options"]["allow_player_name"],
                "allowPlayerNumber": columns["customization_options"]["allow_player_number"],
                "allowTeamLogo": columns["customization_options"]["allow_team_logo"],
                "allowColorChange": columns["customization_options"]["allow_color_change"],
                "allowSizeSelection": columns["customization_options"]["allow_size_selection"],
            }
        return columns

    def _save(self, db: Session, obj, conflict_message: str) -> None:
        try:
            with transaction(db):
                db.add(obj)
        except IntegrityError:
            raise ConflictError(conflict_message)
        db.refresh(obj)


catalog_service = CatalogService()
