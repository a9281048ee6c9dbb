from typing import List, Optional
from datetime import datetime
from decimal import Decimal
from pydantic import BaseModel, ConfigDict, Field, EmailStr, field_validator
from pydantic.alias_generators import to_camel

from storefront.models.product import Size

SLUG_PATTERN = r"^[a-z0-9]+(?:-[a-z0-9]+)*$"
MOBILE_PATTERN = r"^(\+91|91)?[6-9]\d{9}$"
HEX_PATTERN = r"^#[0-9a-fA-F]{6}$"

# bcrypt only looks at the first 72 bytes of a password
MAX_PASSWORD_BYTES = 72


def _check_password_bytes(password: str) -> str:
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
    return password


class CamelModel(BaseModel):
    """JSON uses camelCase keys; Python code uses snake_case attributes."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )


# --- Shared ---
class PaginatedResponse(CamelModel):
    total: int
    skip: int
    limit: int


class MessageResponse(CamelModel):
    message: str


# --- Category ---
class CategoryBase(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    image_url: Optional[str] = None


class CategoryCreate(CategoryBase):
    slug: Optional[str] = Field(None, max_length=255, pattern=SLUG_PATTERN)
    is_active: bool = True


class CategoryUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    slug: Optional[str] = Field(None, max_length=255, pattern=SLUG_PATTERN)
    description: Optional[str] = None
    image_url: Optional[str] = None
    is_active: Optional[bool] = None


class CategoryResponse(CategoryBase):
    id: str
    slug: str
    is_active: bool
    created_at: datetime


# --- Product ---
class ColorOption(CamelModel):
    name: str = Field(..., min_length=1, max_length=50)
    hex: str = Field(..., pattern=HEX_PATTERN)


class CustomizationOptions(CamelModel):
    allow_player_name: bool = True
    allow_player_number: bool = True
    allow_team_logo: bool = True
    allow_color_change: bool = True
    allow_size_selection: bool = True


class ProductBase(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    short_description: Optional[str] = None
    description: Optional[str] = None
    price: Decimal = Field(..., ge=0)
    sale_price: Optional[Decimal] = Field(None, ge=0)
    category_id: Optional[str] = None
    image_url: Optional[str] = None
    images: List[str] = []
    is_active: bool = True
    is_featured: bool = False
    stock: int = Field(0, ge=0)
    tags: List[str] = []
    available_sizes: List[Size] = [Size.S, Size.M, Size.L, Size.XL, Size.XXL]
    available_colors: List[ColorOption] = [
        ColorOption(name="Red", hex="#dc2626"),
        ColorOption(name="Blue", hex="#2563eb"),
        ColorOption(name="Black", hex="#000000"),
        ColorOption(name="White", hex="#ffffff"),
    ]
    customization_options: CustomizationOptions = CustomizationOptions()


class ProductCreate(ProductBase):
    slug: Optional[str] = Field(None, max_length=255, pattern=SLUG_PATTERN)


class ProductUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    slug: Optional[str] = Field(None, max_length=255, pattern=SLUG_PATTERN)
    short_description: Optional[str] = None
    description: Optional[str] = None
    price: Optional[Decimal] = Field(None, ge=0)
    sale_price: Optional[Decimal] = Field(None, ge=0)
    category_id: Optional[str] = None
    image_url: Optional[str] = None
    images: Optional[List[str]] = None
    is_active: Optional[bool] = None
    is_featured: Optional[bool] = None
    stock: Optional[int] = Field(None, ge=0)
    tags: Optional[List[str]] = None
    available_sizes: Optional[List[Size]] = None
    available_colors: Optional[List[ColorOption]] = None
    customization_options: Optional[CustomizationOptions] = None


class ProductResponse(ProductBase):
    id: str
    slug: str
    created_at: datetime


class ProductListResponse(PaginatedResponse):
    products: List[ProductResponse]


# --- Cart ---
class Customization(CamelModel):
    player_name: Optional[str] = Field(None, max_length=50)
    player_number: Optional[str] = Field(None, max_length=10)
    team_logo: Optional[str] = None
    special_instructions: Optional[str] = Field(None, max_length=500)


class CartLineCreate(CamelModel):
    product_id: str
    quantity: int = 1
    selected_size: Optional[Size] = None
    selected_color: Optional[ColorOption] = None
    customization: Optional[Customization] = None


class CartQuantityUpdate(CamelModel):
    quantity: int


class CartLineResponse(CamelModel):
    id: str
    user_id: str
    product_id: str
    quantity: int
    selected_size: Optional[str] = None
    selected_color: Optional[ColorOption] = None
    customization: Optional[Customization] = None
    created_at: datetime


class CartLineWithProduct(CartLineResponse):
    product: ProductResponse


class ClearCartResponse(MessageResponse):
    removed: int


# --- Wishlist ---
class WishlistAdd(CamelModel):
    product_id: str


class WishlistEntryResponse(CamelModel):
    id: str
    user_id: str
    product_id: str
    created_at: datetime


class WishlistEntryWithProduct(WishlistEntryResponse):
    product: ProductResponse


# --- Auth ---
class UserRegister(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=72)
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    mobile_number: str = Field(..., pattern=MOBILE_PATTERN)
    username: Optional[str] = Field(None, min_length=3, max_length=100)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value: str) -> str:
        return _check_password_bytes(value)


class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class UserResponse(CamelModel):
    id: str
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    mobile_number: Optional[str] = None


class AuthResponse(CamelModel):
    message: str
    user: UserResponse
    token: str


# --- Admin ---
class AdminCreateRequest(CamelModel):
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=72)
    admin_code: str
    mobile_number: Optional[str] = Field(None, pattern=MOBILE_PATTERN)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value: str) -> str:
        return _check_password_bytes(value)


class AdminCreateResponse(CamelModel):
    message: str
    user: UserResponse


class AdminCheckResponse(CamelModel):
    is_admin: bool


class PromoteRequest(CamelModel):
    user_id: str


class AdminUserResponse(UserResponse):
    username: Optional[str] = None
    is_active: bool
    is_admin: bool = False
    created_at: datetime


class UserListResponse(PaginatedResponse):
    users: List[AdminUserResponse]


class CategoryCount(CamelModel):
    category_id: Optional[str] = None
    name: Optional[str] = None
    count: int


class AdminStats(CamelModel):
    total_users: int
    total_products: int
    total_categories: int
    total_revenue: Decimal
    featured_products: int
    products_by_category: List[CategoryCount]
