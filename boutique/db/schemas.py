# boutique/db/schemas.py
from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel

from boutique.db.models import MAX_PRICE, MAX_QUANTITY, MAX_STOCK, OrderStatus, PaymentStatus, RoleEnum


class CamelModel(BaseModel):
    """Snake_case in Python, camelCase on the wire; both spellings accepted on input."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# Address schema
class Address(CamelModel):
    model_config = ConfigDict(extra="allow")

    street: Optional[str] = None
    city: Optional[str] = None
    postal_code: Optional[str] = None
    country: Optional[str] = None


# Product schemas
class ProductBase(CamelModel):
    name: str = Field(..., min_length=1)
    description: str = ""
    price: int = Field(..., ge=0, le=MAX_PRICE, description="Price in the smallest currency unit")
    category: str = Field(..., min_length=1)
    image: Optional[str] = None
    stock: int = Field(0, ge=0, le=MAX_STOCK)
    featured: bool = False


class ProductCreate(ProductBase):
    pass


class ProductUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    price: Optional[int] = Field(None, ge=0, le=MAX_PRICE)
    category: Optional[str] = Field(None, min_length=1)
    image: Optional[str] = None
    stock: Optional[int] = Field(None, ge=0, le=MAX_STOCK)
    featured: Optional[bool] = None


class Product(ProductBase):
    id: str
    created_at: datetime


class ProductPage(CamelModel):
    products: List[Product]
    total: int
    total_pages: int
    current_page: int


# User schemas
class UserCreate(CamelModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    password: str = Field(..., min_length=1)


class UserLogin(CamelModel):
    email: EmailStr
    password: str


class User(CamelModel):
    id: str
    name: str
    email: str
    role: RoleEnum
    address: Optional[Address] = None
    phone: Optional[str] = None
    created_at: datetime


class ProfileUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1)
    address: Optional[Address] = None
    phone: Optional[str] = None


class AuthResponse(CamelModel):
    message: str
    token: str
    user: User


# Cart schemas
class CartItemAdd(CamelModel):
    product_id: str = Field(..., min_length=1)
    quantity: Optional[int] = Field(None, le=MAX_QUANTITY)

    @field_validator("quantity", mode="before")
    @classmethod
    def coerce_quantity(cls, value: Any) -> Optional[int]:
        # anything unusable falls back to the default of one
        try:
            quantity = int(value)
        except (TypeError, ValueError, OverflowError):
            return None
        return quantity if quantity > 0 else None


class CartItem(CamelModel):
    product_id: str
    name: str
    price: int
    image: Optional[str] = None
    quantity: int


class CartResponse(CamelModel):
    cart: List[CartItem]


class CartUpdateResponse(CartResponse):
    message: str


# Order schemas
class OrderCreate(CamelModel):
    shipping_address: Address
    payment_method: str = Field(..., min_length=1)


class OrderItem(CamelModel):
    product_id: str
    name: str
    price: int
    image: Optional[str] = None
    quantity: int


class Order(CamelModel):
    id: str
    user_id: str
    items: List[OrderItem]
    total_amount: int
    status: OrderStatus
    shipping_address: Optional[Address] = None
    payment_method: str
    payment_status: PaymentStatus
    created_at: datetime


class OrderCreated(CamelModel):
    message: str
    order_id: str


class Message(CamelModel):
    message: str


class OrderList(CamelModel):
    orders: List[Order]
