# storefront/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict
from typing import List
from decimal import Decimal


class ProductOut(BaseModel):
    """Produkt z katalogu (response)."""

    product_id: int
    name: str
    price: Decimal
    category: str
    description: str = ""
    image_url: str = ""
    stock_quantity: int = 0

    model_config = ConfigDict(from_attributes=True)


class ItemIn(BaseModel):
    """Dodanie produktu do koszyka, zawsze jedna sztuka."""

    product_id: int = Field(..., gt=0, description="ID produktu (musi być > 0)")


class QuantityIn(BaseModel):
    """Ilosc <= 0 usuwa pozycje."""

    quantity: int


class CartItemOut(BaseModel):
    product_id: int
    name: str
    price: Decimal
    quantity: int
    subtotal: Decimal


class CartOut(BaseModel):
    """Schema dla koszyka (response)."""

    user_id: str
    items: List[CartItemOut]
    item_count: int
    total: Decimal


class RegisterIn(BaseModel):
    username: str = Field(..., min_length=1, max_length=50)
    email: str = Field(..., min_length=3, max_length=100)
    password: str = Field(..., min_length=1)


class LoginIn(BaseModel):
    username: str = Field(..., min_length=1, max_length=50)
    password: str = Field(..., min_length=1)


class TokenOut(BaseModel):
    access_token: str
    token_type: str = "bearer"


class UserRead(BaseModel):
    """Schema dla użytkownika (response)."""

    user_id: int
    username: str
    email: str
    is_active: bool

    model_config = ConfigDict(from_attributes=True)
