# storefront/domain/entities.py
"""
Obiekty domenowe: Product, CartItem, User.

Product jest niemutowalnym snapshotem - koszyk trzyma kopie wartosci,
a nie referencje sledzaca pozniejsze zmiany w katalogu.
"""
from dataclasses import dataclass, field, asdict
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Dict

from storefront.utils.security import sanitize_text

CENT = Decimal("0.01")


def to_money(value: Any) -> Decimal:
    try:
        return Decimal(str(value)).quantize(CENT)
    except (InvalidOperation, ValueError) as e:
        raise ValueError(f"Invalid price: {value!r}") from e


@dataclass(frozen=True)
class Product:
    product_id: int
    name: str
    price: Decimal
    category: str
    description: str = ""
    image_url: str = ""
    stock_quantity: int = 0

    @classmethod
    def create(
        cls,
        product_id: int,
        name: str,
        price: Any,
        category: str,
        description: str = "",
        image_url: str = "",
        stock_quantity: int = 0,
    ) -> "Product":
        """Budowa z surowych danych: tekst przycinany i kodowany jako encje HTML."""
        return cls(
            product_id=product_id,
            name=sanitize_text(name),
            price=to_money(price),
            category=sanitize_text(category),
            description=sanitize_text(description),
            image_url=sanitize_text(image_url),
            stock_quantity=stock_quantity,
        )

    def is_valid(self) -> bool:
        return (
            bool(self.name and self.name.strip())
            and bool(self.category and self.category.strip())
            and self.price > 0
        )

    def formatted_details(self) -> str:
        return f"Product: {self.name} | Price: ${self.price:.2f} | Category: {self.category}"

    def __str__(self) -> str:
        return self.formatted_details()

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["price"] = str(self.price)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Product":
        # bez ponownego sanitize, dane juz raz przeszly przez create()
        return cls(
            product_id=int(data["product_id"]),
            name=data["name"],
            price=to_money(data["price"]),
            category=data["category"],
            description=data.get("description", ""),
            image_url=data.get("image_url", ""),
            stock_quantity=int(data.get("stock_quantity", 0)),
        )


@dataclass
class CartItem:
    product: Product
    quantity: int

    @property
    def product_id(self) -> int:
        return self.product.product_id

    @property
    def subtotal(self) -> Decimal:
        return self.product.price * self.quantity

    def to_dict(self) -> Dict[str, Any]:
        return {"product": self.product.to_dict(), "quantity": self.quantity}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CartItem":
        return cls(product=Product.from_dict(data["product"]), quantity=int(data["quantity"]))


@dataclass
class User:
    username: str
    email: str
    password_hash: str = ""
    user_id: int | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    is_active: bool = True

    def is_valid(self) -> bool:
        return (
            bool(self.username and self.username.strip())
            and bool(self.email and self.email.strip())
            and "@" in self.email
        )
