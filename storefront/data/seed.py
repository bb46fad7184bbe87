# storefront/data/seed.py
from decimal import Decimal

from storefront.data.database import SessionLocal
from storefront.data.models.product import ProductModel
from storefront.repos.product_repo import ProductRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

SAMPLE_PRODUCTS = [
    ("Laptop", Decimal("999.99"), "Electronics", "High-performance laptop", "https://images.unsplash.com/photo-1496181133206-80ce9b88a853", 10),
    ("Smartphone", Decimal("699.99"), "Electronics", "Latest smartphone model", "https://images.unsplash.com/photo-1511707171634-5f897ff02aa9", 15),
    ("Headphones", Decimal("149.99"), "Electronics", "Wireless noise-canceling headphones", "https://images.unsplash.com/photo-1505740420928-5e560c06d30e", 20),
    ("Coffee Maker", Decimal("79.99"), "Home & Kitchen", "Programmable coffee maker", "https://images.unsplash.com/photo-1517668808822-9ebb02f2a0e6", 12),
    ("Running Shoes", Decimal("89.99"), "Sports", "Comfortable running shoes", "https://images.unsplash.com/photo-1542291026-7eec264c27ff", 25),
    ("Backpack", Decimal("49.99"), "Accessories", "Durable travel backpack", "https://images.unsplash.com/photo-1553062407-98eeb64c6a62", 18),
    ("Desk Lamp", Decimal("34.99"), "Home & Office", "LED desk lamp", "https://images.unsplash.com/photo-1507473885765-e6ed057f782c", 30),
    ("Water Bottle", Decimal("19.99"), "Sports", "Insulated water bottle", "https://images.unsplash.com/photo-1602143407151-7111542de6e8", 40),
]


def seed(session_factory=SessionLocal) -> int:
    """Wstawia przykladowe produkty tylko gdy tabela jest pusta. Zwraca ile dodano."""
    db = session_factory()
    try:
        repo = ProductRepo(db)
        if repo.count() > 0:
            return 0

        for name, price, category, description, image_url, stock in SAMPLE_PRODUCTS:
            repo.create_product(
                ProductModel(
                    name=name,
                    price=price,
                    category=category,
                    description=description,
                    image_url=image_url,
                    stock_quantity=stock,
                )
            )

        logger.info(f"Seeded {len(SAMPLE_PRODUCTS)} sample products")
        return len(SAMPLE_PRODUCTS)
    finally:
        db.close()
