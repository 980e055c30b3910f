from typing import List

from .core import Product

# Catalog the mock service starts with (and returns to on reset).

SEED_PRODUCTS: List[Product] = [
    Product(
        id="1",
        name="Laptop Pro",
        description="High-performance laptop for professionals",
        price=1299.99,
        category="Electronics",
        in_stock=True,
        created_at="2024-01-15T10:00:00Z",
        updated_at="2024-01-15T10:00:00Z",
    ),
    Product(
        id="2",
        name="Wireless Headphones",
        description="Premium noise-cancelling wireless headphones",
        price=299.99,
        category="Electronics",
        in_stock=True,
        created_at="2024-01-16T09:30:00Z",
        updated_at="2024-01-16T09:30:00Z",
    ),
    Product(
        id="3",
        name="Coffee Maker",
        description="Automatic drip coffee maker with timer",
        price=89.99,
        category="Home & Kitchen",
        in_stock=False,
        created_at="2024-01-17T14:15:00Z",
        updated_at="2024-01-17T14:15:00Z",
    ),
    Product(
        id="4",
        name="Running Shoes",
        description="Comfortable running shoes with excellent cushioning",
        price=129.99,
        category="Sports",
        in_stock=True,
        created_at="2024-01-18T11:45:00Z",
        updated_at="2024-01-18T11:45:00Z",
    ),
    Product(
        id="5",
        name="Desk Lamp",
        description="LED desk lamp with adjustable brightness",
        price=45.99,
        category="Home & Office",
        in_stock=True,
        created_at="2024-01-19T16:20:00Z",
        updated_at="2024-01-19T16:20:00Z",
    ),
]

# Suggestions offered by the UI; free-form categories are still accepted.
CATEGORIES: List[str] = [
    "Electronics",
    "Home & Kitchen",
    "Sports",
    "Home & Office",
    "Books",
    "Clothing",
    "Health & Beauty",
    "Toys",
]
