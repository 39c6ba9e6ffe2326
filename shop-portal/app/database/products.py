"""Catalog storage for the shop portal"""

from typing import Optional
from ..models.product import Product, Category

CATEGORIES: dict[str, Category] = {
    "cat-books": Category(id="cat-books", name="Textbooks"),
    "cat-goods": Category(id="cat-goods", name="Study Goods"),
    "cat-apparel": Category(id="cat-apparel", name="Apparel"),
}

PRODUCTS: dict[str, Product] = {
    "prod-001": Product(
        id="prod-001",
        name="Beginner Course Workbook",
        description="Exercises and answer keys for the beginner course.",
        price=2800,
        stock=120,
        image_url="https://res.cloudinary.com/demo/image/upload/crm-system/workbook.jpg",
        category_id="cat-books",
        sort_order=1,
    ),
    "prod-002": Product(
        id="prod-002",
        name="Advanced Course Reader",
        description="Collected readings for the advanced course.",
        price=4200,
        stock=40,
        category_id="cat-books",
        sort_order=2,
    ),
    "prod-003": Product(
        id="prod-003",
        name="Logo T-Shirt",
        description="Cotton t-shirt with the school logo.",
        price=3500,
        stock=25,
        category_id="cat-apparel",
        sort_order=3,
    ),
    "prod-004": Product(
        id="prod-004",
        name="Long Sleeve Shirt",
        description="Long sleeve shirt for seminar days.",
        price=4800,
        stock=0,
        category_id="cat-apparel",
        sort_order=4,
    ),
    "prod-005": Product(
        id="prod-005",
        name="Study Planner",
        description="Twelve-month planner with weekly study goals.",
        price=1600,
        stock=80,
        category_id="cat-goods",
        sort_order=5,
    ),
    "prod-006": Product(
        id="prod-006",
        name="Retired Tote Bag",
        description="No longer sold.",
        price=1200,
        stock=10,
        category_id="cat-goods",
        sort_order=6,
        is_active=False,
    ),
}


class ProductDatabase:
    """In-memory catalog for the shop portal"""

    def __init__(self):
        self.reset()

    def reset(self) -> None:
        """Reload the seed catalog"""
        self.categories = {k: c.model_copy() for k, c in CATEGORIES.items()}
        self.products = {k: p.model_copy() for k, p in PRODUCTS.items()}

    def add_product(self, product: Product) -> Product:
        self.products[product.id] = product
        return product

    def add_category(self, category: Category) -> Category:
        self.categories[category.id] = category
        return category

    def get_product(self, product_id: str) -> Optional[Product]:
        """Get a product by ID, with its category attached"""
        product = self.products.get(product_id)
        return self._with_category(product) if product else None

    def list_products(
        self,
        search: Optional[str] = None,
        category: Optional[str] = None,
    ) -> list[Product]:
        """
        List active products.

        Args:
            search: Case-insensitive substring of the product name
            category: Exact category ID

        Both filters are optional; empty strings are ignored.
        """
        results = [p for p in self.products.values() if p.is_active]

        if search:
            search_lower = search.strip().lower()
            results = [p for p in results if search_lower in p.name.lower()]

        if category:
            results = [p for p in results if p.category_id == category]

        results.sort(key=lambda p: (p.sort_order, p.name))
        return [self._with_category(p) for p in results]

    def list_categories(self) -> list[Category]:
        """Get all categories"""
        return sorted(self.categories.values(), key=lambda c: c.name)

    def _with_category(self, product: Product) -> Product:
        category = self.categories.get(product.category_id) if product.category_id else None
        return product.model_copy(update={"category": category})


# Singleton instance
product_db = ProductDatabase()
