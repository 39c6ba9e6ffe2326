import pytest

from app.database import product_db
from app.models.product import Product


def names(products):
    return [p.name for p in products]


@pytest.fixture
def retired_shirt():
    return product_db.add_product(
        Product(
            id="prod-099",
            name="Old Shirt",
            price=1000,
            stock=5,
            category_id="cat-apparel",
            sort_order=99,
            is_active=False,
        )
    )


class TestListProducts:
    def test_only_active_products(self):
        products = product_db.list_products()
        assert all(p.is_active for p in products)
        assert "Retired Tote Bag" not in names(products)

    def test_ordered_by_sort_order(self):
        orders = [p.sort_order for p in product_db.list_products()]
        assert orders == sorted(orders)

    def test_search_matches_name_case_insensitively(self, retired_shirt):
        products = product_db.list_products(search="shirt")
        assert names(products) == ["Logo T-Shirt", "Long Sleeve Shirt"]

    def test_search_ignores_description(self):
        assert product_db.list_products(search="answer keys") == []

    def test_category_filter(self):
        products = product_db.list_products(category="cat-books")
        assert {p.category_id for p in products} == {"cat-books"}
        assert len(products) == 2

    def test_filters_combine(self):
        assert names(product_db.list_products(search="logo", category="cat-apparel")) == ["Logo T-Shirt"]
        assert product_db.list_products(search="shirt", category="cat-books") == []

    def test_empty_filters_are_ignored(self):
        assert product_db.list_products(search="", category="") == product_db.list_products()

    def test_category_is_attached(self):
        product = product_db.list_products(search="workbook")[0]
        assert product.category.name == "Textbooks"


class TestCatalogRoutes:
    def test_list_products_camel_case(self, client):
        response = client.get("/api/products", params={"search": "workbook"})
        assert response.status_code == 200
        product = response.json()["products"][0]
        assert product["id"] == "prod-001"
        assert product["categoryId"] == "cat-books"
        assert product["isActive"] is True
        assert product["imageUrl"].startswith("https://")
        assert product["sortOrder"] == 1
        assert product["category"] == {"id": "cat-books", "name": "Textbooks"}

    def test_list_products_with_both_filters(self, client):
        response = client.get("/api/products", params={"search": "shirt", "category": "cat-apparel"})
        ids = [p["id"] for p in response.json()["products"]]
        assert ids == ["prod-003", "prod-004"]

    def test_no_match_is_empty_list(self, client):
        response = client.get("/api/products", params={"search": "nothing like this"})
        assert response.status_code == 200
        assert response.json() == {"products": []}

    def test_list_categories(self, client):
        response = client.get("/api/categories")
        assert response.status_code == 200
        assert {c["id"] for c in response.json()["categories"]} == {"cat-books", "cat-goods", "cat-apparel"}

    def test_get_product(self, client):
        response = client.get("/api/products/prod-003")
        assert response.status_code == 200
        assert response.json()["name"] == "Logo T-Shirt"

    def test_inactive_product_is_not_found(self, client):
        response = client.get("/api/products/prod-006")
        assert response.status_code == 404
        assert response.json() == {"error": "Product not found"}
