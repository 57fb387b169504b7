"""Tests for the catalog routes, public reads and admin writes, and health."""

from decimal import Decimal

from storefront.data.models import ProductModel
from storefront.data.seed import seed_categories


def test_categories_seeded_once(client, db):
    assert seed_categories(db) == 3
    assert seed_categories(db) == 0

    resp = client.get("/api/categories")
    assert resp.status_code == 200
    assert [c["name"] for c in resp.json()] == ["Jeans", "Shirts", "T-Shirts"]


def test_products_filtered_by_category(client, db):
    db.add_all(
        [
            ProductModel(name="Basic Tee", category="T-Shirts", price=Decimal("300")),
            ProductModel(name="Slim Jeans", category="Jeans", price=Decimal("900"), stock=4),
        ]
    )
    db.commit()

    resp = client.get("/api/products", params={"category": "Jeans"})
    assert resp.status_code == 200
    [product] = resp.json()
    assert product["name"] == "Slim Jeans"
    assert product["stock"] == 4

    assert len(client.get("/api/products").json()) == 2


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "database": True}


class TestAdminProducts:
    def test_created_product_is_listed(self, client, admin_auth):
        resp = client.post(
            "/api/admin/products",
            json={"name": "Basic Tee", "category": "T-Shirts", "price": 300, "stock": 12},
            headers=admin_auth,
        )
        assert resp.status_code == 201
        body = resp.json()
        assert body["message"] == "Product created successfully"

        [product] = client.get("/api/products", params={"category": "T-Shirts"}).json()
        assert product["id"] == body["productId"]
        assert product["name"] == "Basic Tee"
        assert Decimal(product["price"]) == Decimal("300")
        assert product["stock"] == 12
        assert product["image"] == ""

    def test_required_fields(self, client, admin_auth):
        for body in (
            {"category": "Jeans", "price": 900},
            {"name": "Slim Jeans", "price": 900},
            {"name": "Slim Jeans", "category": "Jeans"},
            {"name": "Slim Jeans", "category": "Jeans", "price": 0},
        ):
            resp = client.post("/api/admin/products", json=body, headers=admin_auth)
            assert resp.status_code == 400
            assert resp.json() == {"error": "Name, category, and price are required"}
        assert client.get("/api/products").json() == []

    def test_update_replaces_fields(self, client, admin_auth, query):
        product_id = client.post(
            "/api/admin/products",
            json={"name": "Tee", "category": "T-Shirts", "price": 300, "description": "cotton"},
            headers=admin_auth,
        ).json()["productId"]

        resp = client.put(
            f"/api/admin/products/{product_id}",
            json={"name": "Tee v2", "category": "T-Shirts", "price": 350, "stock": 3},
            headers=admin_auth,
        )
        assert resp.status_code == 200
        assert resp.json() == {"message": "Product updated successfully"}

        product = query(lambda s: s.get(ProductModel, product_id))
        assert product.name == "Tee v2"
        assert product.price == Decimal("350")
        assert product.stock == 3
        assert product.description == ""
        assert product.updated_at is not None

    def test_update_and_delete_missing_product(self, client, admin_auth):
        body = {"name": "Tee", "category": "T-Shirts", "price": 300}
        resp = client.put("/api/admin/products/9999", json=body, headers=admin_auth)
        assert resp.status_code == 404
        assert resp.json() == {"error": "Product not found"}
        assert client.delete("/api/admin/products/9999", headers=admin_auth).status_code == 404

    def test_delete(self, client, admin_auth):
        product_id = client.post(
            "/api/admin/products", json={"name": "Tee", "category": "T-Shirts", "price": 300}, headers=admin_auth
        ).json()["productId"]
        resp = client.delete(f"/api/admin/products/{product_id}", headers=admin_auth)
        assert resp.status_code == 200
        assert client.get("/api/products").json() == []

    def test_writes_require_admin(self, client, auth):
        body = {"name": "Tee", "category": "T-Shirts", "price": 300}
        assert client.post("/api/admin/products", json=body, headers=auth).status_code == 403
        assert client.post("/api/admin/products", json=body).status_code == 401
        assert client.post("/api/admin/categories", json={"name": "Caps"}, headers=auth).status_code == 403


class TestAdminCategories:
    def test_create_category(self, client, admin_auth, db):
        seed_categories(db)
        resp = client.post(
            "/api/admin/categories", json={"name": "Caps", "description": "Headwear"}, headers=admin_auth
        )
        assert resp.status_code == 201
        body = resp.json()
        assert body["message"] == "Category added successfully"
        assert body["category"]["name"] == "Caps"
        assert body["category"]["description"] == "Headwear"

        names = [c["name"] for c in client.get("/api/categories").json()]
        assert names == ["Caps", "Jeans", "Shirts", "T-Shirts"]

    def test_duplicate_name_ignores_case(self, client, admin_auth, db):
        seed_categories(db)
        resp = client.post("/api/admin/categories", json={"name": "jeans"}, headers=admin_auth)
        assert resp.status_code == 400
        assert resp.json() == {"error": "Category already exists"}

    def test_name_required(self, client, admin_auth):
        resp = client.post("/api/admin/categories", json={"description": "nameless"}, headers=admin_auth)
        assert resp.status_code == 400
        assert resp.json() == {"error": "Category name is required"}
