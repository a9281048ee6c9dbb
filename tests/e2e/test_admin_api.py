"""
HTTP tests for admin accounts and back-office endpoints
"""
from decimal import Decimal

import pytest

from storefront.models.product import Product
from storefront.models.user import User


def _admin_payload(email="boss@x.com", code="TEST-ADMIN-CODE"):
    return {
        "firstName": "Store",
        "lastName": "Owner",
        "email": email,
        "password": "secret1",
        "adminCode": code,
    }


@pytest.mark.e2e
class TestAdminAccounts:
    def test_bootstrap_then_admin_login(self, client):
        response = client.post("/api/admin/create", json=_admin_payload())
        assert response.status_code == 201

        response = client.post("/api/admin/login", json={"email": "boss@x.com", "password": "secret1"})
        assert response.status_code == 200
        token = response.json()["token"]

        response = client.get("/api/admin/check", headers={"Authorization": f"Bearer {token}"})
        assert response.json() == {"isAdmin": True}

    def test_bad_code_rejected(self, client, test_db):
        response = client.post("/api/admin/create", json=_admin_payload(code="wrong"))

        assert response.status_code == 401
        assert response.json() == {"message": "Invalid admin creation code"}
        assert test_db.query(User).count() == 0

    def test_password_longer_than_72_bytes_rejected(self, client, test_db):
        payload = _admin_payload()
        payload["password"] = "\u00e9" * 40

        response = client.post("/api/admin/create", json=payload)

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "password"
        assert test_db.query(User).count() == 0

    def test_second_admin_needs_admin_token(self, client, admin_user, customer, headers_for):
        assert client.post("/api/admin/create", json=_admin_payload()).status_code == 401
        assert client.post(
            "/api/admin/create", json=_admin_payload(), headers=headers_for(customer)
        ).status_code == 403

        response = client.post("/api/admin/create", json=_admin_payload(), headers=headers_for(admin_user))
        assert response.status_code == 201

    def test_customer_cannot_use_admin_login(self, client, customer):
        response = client.post("/api/admin/login", json={"email": "customer@shop.com", "password": "secret1"})
        assert response.status_code == 401

    def test_revoke(self, client, customer, admin_user, headers_for):
        client.post("/api/admin/promote", json={"userId": customer.id}, headers=headers_for(admin_user))

        response = client.post("/api/admin/revoke", json={"userId": customer.id}, headers=headers_for(admin_user))
        assert response.status_code == 200
        assert client.get("/api/admin/check", headers=headers_for(customer)).json() == {"isAdmin": False}

    def test_cannot_revoke_self(self, client, admin_user, headers_for):
        response = client.post("/api/admin/revoke", json={"userId": admin_user.id}, headers=headers_for(admin_user))
        assert response.status_code == 400

    def test_promote_unknown_user(self, client, admin_user, headers_for):
        response = client.post("/api/admin/promote", json={"userId": "missing"}, headers=headers_for(admin_user))
        assert response.status_code == 404


@pytest.mark.e2e
class TestBackOffice:
    def test_stats(self, client, admin_user, catalog, headers_for):
        response = client.get("/api/admin/stats", headers=headers_for(admin_user))

        assert response.status_code == 200
        stats = response.json()
        assert stats["totalProducts"] == 4
        assert stats["featuredProducts"] == 2
        assert stats["totalCategories"] == 2
        assert Decimal(stats["totalRevenue"]) == Decimal("0")
        assert len(stats["productsByCategory"]) == 2

    def test_stats_forbidden_for_customers(self, client, customer, headers_for):
        assert client.get("/api/admin/stats", headers=headers_for(customer)).status_code == 403

    def test_list_users_marks_admins(self, client, admin_user, customer, headers_for):
        response = client.get("/api/admin/users", headers=headers_for(admin_user))

        body = response.json()
        assert body["total"] == 2
        flags = {u["email"]: u["isAdmin"] for u in body["users"]}
        assert flags == {"admin@shop.com": True, "customer@shop.com": False}

    def test_toggle_user_status(self, client, admin_user, customer, headers_for):
        response = client.put(f"/api/admin/users/{customer.id}/toggle-status", headers=headers_for(admin_user))

        assert response.status_code == 200
        assert response.json()["isActive"] is False
        assert client.get("/api/user", headers=headers_for(customer)).status_code == 403


@pytest.mark.e2e
class TestCatalogManagement:
    def test_product_lifecycle(self, client, test_db, admin_user, category, headers_for):
        headers = headers_for(admin_user)

        response = client.post(
            "/api/admin/products",
            json={
                "name": "Custom Basketball Jersey",
                "price": "1599.00",
                "salePrice": "1299.00",
                "categoryId": category.id,
                "stock": 20,
                "availableSizes": ["M", "L"],
            },
            headers=headers,
        )
        assert response.status_code == 201
        created = response.json()
        assert created["slug"] == "custom-basketball-jersey"
        assert created["availableSizes"] == ["M", "L"]

        response = client.put(f"/api/admin/products/{created['id']}", json={"stock": 5}, headers=headers)
        assert response.json()["stock"] == 5

        response = client.delete(f"/api/admin/products/{created['id']}", headers=headers)
        assert response.status_code == 200
        assert client.get("/api/products/custom-basketball-jersey").status_code == 404
        assert test_db.query(Product).count() == 1

        listing = client.get("/api/admin/products", headers=headers).json()
        assert listing["total"] == 1
        assert listing["products"][0]["isActive"] is False

    def test_invalid_sale_price(self, client, admin_user, headers_for):
        response = client.post(
            "/api/admin/products",
            json={"name": "Bad", "price": "100", "salePrice": "150"},
            headers=headers_for(admin_user),
        )

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "salePrice"

    def test_category_crud(self, client, admin_user, headers_for):
        headers = headers_for(admin_user)

        response = client.post("/api/admin/categories", json={"name": "Basketball Jersey"}, headers=headers)
        assert response.status_code == 201
        category_id = response.json()["id"]
        assert response.json()["slug"] == "basketball-jersey"

        assert client.post("/api/admin/categories", json={"name": "Basketball Jersey"}, headers=headers).status_code == 409

        response = client.put(f"/api/admin/categories/{category_id}", json={"description": "Hoops"}, headers=headers)
        assert response.json()["description"] == "Hoops"

        assert client.delete(f"/api/admin/categories/{category_id}", headers=headers).status_code == 200
        assert client.get("/api/categories").json() == []

    def test_customer_cannot_manage_categories(self, client, customer, category, headers_for):
        headers = headers_for(customer)

        assert client.post("/api/admin/categories", json={"name": "X"}, headers=headers).status_code == 403
        assert client.delete(f"/api/admin/categories/{category.id}", headers=headers).status_code == 403
        assert client.get("/api/categories").json()[0]["slug"] == "cricket"
