"""
End-to-end storefront flows through the HTTP API
"""
import pytest

from storefront.models.admin import AdminGrant
from storefront.models.product import Product

REGISTRATION = {
    "email": "a@x.com",
    "password": "secret1",
    "firstName": "Aarav",
    "lastName": "Patel",
    "mobileNumber": "9876543210",
}


@pytest.mark.e2e
class TestStorefrontFlows:
    def test_register_login_and_read_profile(self, client):
        response = client.post("/api/register", json=REGISTRATION)
        assert response.status_code == 201
        assert response.json()["user"]["email"] == "a@x.com"
        assert response.json()["token"]

        response = client.post("/api/login", json={"email": "a@x.com", "password": "secret1"})
        assert response.status_code == 200
        token = response.json()["token"]

        response = client.get("/api/user", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 200
        profile = response.json()
        assert profile["email"] == "a@x.com"
        assert profile["firstName"] == "Aarav"
        assert profile["lastName"] == "Patel"
        assert profile["mobileNumber"] == "9876543210"

    def test_adding_same_product_twice_merges_cart_line(self, client, customer, product, headers_for):
        headers = headers_for(customer)

        response = client.post("/api/cart", json={"productId": product.id, "quantity": 2}, headers=headers)
        assert response.status_code == 200
        response = client.post("/api/cart", json={"productId": product.id, "quantity": 3}, headers=headers)
        assert response.status_code == 200

        cart = client.get("/api/cart", headers=headers).json()
        assert len(cart) == 1
        assert cart[0]["quantity"] == 5
        assert cart[0]["product"]["slug"] == product.slug

    def test_non_admin_cannot_create_product(self, client, test_db, customer, category, headers_for):
        response = client.post(
            "/api/admin/products",
            json={"name": "Sneaky Jersey", "price": "10.00", "categoryId": category.id},
            headers=headers_for(customer),
        )

        assert response.status_code == 403
        assert test_db.query(Product).count() == 0

    def test_search_is_case_insensitive_and_skips_inactive(self, client, catalog):
        response = client.get("/api/products", params={"search": "cricket"})

        assert response.status_code == 200
        assert [p["slug"] for p in response.json()] == [
            "modern-cricket-red",
            "football-home",
            "classic-cricket-white",
        ]

    def test_promote_then_check_is_idempotent(self, client, test_db, customer, admin_user, headers_for):
        response = client.get("/api/admin/check", headers=headers_for(customer))
        assert response.json() == {"isAdmin": False}

        for _ in range(2):
            response = client.post(
                "/api/admin/promote", json={"userId": customer.id}, headers=headers_for(admin_user)
            )
            assert response.status_code == 200

        response = client.get("/api/admin/check", headers=headers_for(customer))
        assert response.json() == {"isAdmin": True}
        assert test_db.query(AdminGrant).filter_by(user_id=customer.id).count() == 1
