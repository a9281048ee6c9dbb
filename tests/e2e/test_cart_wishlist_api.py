"""
HTTP tests for cart and wishlist endpoints
"""
import pytest


@pytest.mark.e2e
class TestCartApi:
    def test_cart_requires_token(self, client):
        assert client.get("/api/cart").status_code == 401
        assert client.post("/api/cart", json={"productId": "x"}).status_code == 401

    def test_add_with_options(self, client, customer, product, headers_for):
        response = client.post(
            "/api/cart",
            json={
                "productId": product.id,
                "selectedSize": "XL",
                "selectedColor": {"name": "Blue", "hex": "#2563eb"},
                "customization": {"playerName": "DHONI", "playerNumber": "7"},
            },
            headers=headers_for(customer),
        )

        assert response.status_code == 200
        line = response.json()
        assert line["quantity"] == 1
        assert line["selectedSize"] == "XL"
        assert line["selectedColor"] == {"name": "Blue", "hex": "#2563eb"}
        assert line["customization"]["playerName"] == "DHONI"

    def test_zero_quantity_rejected(self, client, customer, product, headers_for):
        response = client.post(
            "/api/cart", json={"productId": product.id, "quantity": 0}, headers=headers_for(customer)
        )

        assert response.status_code == 400
        assert response.json()["errors"] == [{"field": "quantity", "message": "Quantity must be at least 1"}]

    def test_unknown_product(self, client, customer, headers_for):
        response = client.post("/api/cart", json={"productId": "missing"}, headers=headers_for(customer))
        assert response.status_code == 404

    def test_update_and_remove_line(self, client, customer, product, headers_for):
        headers = headers_for(customer)
        line_id = client.post("/api/cart", json={"productId": product.id, "quantity": 4}, headers=headers).json()["id"]

        response = client.patch(f"/api/cart/{line_id}", json={"quantity": 1}, headers=headers)
        assert response.status_code == 200
        assert response.json()["quantity"] == 1

        assert client.delete(f"/api/cart/{line_id}", headers=headers).status_code == 200
        assert client.delete(f"/api/cart/{line_id}", headers=headers).status_code == 200
        assert client.get("/api/cart", headers=headers).json() == []

    def test_cannot_update_someone_elses_line(self, client, customer, admin_user, product, headers_for):
        line_id = client.post(
            "/api/cart", json={"productId": product.id}, headers=headers_for(customer)
        ).json()["id"]

        response = client.patch(f"/api/cart/{line_id}", json={"quantity": 9}, headers=headers_for(admin_user))
        assert response.status_code == 404

    def test_clear_cart(self, client, customer, catalog, headers_for):
        headers = headers_for(customer)
        for slug in ("football-home", "football-away"):
            client.post("/api/cart", json={"productId": catalog[slug].id}, headers=headers)

        response = client.delete("/api/cart", headers=headers)
        assert response.json() == {"message": "Cart cleared", "removed": 2}


@pytest.mark.e2e
class TestWishlistApi:
    def test_add_twice_returns_same_entry(self, client, customer, product, headers_for):
        headers = headers_for(customer)

        first = client.post("/api/wishlist", json={"productId": product.id}, headers=headers)
        second = client.post("/api/wishlist", json={"productId": product.id}, headers=headers)

        assert first.status_code == 200
        assert second.json()["id"] == first.json()["id"]
        wishlist = client.get("/api/wishlist", headers=headers).json()
        assert len(wishlist) == 1
        assert wishlist[0]["product"]["id"] == product.id

    def test_remove_by_product_id(self, client, customer, product, headers_for):
        headers = headers_for(customer)
        client.post("/api/wishlist", json={"productId": product.id}, headers=headers)

        assert client.delete(f"/api/wishlist/{product.id}", headers=headers).status_code == 200
        assert client.delete(f"/api/wishlist/{product.id}", headers=headers).status_code == 200
        assert client.get("/api/wishlist", headers=headers).json() == []
