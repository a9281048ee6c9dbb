"""
HTTP tests for registration, login and bearer authentication
"""
import pytest

from storefront.models.user import User
from storefront.services.identity_service import identity_service


def _registration(**overrides):
    data = {
        "email": "a@x.com",
        "password": "secret1",
        "firstName": "Aarav",
        "lastName": "Patel",
        "mobileNumber": "+919876543210",
    }
    data.update(overrides)
    return data


@pytest.mark.e2e
class TestRegister:
    def test_duplicate_email_conflict(self, client):
        assert client.post("/api/register", json=_registration()).status_code == 201

        response = client.post("/api/register", json=_registration(email="A@X.com"))
        assert response.status_code == 409
        assert response.json() == {"message": "User already exists"}

    def test_invalid_fields_report_validation_errors(self, client):
        response = client.post(
            "/api/register",
            json=_registration(email="not-an-email", password="123", mobileNumber="12345"),
        )

        assert response.status_code == 400
        body = response.json()
        assert body["message"] == "Invalid data"
        assert {e["field"] for e in body["errors"]} == {"email", "password", "mobileNumber"}

    def test_password_longer_than_72_bytes_rejected(self, client, test_db):
        # 40 characters but 80 bytes in UTF-8
        response = client.post("/api/register", json=_registration(password="\u00e9" * 40))

        assert response.status_code == 400
        assert [e["field"] for e in response.json()["errors"]] == ["password"]
        assert test_db.query(User).count() == 0

    def test_multibyte_password_within_limit(self, client):
        password = "\u00e9" * 36
        assert client.post("/api/register", json=_registration(password=password)).status_code == 201

        response = client.post("/api/login", json={"email": "a@x.com", "password": password})
        assert response.status_code == 200

    def test_missing_field(self, client):
        data = _registration()
        del data["lastName"]

        response = client.post("/api/register", json=data)
        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "lastName"


@pytest.mark.e2e
class TestLogin:
    def test_wrong_password(self, client, customer):
        response = client.post("/api/login", json={"email": "customer@shop.com", "password": "nope"})

        assert response.status_code == 401
        assert response.json() == {"message": "Invalid credentials"}

    def test_unknown_email_gets_same_message(self, client):
        response = client.post("/api/login", json={"email": "ghost@x.com", "password": "secret1"})

        assert response.status_code == 401
        assert response.json() == {"message": "Invalid credentials"}


@pytest.mark.e2e
class TestBearerAuth:
    def test_missing_token(self, client):
        response = client.get("/api/user")

        assert response.status_code == 401
        assert response.json() == {"message": "Access token required"}

    def test_garbage_token(self, client):
        response = client.get("/api/cart", headers={"Authorization": "Bearer garbage"})

        assert response.status_code == 401
        assert response.json() == {"message": "Invalid or expired token"}

    def test_deactivated_account_forbidden(self, client, test_db, customer, admin_user, headers_for):
        identity_service.toggle_active(test_db, customer.id, requester_id=admin_user.id)

        response = client.get("/api/user", headers=headers_for(customer))
        assert response.status_code == 403


@pytest.mark.e2e
def test_health(client):
    assert client.get("/health").json() == {"status": "healthy"}
