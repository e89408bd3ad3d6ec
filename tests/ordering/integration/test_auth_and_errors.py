"""Integration tests for authentication and the error envelope."""

from datetime import UTC, datetime, timedelta

import jwt
import pytest
from ordering.api.auth import JWT_ALGORITHM, JWT_SECRET
from protean.exceptions import InvalidOperationError, ObjectNotFoundError


class TestAuthentication:
    @pytest.mark.parametrize(
        "method,path",
        [
            ("post", "/users/cart"),
            ("delete", "/users/cart"),
            ("post", "/users/wishlist"),
            ("get", "/users/profile"),
            ("get", "/orders"),
            ("post", "/orders"),
            ("put", "/orders/some-order/status"),
        ],
    )
    def test_missing_token(self, client, method, path):
        response = client.request(method, path, json={})

        assert response.status_code == 401
        assert response.json()["message"] == "No token, authorization denied"

    def test_garbage_token(self, client):
        response = client.get("/orders", headers={"Authorization": "Bearer not-a-jwt"})

        assert response.status_code == 401
        assert response.json()["message"] == "Token is not valid"

    def test_wrong_secret(self, client):
        token = jwt.encode({"id": "user-001"}, "a-completely-different-signing-secret", algorithm=JWT_ALGORITHM)
        response = client.get("/orders", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401

    def test_expired_token(self, client):
        token = jwt.encode(
            {"id": "user-001", "exp": datetime.now(UTC) - timedelta(minutes=5)},
            JWT_SECRET,
            algorithm=JWT_ALGORITHM,
        )
        response = client.get("/orders", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401

    def test_token_without_user_claim(self, client):
        token = jwt.encode({"role": "admin"}, JWT_SECRET, algorithm=JWT_ALGORITHM)
        response = client.get("/orders", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401

    def test_sub_claim_accepted(self, client, user_id):
        token = jwt.encode({"sub": user_id}, JWT_SECRET, algorithm=JWT_ALGORITHM)
        response = client.get("/orders", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 200


class TestInternalErrors:
    def test_unexpected_error_is_masked(self, lenient_client, headers, monkeypatch):
        def _boom(user_id):
            raise RuntimeError("connection to db-primary:5432 refused")

        monkeypatch.setattr("ordering.api.routes.list_orders_for_user", _boom)

        response = lenient_client.get("/orders", headers=headers)

        assert response.status_code == 500
        assert response.json() == {"message": "Internal server error"}
        assert "db-primary" not in response.text


class TestErrorEnvelope:
    def test_state_errors_name_the_field(self, client, headers):
        empty_cart = client.post(
            "/orders",
            json={
                "shippingAddress": {
                    "streetAddress": "12 Analytical Way",
                    "city": "London",
                    "state": "Greater London",
                    "postalCode": "N1 9GU",
                    "country": "UK",
                },
                "paymentMethod": "creditCard",
                "shippingMethod": "domestic",
            },
            headers=headers,
        )

        assert empty_cart.status_code == 400
        assert empty_cart.json() == {"message": "Cart is empty", "errors": {"cart": ["Cart is empty"]}}

    def test_missing_records_name_the_record(self, client, headers, headers_for):
        order = client.put("/orders/no-such-order/status", json={"orderStatus": "paid"}, headers=headers)
        user = client.get("/users/profile", headers=headers_for("ghost-user"))
        product = client.get("/products/no-such-product")

        assert order.status_code == user.status_code == product.status_code == 404
        assert order.json()["errors"] == {"order_id": ["Order not found"]}
        assert user.json()["errors"] == {"user_id": ["User not found"]}
        assert product.json()["errors"] == {"product_id": ["Product not found"]}

    @pytest.mark.parametrize(
        "exc,status_code,message",
        [
            (ObjectNotFoundError({"order_id": ["Order not found"]}), 404, "Order not found"),
            (InvalidOperationError("Order is locked"), 400, "Order is locked"),
        ],
    )
    def test_store_exceptions_keep_their_message(self, client, headers, monkeypatch, exc, status_code, message):
        def _raise(user_id):
            raise exc

        monkeypatch.setattr("ordering.api.routes.list_orders_for_user", _raise)

        response = client.get("/orders", headers=headers)

        assert response.status_code == status_code
        assert response.json()["message"] == message
