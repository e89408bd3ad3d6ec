import jwt
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from ordering.api.auth import JWT_ALGORITHM, JWT_SECRET
from ordering.api.errors import register_error_handlers
from ordering.api.routes import order_router, product_router, user_router


def make_app():
    app = FastAPI()
    app.include_router(user_router)
    app.include_router(order_router)
    app.include_router(product_router)
    register_error_handlers(app)
    return app


def auth_headers(user_id):
    token = jwt.encode({"id": user_id}, JWT_SECRET, algorithm=JWT_ALGORITHM)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def client():
    return TestClient(make_app())


@pytest.fixture()
def lenient_client():
    """Client that returns 500 responses instead of re-raising server errors."""
    return TestClient(make_app(), raise_server_exceptions=False)


@pytest.fixture()
def headers(user_id):
    return auth_headers(user_id)


@pytest.fixture()
def headers_for():
    return auth_headers
