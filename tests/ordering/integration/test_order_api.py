"""Integration tests for order endpoints via TestClient."""

from ordering.account.registration import RegisterUser
from ordering.cart.lookup import cart_for
from ordering.order.order import Order
from protean import current_domain

SHIPPING_ADDRESS = {
    "streetAddress": "12 Analytical Way",
    "apartment": "4B",
    "city": "London",
    "state": "Greater London",
    "postalCode": "N1 9GU",
    "country": "UK",
}


def _fill_cart(client, headers, product_id, quantity):
    response = client.post(
        "/users/cart",
        json={"productId": product_id, "actionType": "UPDATE", "quantity": quantity},
        headers=headers,
    )
    assert response.status_code == 200
    return response.json()


def _order_body(**overrides):
    body = {
        "email": "ada@example.com",
        "firstName": "Ada",
        "lastName": "Lovelace",
        "shippingAddress": SHIPPING_ADDRESS,
        "paymentMethod": "creditCard",
        "shippingMethod": "domestic",
        "useShippingAsBilling": True,
    }
    body.update(overrides)
    return body


def _place(client, headers, **overrides):
    return client.post("/orders", json=_order_body(**overrides), headers=headers)


class TestPlaceOrderEndpoint:
    def test_place_order(self, client, headers, products, user_id):
        _fill_cart(client, headers, products["widget"], 2)

        response = _place(client, headers)

        assert response.status_code == 201
        order = response.json()["order"]
        assert order["userId"] == user_id
        assert order["totalPrice"] == 20.0
        assert order["orderStatus"] == "pending"
        assert order["products"][0]["productId"] == products["widget"]
        assert order["products"][0]["quantity"] == 2
        assert order["shippingAddress"]["postalCode"] == "N1 9GU"
        assert order["paymentMethod"] == "creditCard"
        assert cart_for(user_id).is_empty

    def test_empty_cart(self, client, headers):
        response = _place(client, headers)

        assert response.status_code == 400
        assert response.json()["message"] == "Cart is empty"

    def test_incomplete_address(self, client, headers, products):
        _fill_cart(client, headers, products["widget"], 1)

        response = _place(client, headers, shippingAddress=dict(SHIPPING_ADDRESS, city=""))

        assert response.status_code == 400
        assert current_domain.repository_for(Order)._dao.query.all().total == 0

    def test_missing_address(self, client, headers, products):
        _fill_cart(client, headers, products["widget"], 1)
        body = _order_body()
        del body["shippingAddress"]

        response = client.post("/orders", json=body, headers=headers)
        assert response.status_code == 400

    def test_unknown_payment_method(self, client, headers, products):
        _fill_cart(client, headers, products["widget"], 1)

        response = _place(client, headers, paymentMethod="cash")
        assert response.status_code == 400

    def test_unknown_user(self, client, headers_for):
        response = _place(client, headers_for("ghost"))
        assert response.status_code == 404

    def test_stale_cart_version(self, client, headers, products):
        cart_version = _fill_cart(client, headers, products["widget"], 1)["cartVersion"]
        _fill_cart(client, headers, products["gadget"], 1)

        response = _place(client, headers, expectedCartVersion=cart_version)

        assert response.status_code == 400
        assert response.json()["message"] == "Cart changed since it was last read"

    def test_double_submit_creates_one_order(self, client, headers, products, user_id):
        _fill_cart(client, headers, products["widget"], 1)

        first = _place(client, headers)
        second = _place(client, headers)

        assert first.status_code == 201
        assert second.status_code == 400
        orders = current_domain.repository_for(Order)._dao.query.filter(user_id=user_id).all().items
        assert len(orders) == 1


class TestListOrdersEndpoint:
    def test_no_orders(self, client, headers):
        response = client.get("/orders", headers=headers)

        assert response.status_code == 200
        assert response.json()["orders"] == []

    def test_lists_own_orders_newest_first(self, client, headers, products):
        _fill_cart(client, headers, products["widget"], 1)
        first = _place(client, headers).json()["order"]["id"]
        _fill_cart(client, headers, products["gadget"], 2)
        second = _place(client, headers).json()["order"]["id"]

        response = client.get("/orders", headers=headers)

        assert [order["id"] for order in response.json()["orders"]] == [second, first]


class TestUpdateOrderStatusEndpoint:
    def _order_id(self, client, headers, products):
        _fill_cart(client, headers, products["widget"], 2)
        return _place(client, headers).json()["order"]["id"]

    def test_owner_updates_status(self, client, headers, products):
        order_id = self._order_id(client, headers, products)

        response = client.put(f"/orders/{order_id}/status", json={"orderStatus": "paid"}, headers=headers)

        assert response.status_code == 200
        assert response.json()["order"]["orderStatus"] == "paid"
        assert response.json()["order"]["totalPrice"] == 20.0

    def test_unknown_order(self, client, headers):
        response = client.put("/orders/no-such-order/status", json={"orderStatus": "paid"}, headers=headers)

        assert response.status_code == 404
        assert response.json()["message"] == "Order not found"

    def test_non_owner(self, client, headers, headers_for, products):
        order_id = self._order_id(client, headers, products)
        intruder = current_domain.process(
            RegisterUser(first_name="Eve", last_name="Smith", email="eve@example.com"),
            asynchronous=False,
        )

        response = client.put(
            f"/orders/{order_id}/status",
            json={"orderStatus": "paid"},
            headers=headers_for(intruder),
        )

        assert response.status_code == 403
        assert response.json()["message"] == "You are not authorized to update this order"
        assert current_domain.repository_for(Order).get(order_id).order_status == "pending"

    def test_invalid_status(self, client, headers, products):
        order_id = self._order_id(client, headers, products)

        response = client.put(f"/orders/{order_id}/status", json={"orderStatus": "lost"}, headers=headers)

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid order status"

    def test_disallowed_transition(self, client, headers, products):
        order_id = self._order_id(client, headers, products)

        response = client.put(f"/orders/{order_id}/status", json={"orderStatus": "completed"}, headers=headers)

        assert response.status_code == 400
        assert response.json()["message"] == "Cannot transition from pending to completed"
