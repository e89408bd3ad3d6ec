"""FastAPI routes for the Ordering domain — cart, wishlist, orders and catalog reads."""

import json

from fastapi import APIRouter, Depends, Query
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from ordering.account.lookup import find_user
from ordering.account.wishlist import AddToWishlist, RemoveFromWishlist
from ordering.api.auth import current_user_id
from ordering.api.schemas import (
    CartLineSchema,
    CartResponse,
    FetchProductsRequest,
    OrderListResponse,
    OrderResponse,
    OrderSchema,
    PlaceOrderRequest,
    ProductListResponse,
    ProductPageResponse,
    ProductSchema,
    ProfileResponse,
    UpdateOrderStatusRequest,
    UpsertCartLineRequest,
    WishlistRequest,
    WishlistResponse,
)
from ordering.cart.lines import ClearCart, RemoveCartLine, UpsertCartLine
from ordering.cart.lookup import cart_for
from ordering.catalog.listing import list_products
from ordering.catalog.lookup import find_product
from ordering.catalog.product import Product
from ordering.order.history import list_orders_for_user
from ordering.order.order import Order
from ordering.order.placement import PlaceOrder
from ordering.order.status import UpdateOrderStatus


# ---------------------------------------------------------------------------
# Serialization helpers
# ---------------------------------------------------------------------------
def _cart_lines(cart) -> list[CartLineSchema]:
    return [CartLineSchema(**line) for line in cart.snapshot_lines()]


def _order_out(order) -> OrderSchema:
    address = order.shipping_address
    return OrderSchema(
        id=str(order.id),
        user_id=str(order.user_id),
        email=order.email,
        first_name=order.first_name,
        last_name=order.last_name,
        products=[
            {
                "product_id": str(line.product_id),
                "product_name": line.product_name,
                "product_image": line.product_image,
                "quantity": line.quantity,
                "price": line.price,
            }
            for line in order.products or []
        ],
        total_price=order.total_price,
        order_status=order.order_status,
        shipping_address=(
            {
                "street_address": address.street_address,
                "apartment": address.apartment,
                "city": address.city,
                "state": address.state,
                "postal_code": address.postal_code,
                "country": address.country,
            }
            if address
            else None
        ),
        payment_method=order.payment_method,
        shipping_method=order.shipping_method,
        use_shipping_as_billing=bool(order.use_shipping_as_billing),
        newsletter_subscribed=bool(order.newsletter_subscribed),
        created_at=order.created_at,
    )


def _product_out(product) -> ProductSchema:
    return ProductSchema(
        id=str(product.id),
        name=product.name,
        description=product.description,
        product_images=list(product.product_images or []),
        price=product.price,
        stock=product.stock or 0,
        category=product.category,
        sub_category=product.sub_category,
        brand=product.brand,
        created_at=product.created_at,
    )


def _cart_response(message: str, user_id: str) -> CartResponse:
    cart = cart_for(user_id)
    return CartResponse(message=message, cart=_cart_lines(cart), cart_version=cart.version or 0)


# ---------------------------------------------------------------------------
# User Router (cart, wishlist, profile)
# ---------------------------------------------------------------------------
user_router = APIRouter(prefix="/users", tags=["users"])


@user_router.post("/cart", response_model=CartResponse)
async def upsert_cart_line(
    body: UpsertCartLineRequest,
    user_id: str = Depends(current_user_id),
) -> CartResponse:
    command = UpsertCartLine(
        user_id=user_id,
        product_id=body.product_id,
        action_type=body.action_type,
        quantity=body.quantity,
    )
    current_domain.process(command, asynchronous=False)
    return _cart_response("Cart updated", user_id)


@user_router.delete("/cart/{product_id}", response_model=CartResponse)
async def remove_cart_line(product_id: str, user_id: str = Depends(current_user_id)) -> CartResponse:
    command = RemoveCartLine(user_id=user_id, product_id=product_id)
    current_domain.process(command, asynchronous=False)
    return _cart_response("Product removed from cart", user_id)


@user_router.delete("/cart", response_model=CartResponse)
async def clear_cart(user_id: str = Depends(current_user_id)) -> CartResponse:
    current_domain.process(ClearCart(user_id=user_id), asynchronous=False)
    return _cart_response("Cart cleared", user_id)


@user_router.post("/wishlist", response_model=WishlistResponse)
async def add_to_wishlist(body: WishlistRequest, user_id: str = Depends(current_user_id)) -> WishlistResponse:
    command = AddToWishlist(user_id=user_id, product_id=body.product_id)
    wishlist = current_domain.process(command, asynchronous=False)
    return WishlistResponse(message="Product added to wishlist", wishlist=wishlist)


@user_router.delete("/wishlist/{product_id}", response_model=WishlistResponse)
async def remove_from_wishlist(product_id: str, user_id: str = Depends(current_user_id)) -> WishlistResponse:
    command = RemoveFromWishlist(user_id=user_id, product_id=product_id)
    wishlist = current_domain.process(command, asynchronous=False)
    return WishlistResponse(message="Product removed from wishlist", wishlist=wishlist)


@user_router.get("/profile", response_model=ProfileResponse)
async def get_profile(user_id: str = Depends(current_user_id)) -> ProfileResponse:
    user = find_user(user_id)
    cart = cart_for(user_id)
    return ProfileResponse(
        id=str(user.id),
        first_name=user.first_name,
        last_name=user.last_name,
        email=user.email,
        cart=_cart_lines(cart),
        cart_version=cart.version or 0,
        wishlist=list(user.wishlist or []),
        created_at=user.created_at,
    )


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.get("", response_model=OrderListResponse)
async def list_orders(user_id: str = Depends(current_user_id)) -> OrderListResponse:
    orders = list_orders_for_user(user_id)
    return OrderListResponse(message="Orders retrieved", orders=[_order_out(order) for order in orders])


@order_router.post("", status_code=201, response_model=OrderResponse)
async def place_order(body: PlaceOrderRequest, user_id: str = Depends(current_user_id)) -> OrderResponse:
    command = PlaceOrder(
        user_id=user_id,
        email=body.email,
        first_name=body.first_name,
        last_name=body.last_name,
        shipping_address=json.dumps(body.shipping_address.model_dump()),
        payment_method=body.payment_method.value,
        shipping_method=body.shipping_method.value,
        use_shipping_as_billing=body.use_shipping_as_billing,
        newsletter_subscribed=body.newsletter_subscribed,
        expected_cart_version=body.expected_cart_version,
    )
    order_id = current_domain.process(command, asynchronous=False)
    order = current_domain.repository_for(Order).get(order_id)
    return OrderResponse(message="Order created successfully", order=_order_out(order))


@order_router.put("/{order_id}/status", response_model=OrderResponse)
async def update_order_status(
    order_id: str,
    body: UpdateOrderStatusRequest,
    user_id: str = Depends(current_user_id),
) -> OrderResponse:
    command = UpdateOrderStatus(order_id=order_id, user_id=user_id, order_status=body.order_status)
    current_domain.process(command, asynchronous=False)
    order = current_domain.repository_for(Order).get(order_id)
    return OrderResponse(message="Order status updated", order=_order_out(order))


# ---------------------------------------------------------------------------
# Product Router (read-only)
# ---------------------------------------------------------------------------
product_router = APIRouter(prefix="/products", tags=["products"])


@product_router.get("", response_model=ProductPageResponse)
async def browse_products(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1),
    sort_by: str | None = Query(None, alias="sortBy"),
) -> ProductPageResponse:
    """One page of the catalog, optionally sorted by name, price or creation date."""
    products, total_pages = list_products(page=page, limit=limit, sort_by=sort_by)
    return ProductPageResponse(
        products=[_product_out(product) for product in products],
        total_pages=total_pages,
        current_page=page,
    )


@product_router.get("/{product_id}", response_model=ProductSchema)
async def get_product(product_id: str) -> ProductSchema:
    return _product_out(find_product(product_id))


@product_router.post("/fetch", response_model=ProductListResponse)
async def fetch_products(body: FetchProductsRequest) -> ProductListResponse:
    """Return the requested products in request order, skipping unknown ids."""
    repo = current_domain.repository_for(Product)
    products = []
    for product_id in body.product_ids:
        try:
            products.append(_product_out(repo.get(product_id)))
        except ObjectNotFoundError:
            continue
    return ProductListResponse(products=products)
