"""Pydantic request/response schemas for the Ordering API.

These are external contracts (anti-corruption layer), separate from the
internal Protean commands. Wire names are camelCase.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PaymentMethodChoice(str, Enum):
    CREDIT_CARD = "creditCard"
    PAYPAL = "paypal"
    BANK_TRANSFER = "bankTransfer"


class ShippingMethodChoice(str, Enum):
    DOMESTIC = "domestic"
    INTERNATIONAL = "international"


# ---------------------------------------------------------------------------
# Shared sub-models
# ---------------------------------------------------------------------------
class ShippingAddressSchema(CamelModel):
    street_address: str = Field(min_length=1)
    apartment: str | None = None
    city: str = Field(min_length=1)
    state: str = Field(min_length=1)
    postal_code: str = Field(min_length=1)
    country: str = Field(min_length=1)


class CartLineSchema(CamelModel):
    product_id: str
    product_name: str | None = None
    product_image: str | None = None
    quantity: int
    price: float


class OrderLineSchema(CamelModel):
    product_id: str
    product_name: str | None = None
    product_image: str | None = None
    quantity: int
    price: float


class OrderSchema(CamelModel):
    id: str
    user_id: str
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    products: list[OrderLineSchema]
    total_price: float
    order_status: str
    shipping_address: ShippingAddressSchema | None = None
    payment_method: str | None = None
    shipping_method: str | None = None
    use_shipping_as_billing: bool = False
    newsletter_subscribed: bool = False
    created_at: datetime | None = None


class ProductSchema(CamelModel):
    id: str
    name: str
    description: str | None = None
    product_images: list[str] = []
    price: float
    stock: int = 0
    category: str | None = None
    sub_category: str | None = None
    brand: str | None = None
    created_at: datetime | None = None


# ---------------------------------------------------------------------------
# Cart & Wishlist
# ---------------------------------------------------------------------------
class UpsertCartLineRequest(CamelModel):
    product_id: str
    action_type: str
    quantity: int | None = None

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={"examples": [{"productId": "prod-001", "actionType": "UPDATE", "quantity": 2}]},
    )


class CartResponse(CamelModel):
    message: str
    cart: list[CartLineSchema]
    cart_version: int = 0


class WishlistRequest(CamelModel):
    product_id: str


class WishlistResponse(CamelModel):
    message: str
    wishlist: list[str]


class ProfileResponse(CamelModel):
    id: str
    first_name: str
    last_name: str
    email: str
    cart: list[CartLineSchema]
    cart_version: int = 0
    wishlist: list[str]
    created_at: datetime | None = None


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
class PlaceOrderRequest(CamelModel):
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    shipping_address: ShippingAddressSchema
    payment_method: PaymentMethodChoice
    shipping_method: ShippingMethodChoice
    use_shipping_as_billing: bool = False
    newsletter_subscribed: bool = False
    expected_cart_version: int | None = None

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {
                    "email": "ada@example.com",
                    "firstName": "Ada",
                    "lastName": "Lovelace",
                    "shippingAddress": {
                        "streetAddress": "12 Analytical Way",
                        "apartment": "4B",
                        "city": "London",
                        "state": "Greater London",
                        "postalCode": "N1 9GU",
                        "country": "UK",
                    },
                    "paymentMethod": "creditCard",
                    "shippingMethod": "domestic",
                    "useShippingAsBilling": True,
                }
            ]
        },
    )


class UpdateOrderStatusRequest(CamelModel):
    order_status: str


class OrderResponse(CamelModel):
    message: str
    order: OrderSchema


class OrderListResponse(CamelModel):
    message: str
    orders: list[OrderSchema]


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------
class FetchProductsRequest(CamelModel):
    product_ids: list[str]


class ProductListResponse(CamelModel):
    products: list[ProductSchema]


class ProductPageResponse(CamelModel):
    products: list[ProductSchema]
    total_pages: int
    current_page: int
