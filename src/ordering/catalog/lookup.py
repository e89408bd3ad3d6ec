"""Catalog lookup — resolve a product id into a frozen snapshot.

Cart lines never hold a live reference to a Product. They copy a
ProductSnapshot taken at the moment the line is created, so later catalog
price or name changes do not reach an uncommitted cart or a placed order.
"""

from protean.exceptions import ObjectNotFoundError
from protean.fields import Float, Identifier, Integer, String
from protean.utils.globals import current_domain

from ordering.catalog.product import Product
from ordering.domain import ordering
from ordering.exceptions import NotFound


@ordering.value_object
class ProductSnapshot:
    """Name, price and display image of a product at one point in time."""

    product_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    price = Float(required=True, min_value=0.0)
    image = String(max_length=1000, default="")
    stock = Integer(default=0)


def find_product(product_id):
    """Load a product or raise ``NotFound`` with a readable message."""
    try:
        return current_domain.repository_for(Product).get(str(product_id))
    except ObjectNotFoundError:
        raise NotFound({"product_id": ["Product not found"]}) from None


def snapshot_product(product_id):
    product = find_product(product_id)
    return ProductSnapshot(
        product_id=str(product.id),
        name=product.name,
        price=product.price,
        image=product.display_image,
        stock=product.stock or 0,
    )
