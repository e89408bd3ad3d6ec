"""Product aggregate — the catalog entry a cart line is priced from.

The Ordering domain only reads products: carts and orders copy the name,
price and first image at the moment a line is added, and never follow later
catalog changes.
"""

from datetime import UTC, datetime

from protean.fields import DateTime, Float, Integer, List, String, Text

from ordering.catalog.events import ProductAdded
from ordering.domain import ordering


@ordering.aggregate
class Product:
    name = String(required=True, max_length=255)
    description = Text()
    product_images = List(content_type=String)  # First image is the display image
    price = Float(required=True, min_value=0.0)
    stock = Integer(default=0, min_value=0)
    category = String(max_length=100)
    sub_category = String(max_length=100)
    brand = String(max_length=100)
    created_at = DateTime()

    @classmethod
    def add(
        cls,
        name,
        price,
        stock=0,
        description=None,
        product_images=None,
        category=None,
        sub_category=None,
        brand=None,
    ):
        now = datetime.now(UTC)
        product = cls(
            name=name,
            description=description,
            product_images=list(product_images or []),
            price=price,
            stock=stock,
            category=category,
            sub_category=sub_category,
            brand=brand,
            created_at=now,
        )
        product.raise_(
            ProductAdded(
                product_id=str(product.id),
                name=name,
                price=price,
                added_at=now,
            )
        )
        return product

    @property
    def display_image(self):
        return self.product_images[0] if self.product_images else ""
