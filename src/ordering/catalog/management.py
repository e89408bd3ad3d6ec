"""Catalog management — command and handler for adding products."""

import json

from protean import handle
from protean.fields import Float, Integer, String, Text
from protean.utils.globals import current_domain

from ordering.catalog.product import Product
from ordering.domain import ordering


@ordering.command(part_of="Product")
class AddProduct:
    name = String(required=True, max_length=255)
    description = Text()
    product_images = Text()  # JSON array of image URLs
    price = Float(required=True, min_value=0.0)
    stock = Integer(default=0, min_value=0)
    category = String(max_length=100)
    sub_category = String(max_length=100)
    brand = String(max_length=100)


@ordering.command_handler(part_of=Product)
class ManageCatalogHandler:
    @handle(AddProduct)
    def add_product(self, command):
        images = json.loads(command.product_images) if command.product_images else []
        product = Product.add(
            name=command.name,
            price=command.price,
            stock=command.stock or 0,
            description=command.description,
            product_images=images,
            category=command.category,
            sub_category=command.sub_category,
            brand=command.brand,
        )
        current_domain.repository_for(Product).add(product)
        return str(product.id)
