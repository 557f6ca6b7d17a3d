"""Product creation — command and handler."""

from protean import handle
from protean.fields import Boolean, Integer, String, Text
from protean.utils.globals import current_domain

from catalogue.domain import catalogue
from catalogue.product.product import Product


@catalogue.command(part_of="Product")
class AddProduct:
    name: String(required=True, max_length=255)
    brand: String(required=True, max_length=100)
    category: String(required=True, max_length=50)
    price: Integer(required=True, min_value=1)
    mrp: Integer(min_value=1)
    unit: String(required=True, max_length=50)
    description: Text()
    image_url: String(max_length=500)
    video_url: String(max_length=500)
    images: Text()  # JSON array of URLs
    is_trending: Boolean(default=False)


@catalogue.command_handler(part_of=Product)
class AddProductHandler:
    @handle(AddProduct)
    def add_product(self, command):
        product = Product.create(
            name=command.name,
            brand=command.brand,
            category=command.category,
            price=command.price,
            mrp=command.mrp,
            unit=command.unit,
            description=command.description,
            image_url=command.image_url,
            video_url=command.video_url,
            images=command.images,
            is_trending=command.is_trending or False,
        )
        current_domain.repository_for(Product).add(product)
        return str(product.id)
