"""Product details and pricing — commands and handler."""

from protean import handle
from protean.fields import Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from catalogue.domain import catalogue
from catalogue.product.product import Product


@catalogue.command(part_of="Product")
class UpdateProductDetails:
    product_id: Identifier(required=True)
    name: String(max_length=255)
    brand: String(max_length=100)
    category: String(max_length=50)
    unit: String(max_length=50)
    description: Text()
    image_url: String(max_length=500)
    video_url: String(max_length=500)
    images: Text()


@catalogue.command(part_of="Product")
class RepriceProduct:
    product_id: Identifier(required=True)
    price: Integer(required=True, min_value=1)
    mrp: Integer(min_value=1)


@catalogue.command_handler(part_of=Product)
class ManageProductDetailsHandler:
    @handle(UpdateProductDetails)
    def update_details(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.update_details(
            name=command.name,
            brand=command.brand,
            category=command.category,
            unit=command.unit,
            description=command.description,
            image_url=command.image_url,
            video_url=command.video_url,
            images=command.images,
        )
        repo.add(product)

    @handle(RepriceProduct)
    def reprice(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.reprice(price=command.price, mrp=command.mrp)
        repo.add(product)
