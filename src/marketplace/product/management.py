"""Product catalogue management: commands and handler.

List-valued fields (sizes, colors, tags) travel through commands as JSON
arrays, the same way the aggregate stores them.
"""

import json

import structlog
from protean import handle
from protean.fields import Boolean, Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from marketplace.category.management import require_category
from marketplace.domain import marketplace
from marketplace.product.product import Product

logger = structlog.get_logger(__name__)


def _load_list(raw):
    return json.loads(raw) if raw else None


@marketplace.command(part_of="Product")
class CreateProduct:
    """List a new product in a professional's catalogue."""

    professional_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    description = Text()
    price = Float(required=True, min_value=0.0)
    stock_quantity = Integer(default=0, min_value=0)
    category_id = Identifier()
    collection_id = Identifier()
    sizes = Text()
    colors = Text()
    tags = Text()
    gender = String(max_length=10)
    material = String(max_length=100)


@marketplace.command(part_of="Product")
class UpdateProduct:
    product_id = Identifier(required=True)
    name = String(max_length=255)
    description = Text()
    price = Float(min_value=0.0)
    category_id = Identifier()
    collection_id = Identifier()
    sizes = Text()
    colors = Text()
    tags = Text()
    gender = String(max_length=10)
    material = String(max_length=100)
    is_active = Boolean()


@marketplace.command(part_of="Product")
class RestockProduct:
    product_id = Identifier(required=True)
    quantity = Integer(required=True)


@marketplace.command(part_of="Product")
class DeactivateProduct:
    product_id = Identifier(required=True)


@marketplace.command(part_of="Product")
class SetShowcaseApproval:
    """Approve a product for the public showcase, or withdraw it."""

    product_id = Identifier(required=True)
    approved = Boolean(required=True)
    changed_by = Identifier(required=True)


@marketplace.command(part_of="Product")
class RecordProductView:
    product_id = Identifier(required=True)


@marketplace.command_handler(part_of=Product)
class ManageProductHandler:
    @handle(CreateProduct)
    def create_product(self, command):
        require_category(command.category_id)
        product = Product.create(
            professional_id=command.professional_id,
            name=command.name,
            price=command.price,
            stock_quantity=command.stock_quantity or 0,
            sizes=_load_list(command.sizes),
            colors=_load_list(command.colors),
            tags=_load_list(command.tags),
            description=command.description,
            category_id=command.category_id,
            collection_id=command.collection_id,
            gender=command.gender,
            material=command.material,
        )
        current_domain.repository_for(Product).add(product)
        logger.info("Product created", product_id=str(product.id), professional_id=str(command.professional_id))
        return str(product.id)

    @handle(UpdateProduct)
    def update_product(self, command):
        require_category(command.category_id)
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.update_details(
            name=command.name,
            description=command.description,
            price=command.price,
            category_id=command.category_id,
            collection_id=command.collection_id,
            sizes=_load_list(command.sizes),
            colors=_load_list(command.colors),
            tags=_load_list(command.tags),
            gender=command.gender,
            material=command.material,
            is_active=command.is_active,
        )
        repo.add(product)

    @handle(RestockProduct)
    def restock_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.restock(command.quantity)
        repo.add(product)

    @handle(DeactivateProduct)
    def deactivate_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.deactivate()
        repo.add(product)

    @handle(SetShowcaseApproval)
    def set_showcase_approval(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.set_showcase_approval(command.approved, changed_by=command.changed_by)
        repo.add(product)
        logger.info(
            "Showcase approval changed",
            product_id=str(product.id),
            approved=bool(command.approved),
        )

    @handle(RecordProductView)
    def record_product_view(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.record_view()
        repo.add(product)
