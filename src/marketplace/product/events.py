"""Domain events for the Product aggregate."""

from protean.fields import Boolean, DateTime, Float, Identifier, Integer, String

from marketplace.domain import marketplace


@marketplace.event(part_of="Product")
class ProductCreated:
    """A professional listed a new product."""

    __version__ = 1

    product_id = Identifier(required=True)
    professional_id = Identifier(required=True)
    name = String(required=True)
    price = Float(required=True)
    stock_quantity = Integer(required=True)
    created_at = DateTime(required=True)


@marketplace.event(part_of="Product")
class ProductUpdated:
    __version__ = 1

    product_id = Identifier(required=True)
    name = String(required=True)
    price = Float(required=True)
    is_active = Boolean()


@marketplace.event(part_of="Product")
class ProductRestocked:
    __version__ = 1

    product_id = Identifier(required=True)
    quantity_added = Integer(required=True)
    stock_quantity = Integer(required=True)


@marketplace.event(part_of="Product")
class ProductDeactivated:
    __version__ = 1

    product_id = Identifier(required=True)
    deactivated_at = DateTime(required=True)


@marketplace.event(part_of="Product")
class ShowcaseApprovalChanged:
    """A product was approved for, or withdrawn from, the public showcase."""

    __version__ = 1

    product_id = Identifier(required=True)
    professional_id = Identifier(required=True)
    approved = Boolean(required=True)
    changed_by = Identifier(required=True)
    changed_at = DateTime(required=True)
