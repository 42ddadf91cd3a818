"""Coupon administration: commands and handler."""

import json

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain
from shared.listing import query

from marketplace.coupon.coupon import Coupon
from marketplace.domain import marketplace

logger = structlog.get_logger(__name__)


def find_coupon(code):
    """Return the coupon with ``code`` (case-insensitive), or None."""
    if not code:
        return None
    repo = current_domain.repository_for(Coupon)
    return repo._dao.query.filter(code=code.strip().upper()).all().first


def coupon_query(active=None):
    """Coupons, newest first, optionally only active or only inactive ones."""
    return query(Coupon, is_active=active).order_by("-created_at")


@marketplace.command(part_of="Coupon")
class CreateCoupon:
    code = String(required=True, max_length=50)
    description = Text()
    coupon_type = String(required=True, max_length=20)
    value = Float(required=True, min_value=0.0)
    min_order_amount = Float(min_value=0.0)
    max_discount = Float(min_value=0.0)
    usage_limit = Integer(min_value=1)
    valid_from = DateTime(required=True)
    valid_until = DateTime(required=True)
    applicable_categories = Text()
    applicable_professionals = Text()
    created_by = Identifier()


@marketplace.command(part_of="Coupon")
class DeactivateCoupon:
    coupon_id = Identifier(required=True)


@marketplace.command_handler(part_of=Coupon)
class ManageCouponHandler:
    @handle(CreateCoupon)
    def create_coupon(self, command):
        if find_coupon(command.code) is not None:
            raise ValidationError({"code": [f"Coupon {command.code.upper()} already exists"]})

        coupon = Coupon.create(
            code=command.code,
            coupon_type=command.coupon_type,
            value=command.value,
            valid_from=command.valid_from,
            valid_until=command.valid_until,
            created_by=command.created_by,
            description=command.description,
            min_order_amount=command.min_order_amount,
            max_discount=command.max_discount,
            usage_limit=command.usage_limit,
            applicable_categories=json.loads(command.applicable_categories or "[]"),
            applicable_professionals=json.loads(command.applicable_professionals or "[]"),
        )
        current_domain.repository_for(Coupon).add(coupon)
        logger.info("Coupon created", coupon_id=str(coupon.id), code=coupon.code)
        return str(coupon.id)

    @handle(DeactivateCoupon)
    def deactivate_coupon(self, command):
        repo = current_domain.repository_for(Coupon)
        coupon = repo.get(command.coupon_id)
        coupon.deactivate()
        repo.add(coupon)
