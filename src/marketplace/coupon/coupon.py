"""Coupon aggregate and its discount rules.

Three kinds of coupon exist:

    Percentage     value% of the subtotal, capped by ``max_discount``
    Fixed_Amount   a flat amount, never more than the subtotal
    Free_Shipping  the order's shipping cost
"""

import json
from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, Identifier, Integer, String, Text
from shared.clock import as_utc

from marketplace.coupon.events import CouponCreated, CouponDeactivated, CouponRedeemed
from marketplace.domain import marketplace


class CouponType(Enum):
    PERCENTAGE = "Percentage"
    FIXED_AMOUNT = "Fixed_Amount"
    FREE_SHIPPING = "Free_Shipping"


@marketplace.aggregate
class Coupon:
    code = String(required=True, max_length=50, unique=True)
    description = Text()
    coupon_type = String(required=True, choices=CouponType)
    value = Float(required=True, min_value=0.0)
    min_order_amount = Float(min_value=0.0)
    max_discount = Float(min_value=0.0)
    usage_limit = Integer(min_value=1)
    used_count = Integer(default=0, min_value=0)
    valid_from = DateTime(required=True)
    valid_until = DateTime(required=True)
    is_active = Boolean(default=True)
    applicable_categories = Text()  # JSON array
    applicable_professionals = Text()  # JSON array
    created_by = Identifier()
    created_at = DateTime()

    @invariant.post
    def validity_window_must_be_ordered(self):
        if self.valid_from and self.valid_until and as_utc(self.valid_until) < as_utc(self.valid_from):
            raise ValidationError({"valid_until": ["Coupon must not expire before it starts"]})

    @invariant.post
    def percentage_cannot_exceed_hundred(self):
        if self.coupon_type == CouponType.PERCENTAGE.value and self.value > 100:
            raise ValidationError({"value": ["Percentage discount cannot exceed 100"]})

    @classmethod
    def create(cls, code, coupon_type, value, valid_from, valid_until, created_by=None, **details):
        applicable = {
            key: json.dumps(list(details.pop(key) or []))
            for key in ("applicable_categories", "applicable_professionals")
            if key in details
        }
        coupon = cls(
            code=code.strip().upper(),
            coupon_type=coupon_type,
            value=value,
            valid_from=valid_from,
            valid_until=valid_until,
            created_by=created_by,
            created_at=datetime.now(UTC),
            **applicable,
            **{k: v for k, v in details.items() if v is not None},
        )
        coupon.raise_(
            CouponCreated(
                coupon_id=str(coupon.id),
                code=coupon.code,
                coupon_type=coupon_type,
                value=value,
                created_by=created_by,
            )
        )
        return coupon

    @property
    def is_exhausted(self) -> bool:
        return self.usage_limit is not None and (self.used_count or 0) >= self.usage_limit

    def is_redeemable(self, subtotal: float, now: datetime) -> bool:
        """Whether the coupon can discount an order of ``subtotal`` placed at ``now``."""
        now = as_utc(now)
        if not self.is_active or self.is_exhausted:
            return False
        if not (as_utc(self.valid_from) <= now <= as_utc(self.valid_until)):
            return False
        return not self.min_order_amount or subtotal >= self.min_order_amount

    def discount_for(self, subtotal: float, shipping_cost: float) -> float:
        if self.coupon_type == CouponType.PERCENTAGE.value:
            cap = self.max_discount if self.max_discount else float("inf")
            return min(subtotal * self.value / 100, cap)
        if self.coupon_type == CouponType.FIXED_AMOUNT.value:
            return min(self.value, subtotal)
        return shipping_cost

    def redeem(self, order_id):
        if self.is_exhausted:
            raise ValidationError({"coupon_code": [f"Coupon {self.code} has reached its usage limit"]})

        self.used_count = (self.used_count or 0) + 1
        self.raise_(
            CouponRedeemed(
                coupon_id=str(self.id),
                code=self.code,
                order_id=str(order_id),
                used_count=self.used_count,
            )
        )

    def deactivate(self):
        if not self.is_active:
            return
        self.is_active = False
        self.raise_(CouponDeactivated(coupon_id=str(self.id), code=self.code, deactivated_at=datetime.now(UTC)))
