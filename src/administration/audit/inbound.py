"""Inbound cross-domain event handlers: the audit trail of other contexts' actions.

Each handler listens to one stream category and appends an AuditLog entry
per event. Cross-domain events are imported from shared.events and
registered as external events.
"""

import json

import structlog
from protean.utils.mixins import handle
from shared.events.identity import UserRoleChanged, UserSuspended
from shared.events.marketplace import (
    CouponCreated,
    OrderCancelled,
    OrderPlaced,
    ReviewRemoved,
    ShowcaseApprovalChanged,
)

from administration.audit.audit_log import AuditLog
from administration.audit.trail import record_action
from administration.domain import administration

logger = structlog.get_logger(__name__)

administration.register_external_event(UserRoleChanged, "Identity.UserRoleChanged.v1")
administration.register_external_event(UserSuspended, "Identity.UserSuspended.v1")
administration.register_external_event(OrderPlaced, "Marketplace.OrderPlaced.v1")
administration.register_external_event(OrderCancelled, "Marketplace.OrderCancelled.v1")
administration.register_external_event(ShowcaseApprovalChanged, "Marketplace.ShowcaseApprovalChanged.v1")
administration.register_external_event(CouponCreated, "Marketplace.CouponCreated.v1")
administration.register_external_event(ReviewRemoved, "Marketplace.ReviewRemoved.v1")


@administration.event_handler(part_of=AuditLog, stream_category="identity::user")
class UserAuditHandler:
    @handle(UserRoleChanged)
    def on_user_role_changed(self, event: UserRoleChanged) -> None:
        record_action(
            "USER_ROLE_CHANGED",
            "User",
            entity_id=event.user_id,
            user_id=event.changed_by,
            details={"previous_role": event.previous_role, "new_role": event.new_role},
            at=event.changed_at,
        )

    @handle(UserSuspended)
    def on_user_suspended(self, event: UserSuspended) -> None:
        record_action(
            "USER_SUSPENDED",
            "User",
            entity_id=event.user_id,
            user_id=event.suspended_by,
            details={"reason": event.reason},
            at=event.suspended_at,
        )


@administration.event_handler(part_of=AuditLog, stream_category="marketplace::order")
class OrderAuditHandler:
    @handle(OrderPlaced)
    def on_order_placed(self, event: OrderPlaced) -> None:
        record_action(
            "ORDER_PLACED",
            "Order",
            entity_id=event.order_id,
            user_id=event.customer_id,
            details={
                "total_price": event.total_price,
                "coupon_code": event.coupon_code,
                "professional_ids": json.loads(event.professional_ids),
            },
            at=event.placed_at,
        )

    @handle(OrderCancelled)
    def on_order_cancelled(self, event: OrderCancelled) -> None:
        record_action(
            "ORDER_CANCELLED",
            "Order",
            entity_id=event.order_id,
            user_id=event.cancelled_by,
            details={"customer_id": str(event.customer_id), "reason": event.reason},
            at=event.cancelled_at,
        )


@administration.event_handler(part_of=AuditLog, stream_category="marketplace::product")
class ProductAuditHandler:
    @handle(ShowcaseApprovalChanged)
    def on_showcase_approval_changed(self, event: ShowcaseApprovalChanged) -> None:
        record_action(
            "SHOWCASE_APPROVED" if event.approved else "SHOWCASE_WITHDRAWN",
            "Product",
            entity_id=event.product_id,
            user_id=event.changed_by,
            details={"professional_id": str(event.professional_id)},
            at=event.changed_at,
        )


@administration.event_handler(part_of=AuditLog, stream_category="marketplace::coupon")
class CouponAuditHandler:
    @handle(CouponCreated)
    def on_coupon_created(self, event: CouponCreated) -> None:
        record_action(
            "COUPON_CREATED",
            "Coupon",
            entity_id=event.coupon_id,
            user_id=event.created_by,
            details={"code": event.code, "coupon_type": event.coupon_type, "value": event.value},
        )
        logger.info("Coupon creation audited", coupon_id=str(event.coupon_id), code=event.code)


@administration.event_handler(part_of=AuditLog, stream_category="marketplace::review")
class ReviewAuditHandler:
    @handle(ReviewRemoved)
    def on_review_removed(self, event: ReviewRemoved) -> None:
        record_action(
            "REVIEW_REMOVED",
            "Review",
            entity_id=event.review_id,
            user_id=event.removed_by,
            details={"target_type": event.target_type, "target_id": str(event.target_id), "reason": event.reason},
            at=event.removed_at,
        )
