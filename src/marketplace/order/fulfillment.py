"""Order fulfilment: status updates from vendors/admins and delivery confirmation."""

import structlog
from protean import handle
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from marketplace import settings
from marketplace.domain import marketplace
from marketplace.order.order import Order

logger = structlog.get_logger(__name__)


@marketplace.command(part_of="Order")
class UpdateOrderStatus:
    """Advance an order, attach a tracking number, or leave a note. All optional."""

    order_id = Identifier(required=True)
    status = String(max_length=20)
    tracking_number = String(max_length=100)
    notes = Text()
    changed_by = Identifier()


@marketplace.command(part_of="Order")
class ConfirmDelivery:
    order_id = Identifier(required=True)
    customer_id = Identifier(required=True)


@marketplace.command_handler(part_of=Order)
class OrderFulfillmentHandler:
    @handle(UpdateOrderStatus)
    def update_order_status(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)

        if command.status and command.status != order.status:
            order.advance_to(
                command.status,
                changed_by=command.changed_by,
                confirmation_days=settings.confirmation_days(),
            )
        if command.tracking_number:
            order.assign_tracking_number(command.tracking_number)
        if command.notes:
            order.add_note(command.notes)

        repo.add(order)
        logger.info("Order updated", order_id=str(order.id), status=order.status)

    @handle(ConfirmDelivery)
    def confirm_delivery(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        order.confirm_delivery(command.customer_id)
        repo.add(order)
        logger.info("Delivery confirmed", order_id=str(order.id))
