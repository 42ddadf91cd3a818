"""CancelOrder command + handler: stop an order, restock it and refund escrows."""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Boolean, Identifier, String
from protean.utils.globals import current_domain
from shared.listing import everything, query

from marketplace.domain import marketplace
from marketplace.escrow.escrow import EscrowStatus, PaymentEscrow
from marketplace.order.order import Order
from marketplace.product.product import Product

logger = structlog.get_logger(__name__)


@marketplace.command(part_of="Order")
class CancelOrder:
    order_id = Identifier(required=True)
    reason = String(max_length=500)
    cancelled_by = Identifier(required=True)
    by_admin = Boolean(default=False)


@marketplace.command_handler(part_of=Order)
class CancelOrderHandler:
    @handle(CancelOrder)
    def cancel_order(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)

        if not command.by_admin and str(command.cancelled_by) != str(order.customer_id):
            raise ValidationError({"order_id": ["Only the ordering customer can cancel this order"]})

        order.cancel(command.reason, cancelled_by=command.cancelled_by, by_admin=bool(command.by_admin))

        product_repo = current_domain.repository_for(Product)
        returned: dict[str, int] = {}
        for item in order.items:
            returned[str(item.product_id)] = returned.get(str(item.product_id), 0) + item.quantity
        for product_id, quantity in returned.items():
            try:
                product = product_repo.get(product_id)
            except ObjectNotFoundError:
                logger.warning("Cannot restock missing product", product_id=product_id, order_id=str(order.id))
                continue
            product.return_stock(quantity)
            product_repo.add(product)

        escrow_repo = current_domain.repository_for(PaymentEscrow)
        for escrow in everything(query(PaymentEscrow, order_id=str(order.id), status=EscrowStatus.HELD.value)):
            escrow.refund()
            escrow_repo.add(escrow)

        repo.add(order)
        logger.info("Order cancelled", order_id=str(order.id), cancelled_by=str(command.cancelled_by))
