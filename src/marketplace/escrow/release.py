"""ReleaseDueEscrows command + handler: pay vendors whose hold has ended.

Invoked by a scheduler (see the ``/escrows/release-due`` maintenance
endpoint). An escrow is released once its release date has passed and its
order's delivery is settled, i.e. the order is Delivered and the customer
either confirmed receipt or let the confirmation window lapse. Escrows whose
payout fails stay Held and are retried on the next run.
"""

from datetime import UTC, datetime

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import DateTime
from protean.utils.globals import current_domain
from shared.clock import as_utc
from shared.listing import everything, query

from marketplace.domain import marketplace
from marketplace.escrow.escrow import EscrowStatus, PaymentEscrow
from marketplace.order.order import Order
from marketplace.payout import get_gateway

logger = structlog.get_logger(__name__)


@marketplace.command(part_of="PaymentEscrow")
class ReleaseDueEscrows:
    as_of = DateTime()  # Optional: release as of this time (defaults to now)


@marketplace.command_handler(part_of=PaymentEscrow)
class ReleaseDueEscrowsHandler:
    @handle(ReleaseDueEscrows)
    def release_due(self, command):
        as_of = as_utc(command.as_of) or datetime.now(UTC)
        repo = current_domain.repository_for(PaymentEscrow)
        order_repo = current_domain.repository_for(Order)
        gateway = get_gateway()

        released = 0
        orders: dict[str, Order | None] = {}
        due = query(PaymentEscrow, status=EscrowStatus.HELD.value, release_date__lte=as_of).order_by("release_date")
        for escrow in everything(due):
            if not escrow.is_due(as_of):
                continue

            order_id = str(escrow.order_id)
            if order_id not in orders:
                try:
                    orders[order_id] = order_repo.get(order_id)
                except ObjectNotFoundError:
                    orders[order_id] = None
            order = orders[order_id]
            if order is None or not order.is_delivery_settled(as_of):
                continue

            result = gateway.send_payout(str(escrow.professional_id), escrow.amount, idempotency_key=str(escrow.id))
            if not result.success:
                logger.warning(
                    "Escrow payout failed",
                    escrow_id=str(escrow.id),
                    order_id=order_id,
                    reason=result.failure_reason,
                )
                continue

            escrow.release(result.payout_reference)
            repo.add(escrow)
            released += 1

        logger.info("Due escrows processed", released=released, as_of=str(as_of))
        return released
