"""PaymentEscrow aggregate: a vendor's share of an order, held until delivery."""

from datetime import UTC, datetime, timedelta
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, Identifier, String
from shared.clock import as_utc

from marketplace.domain import marketplace
from marketplace.escrow.events import EscrowHeld, EscrowRefunded, EscrowReleased


class EscrowStatus(Enum):
    HELD = "Held"
    RELEASED = "Released"
    REFUNDED = "Refunded"


@marketplace.aggregate
class PaymentEscrow:
    order_id = Identifier(required=True)
    professional_id = Identifier(required=True)
    amount = Float(required=True, min_value=0.0)
    release_date = DateTime(required=True)
    status = String(choices=EscrowStatus, default=EscrowStatus.HELD.value)
    released_at = DateTime()
    refunded_at = DateTime()
    payout_reference = String(max_length=255)
    created_at = DateTime()

    @classmethod
    def hold(cls, order_id, professional_id, amount, hold_days, now=None):
        now = now or datetime.now(UTC)
        escrow = cls(
            order_id=str(order_id),
            professional_id=str(professional_id),
            amount=amount,
            release_date=now + timedelta(days=hold_days),
            created_at=now,
        )
        escrow.raise_(
            EscrowHeld(
                escrow_id=str(escrow.id),
                order_id=str(order_id),
                professional_id=str(professional_id),
                amount=amount,
                release_date=escrow.release_date,
            )
        )
        return escrow

    def is_due(self, as_of: datetime) -> bool:
        return self.status == EscrowStatus.HELD.value and as_utc(self.release_date) <= as_utc(as_of)

    def release(self, payout_reference):
        if self.status != EscrowStatus.HELD.value:
            raise ValidationError({"status": [f"Cannot release an escrow that is {self.status}"]})

        now = datetime.now(UTC)
        self.status = EscrowStatus.RELEASED.value
        self.released_at = now
        self.payout_reference = payout_reference
        self.raise_(
            EscrowReleased(
                escrow_id=str(self.id),
                order_id=str(self.order_id),
                professional_id=str(self.professional_id),
                amount=self.amount,
                payout_reference=payout_reference,
                released_at=now,
            )
        )

    def refund(self):
        if self.status != EscrowStatus.HELD.value:
            raise ValidationError({"status": [f"Cannot refund an escrow that is {self.status}"]})

        now = datetime.now(UTC)
        self.status = EscrowStatus.REFUNDED.value
        self.refunded_at = now
        self.raise_(
            EscrowRefunded(
                escrow_id=str(self.id),
                order_id=str(self.order_id),
                professional_id=str(self.professional_id),
                amount=self.amount,
                refunded_at=now,
            )
        )
