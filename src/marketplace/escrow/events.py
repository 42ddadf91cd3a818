"""Domain events for the PaymentEscrow aggregate."""

from protean.fields import DateTime, Float, Identifier, String

from marketplace.domain import marketplace


@marketplace.event(part_of="PaymentEscrow")
class EscrowHeld:
    __version__ = 1

    escrow_id = Identifier(required=True)
    order_id = Identifier(required=True)
    professional_id = Identifier(required=True)
    amount = Float(required=True)
    release_date = DateTime(required=True)


@marketplace.event(part_of="PaymentEscrow")
class EscrowReleased:
    """Held funds were paid out to the vendor."""

    __version__ = 1

    escrow_id = Identifier(required=True)
    order_id = Identifier(required=True)
    professional_id = Identifier(required=True)
    amount = Float(required=True)
    payout_reference = String()
    released_at = DateTime(required=True)


@marketplace.event(part_of="PaymentEscrow")
class EscrowRefunded:
    __version__ = 1

    escrow_id = Identifier(required=True)
    order_id = Identifier(required=True)
    professional_id = Identifier(required=True)
    amount = Float(required=True)
    refunded_at = DateTime(required=True)
