from datetime import UTC, datetime, timedelta

import pytest
from marketplace.escrow.escrow import EscrowStatus, PaymentEscrow
from marketplace.escrow.events import EscrowHeld, EscrowRefunded, EscrowReleased
from protean.exceptions import ValidationError

NOW = datetime(2026, 5, 1, 12, 0, tzinfo=UTC)


def _escrow():
    return PaymentEscrow.hold("order-1", "pro-a", 1600.0, hold_days=2, now=NOW)


class TestHold:
    def test_release_date_is_hold_days_after_now(self):
        escrow = _escrow()
        assert escrow.status == EscrowStatus.HELD.value
        assert escrow.release_date == NOW + timedelta(days=2)
        assert isinstance(escrow._events[0], EscrowHeld)

    def test_due_only_once_release_date_passes(self):
        escrow = _escrow()
        assert not escrow.is_due(NOW + timedelta(days=1))
        assert escrow.is_due(NOW + timedelta(days=2))

    def test_naive_timestamps_are_treated_as_utc(self):
        escrow = _escrow()
        assert escrow.is_due(datetime(2026, 5, 3, 12, 0))


class TestRelease:
    def test_release_records_payout_reference(self):
        escrow = _escrow()
        escrow.release("PAYOUT-123")
        assert escrow.status == EscrowStatus.RELEASED.value
        assert escrow.payout_reference == "PAYOUT-123"
        assert escrow.released_at is not None
        assert any(isinstance(e, EscrowReleased) for e in escrow._events)

    def test_released_escrow_is_no_longer_due(self):
        escrow = _escrow()
        escrow.release("PAYOUT-123")
        assert not escrow.is_due(NOW + timedelta(days=10))

    def test_cannot_release_twice(self):
        escrow = _escrow()
        escrow.release("PAYOUT-123")
        with pytest.raises(ValidationError):
            escrow.release("PAYOUT-456")


class TestRefund:
    def test_refund_held_escrow(self):
        escrow = _escrow()
        escrow.refund()
        assert escrow.status == EscrowStatus.REFUNDED.value
        assert any(isinstance(e, EscrowRefunded) for e in escrow._events)

    def test_cannot_refund_released_escrow(self):
        escrow = _escrow()
        escrow.release("PAYOUT-123")
        with pytest.raises(ValidationError):
            escrow.refund()
