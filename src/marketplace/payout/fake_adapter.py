"""In-process payout gateway for development and tests.

Records every call and can be told to fail, so release handling can be
exercised without a payment provider.
"""

from uuid import uuid4

from marketplace.payout.port import PayoutGateway, PayoutResult


class FakePayoutGateway(PayoutGateway):
    def __init__(self) -> None:
        self.should_succeed: bool = True
        self.failure_reason: str = "Payout rejected"
        self.calls: list[dict] = []
        self._paid: dict[str, str] = {}

    def configure(self, should_succeed: bool, failure_reason: str = "Payout rejected") -> None:
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def send_payout(self, professional_id: str, amount: float, idempotency_key: str) -> PayoutResult:
        self.calls.append(
            {
                "professional_id": professional_id,
                "amount": amount,
                "idempotency_key": idempotency_key,
            }
        )
        if not self.should_succeed:
            return PayoutResult(success=False, failure_reason=self.failure_reason)

        reference = self._paid.setdefault(idempotency_key, f"fake_payout_{uuid4().hex[:12]}")
        return PayoutResult(success=True, payout_reference=reference)
