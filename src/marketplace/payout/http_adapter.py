"""Payout gateway backed by a bank-transfer HTTP API.

Configured with ``PAYOUT_API_URL`` and ``PAYOUT_API_KEY``. The escrow id is
sent as the idempotency key so a retried release cannot pay twice.
"""

import requests
import structlog

from marketplace.payout.port import PayoutGateway, PayoutResult

logger = structlog.get_logger(__name__)


class HttpPayoutGateway(PayoutGateway):
    def __init__(self, base_url: str, api_key: str, timeout: float = 10.0) -> None:
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self.session = requests.Session()

    def send_payout(self, professional_id: str, amount: float, idempotency_key: str) -> PayoutResult:
        try:
            response = self.session.post(
                f"{self.base_url}/payouts",
                json={"recipient_id": professional_id, "amount": amount},
                headers={
                    "Authorization": f"Bearer {self.api_key}",
                    "Idempotency-Key": idempotency_key,
                },
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.warning("Payout request failed", professional_id=professional_id, error=str(exc))
            return PayoutResult(success=False, failure_reason=str(exc))

        if response.status_code >= 400:
            return PayoutResult(success=False, failure_reason=f"HTTP {response.status_code}: {response.text[:200]}")

        try:
            body = response.json()
        except ValueError:
            logger.warning("Payout accepted without a JSON body", professional_id=professional_id)
            return PayoutResult(success=True)
        if not isinstance(body, dict):
            return PayoutResult(success=True)
        return PayoutResult(success=True, payout_reference=body.get("id") or body.get("reference"))
