"""Payout gateway port.

Releasing an escrow pays the vendor through whichever payout provider is
configured. Adapters implement this contract.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class PayoutResult:
    """Outcome of a payout attempt."""

    success: bool
    payout_reference: str | None = None
    failure_reason: str | None = None


class PayoutGateway(ABC):
    @abstractmethod
    def send_payout(self, professional_id: str, amount: float, idempotency_key: str) -> PayoutResult:
        """Transfer ``amount`` to the vendor. Repeating a key must not pay twice."""
        ...
