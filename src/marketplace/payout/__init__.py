"""Payout gateway factory.

``PAYOUT_ADAPTER`` picks the implementation:
- ``fake`` (default): FakePayoutGateway, for development and testing
- ``http``: HttpPayoutGateway, using PAYOUT_API_URL and PAYOUT_API_KEY
"""

import os

from protean.exceptions import ConfigurationError

from marketplace.payout.fake_adapter import FakePayoutGateway
from marketplace.payout.http_adapter import HttpPayoutGateway
from marketplace.payout.port import PayoutGateway

_current_gateway: PayoutGateway | None = None


def _build_gateway() -> PayoutGateway:
    adapter = os.getenv("PAYOUT_ADAPTER", "fake").lower()
    if adapter == "fake":
        return FakePayoutGateway()
    if adapter == "http":
        url = os.getenv("PAYOUT_API_URL")
        if not url:
            raise ConfigurationError("PAYOUT_API_URL must be set when PAYOUT_ADAPTER=http")
        return HttpPayoutGateway(base_url=url, api_key=os.getenv("PAYOUT_API_KEY", ""))
    raise ConfigurationError(f"Unknown payout adapter: {adapter}")


def get_gateway() -> PayoutGateway:
    """Return the current payout gateway, building it on first use."""
    global _current_gateway
    if _current_gateway is None:
        _current_gateway = _build_gateway()
    return _current_gateway


def set_gateway(gateway: PayoutGateway) -> None:
    """Override the active payout gateway (useful for tests)."""
    global _current_gateway
    _current_gateway = gateway


def reset_gateway() -> None:
    global _current_gateway
    _current_gateway = None
