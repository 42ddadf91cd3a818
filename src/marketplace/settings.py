"""Business constants for the marketplace, overridable from the environment.

    MARKETPLACE_TAX_RATE            VAT applied to the discounted subtotal (0.16)
    MARKETPLACE_ESCROW_HOLD_DAYS    days a vendor payment is held after ordering (2)
    MARKETPLACE_CONFIRMATION_DAYS   days a customer has to confirm delivery (2)
"""

import os

DEFAULT_TAX_RATE = 0.16
DEFAULT_ESCROW_HOLD_DAYS = 2
DEFAULT_CONFIRMATION_DAYS = 2

PUBLIC_SHOWCASE_SIZE = 10
COLLECTION_PREVIEW_SIZE = 8


def tax_rate() -> float:
    return float(os.getenv("MARKETPLACE_TAX_RATE", DEFAULT_TAX_RATE))


def escrow_hold_days() -> int:
    return int(os.getenv("MARKETPLACE_ESCROW_HOLD_DAYS", DEFAULT_ESCROW_HOLD_DAYS))


def confirmation_days() -> int:
    return int(os.getenv("MARKETPLACE_CONFIRMATION_DAYS", DEFAULT_CONFIRMATION_DAYS))
