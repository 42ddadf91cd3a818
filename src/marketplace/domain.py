"""Marketplace bounded context: vendor stores, catalogue, cart, orders and escrow.

Stores, products, coupons, orders and escrows share one domain so that
placing an order (stock decrement, escrow creation, coupon redemption and
cart clean-up) commits in a single unit of work.
"""

from protean.domain import Domain
from shared.logging import configure_logging

configure_logging("marketplace")

marketplace = Domain(name="marketplace")
