"""Identity bounded context: customer accounts, roles and address books.

Role promotion follows store openings published by Marketplace; address
changes are published back so Marketplace can deliver to them.
"""

from protean.domain import Domain
from shared.logging import configure_logging

configure_logging("identity")

identity = Domain(name="identity")
