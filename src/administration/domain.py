"""Administration bounded context: content moderation, system settings and the audit trail.

The audit log is fed both by this context's own commands and by events
published from Identity and Marketplace.
"""

from protean.domain import Domain
from shared.logging import configure_logging

configure_logging("administration")

administration = Domain(name="administration")
