"""Writing to and reading from the audit trail."""

from protean.utils.globals import current_domain
from shared.listing import query

from administration.audit.audit_log import AuditLog

DEFAULT_LIMIT = 50


def record_action(action, entity, entity_id=None, user_id=None, details=None, at=None) -> AuditLog:
    """Append an entry to the audit trail within the current unit of work."""
    entry = AuditLog.record(action, entity, entity_id=entity_id, user_id=user_id, details=details, at=at)
    current_domain.repository_for(AuditLog).add(entry)
    return entry


def recent_entries(action=None, entity=None, user_id=None, limit=DEFAULT_LIMIT) -> list[AuditLog]:
    """Newest entries first, optionally narrowed by action, entity and acting user."""
    entries = query(
        AuditLog,
        action=action or None,
        entity=entity or None,
        user_id=str(user_id) if user_id else None,
    ).order_by("-created_at")
    return list(entries.limit(limit).all().items)
