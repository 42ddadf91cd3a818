"""AuditLog aggregate: an append-only record of significant actions."""

import json
from datetime import UTC, datetime

from protean.fields import DateTime, Identifier, String, Text

from administration.domain import administration


@administration.aggregate
class AuditLog:
    user_id = Identifier()
    action = String(required=True, max_length=100)
    entity = String(required=True, max_length=100)
    entity_id = Identifier()
    details = Text()  # JSON object
    created_at = DateTime()

    @classmethod
    def record(cls, action, entity, entity_id=None, user_id=None, details=None, at=None):
        return cls(
            user_id=str(user_id) if user_id else None,
            action=action,
            entity=entity,
            entity_id=str(entity_id) if entity_id else None,
            details=json.dumps(details or {}, default=str),
            created_at=at or datetime.now(UTC),
        )

    @property
    def detail_dict(self) -> dict:
        return json.loads(self.details) if self.details else {}
