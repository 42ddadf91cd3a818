"""SystemSetting aggregate: a named, admin-editable platform setting."""

from datetime import UTC, datetime

from protean.fields import DateTime, Identifier, String, Text

from administration.domain import administration
from administration.setting.events import SystemSettingUpdated

DEFAULT_CATEGORY = "general"


@administration.aggregate
class SystemSetting:
    key = String(required=True, max_length=100, unique=True)
    value = Text(required=True)
    description = Text()
    category = String(max_length=50, default=DEFAULT_CATEGORY)
    updated_by = Identifier()
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def define(cls, key, value, updated_by=None, description=None, category=None):
        now = datetime.now(UTC)
        setting = cls(
            key=key,
            value=value,
            description=description,
            category=category or DEFAULT_CATEGORY,
            updated_by=updated_by,
            created_at=now,
            updated_at=now,
        )
        setting._announce(previous_value=None, at=now)
        return setting

    def change(self, value, updated_by=None, description=None, category=None):
        previous = self.value
        now = datetime.now(UTC)
        self.value = value
        if description is not None:
            self.description = description
        if category is not None:
            self.category = category
        self.updated_by = updated_by
        self.updated_at = now
        self._announce(previous_value=previous, at=now)
        return previous

    def _announce(self, previous_value, at):
        self.raise_(
            SystemSettingUpdated(
                setting_id=str(self.id),
                key=self.key,
                previous_value=previous_value,
                value=self.value,
                updated_by=self.updated_by,
                updated_at=at,
            )
        )
