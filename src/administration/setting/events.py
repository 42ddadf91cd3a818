"""Domain events raised by the SystemSetting aggregate."""

from protean.fields import DateTime, Identifier, String, Text

from administration.domain import administration


@administration.event(part_of="SystemSetting")
class SystemSettingUpdated:
    __version__ = 1

    setting_id = Identifier(required=True)
    key = String(required=True)
    previous_value = Text()
    value = Text(required=True)
    updated_by = Identifier()
    updated_at = DateTime(required=True)
