"""UpdateSystemSetting command + handler: create or change a setting by key."""

from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain
from protean.utils.mixins import handle
from shared.listing import everything, query

from administration.audit.trail import record_action
from administration.domain import administration
from administration.setting.setting import SystemSetting


@administration.command(part_of="SystemSetting")
class UpdateSystemSetting:
    key = String(required=True, max_length=100)
    value = Text(required=True)
    description = Text()
    category = String(max_length=50)
    updated_by = Identifier()


def find_setting(key):
    return query(SystemSetting, key=key).all().first


def list_settings() -> list[SystemSetting]:
    """All settings ordered by category, then key."""
    return everything(query(SystemSetting).order_by(["category", "key"]))


@administration.command_handler(part_of=SystemSetting)
class SystemSettingHandler:
    @handle(UpdateSystemSetting)
    def update_system_setting(self, command):
        repo = current_domain.repository_for(SystemSetting)
        setting = find_setting(command.key)

        if setting is None:
            setting = SystemSetting.define(
                key=command.key,
                value=command.value,
                updated_by=command.updated_by,
                description=command.description,
                category=command.category,
            )
            previous = None
        else:
            previous = setting.change(
                command.value,
                updated_by=command.updated_by,
                description=command.description,
                category=command.category,
            )
        repo.add(setting)

        record_action(
            "SETTING_UPDATED",
            "SystemSetting",
            entity_id=setting.id,
            user_id=command.updated_by,
            details={"key": command.key, "previous_value": previous, "value": command.value},
        )
        return str(setting.id)
