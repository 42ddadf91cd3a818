"""Account administration: role changes, suspension and reactivation."""

import structlog
from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from identity.domain import identity
from identity.user.user import User

logger = structlog.get_logger(__name__)


@identity.command(part_of="User")
class ChangeRole:
    """Assign a different platform role to a user."""

    user_id: Identifier(required=True)
    role: String(required=True, max_length=20)
    changed_by: Identifier()


@identity.command(part_of="User")
class SuspendUser:
    user_id: Identifier(required=True)
    reason: String(required=True, max_length=500)
    suspended_by: Identifier()


@identity.command(part_of="User")
class ReactivateUser:
    user_id: Identifier(required=True)


@identity.command_handler(part_of=User)
class ManageAccountHandler:
    @handle(ChangeRole)
    def change_role(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        user.change_role(command.role, changed_by=command.changed_by)
        repo.add(user)
        logger.info("User role changed", user_id=str(user.id), role=command.role)

    @handle(SuspendUser)
    def suspend_user(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        user.suspend(reason=command.reason, suspended_by=command.suspended_by)
        repo.add(user)
        logger.info("User suspended", user_id=str(user.id))

    @handle(ReactivateUser)
    def reactivate_user(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        user.reactivate()
        repo.add(user)
