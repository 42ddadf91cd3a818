"""Profile update: command and handler."""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from identity.domain import identity
from identity.user.user import User


@identity.command(part_of="User")
class UpdateProfile:
    """Change a user's name or phone number. Omitted fields are kept."""

    user_id: Identifier(required=True)
    first_name: String(max_length=100)
    last_name: String(max_length=100)
    phone: String(max_length=20)


@identity.command_handler(part_of=User)
class UpdateProfileHandler:
    @handle(UpdateProfile)
    def update_profile(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)

        kwargs = {}
        for field in ("first_name", "last_name", "phone"):
            value = getattr(command, field, None)
            if value is not None:
                kwargs[field] = value

        user.update_profile(**kwargs)
        repo.add(user)
