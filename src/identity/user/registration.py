"""User registration: command and handler."""

import structlog
from protean import handle
from protean.fields import String
from protean.utils.globals import current_domain

from identity.domain import identity
from identity.user.user import User

logger = structlog.get_logger(__name__)


@identity.command(part_of="User")
class RegisterUser:
    """Create a new user account. New accounts start as customers."""

    email: String(required=True, max_length=254)
    first_name: String(required=True, max_length=100)
    last_name: String(required=True, max_length=100)
    phone: String(max_length=20)


@identity.command_handler(part_of=User)
class RegisterUserHandler:
    @handle(RegisterUser)
    def register_user(self, command):
        user = User.register(
            email=command.email,
            first_name=command.first_name,
            last_name=command.last_name,
            phone=command.phone,
        )
        current_domain.repository_for(User).add(user)
        logger.info("User registered", user_id=str(user.id))
        return str(user.id)
