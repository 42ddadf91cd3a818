"""Address book management: commands and handler."""

from protean import handle
from protean.fields import Boolean, Identifier, String
from protean.utils.globals import current_domain

from identity.domain import identity
from identity.user.user import User


@identity.command(part_of="User")
class AddAddress:
    """Add a new address to a user's address book."""

    user_id: Identifier(required=True)
    address_type: String(max_length=20)
    first_name: String(required=True, max_length=100)
    last_name: String(required=True, max_length=100)
    street: String(required=True, max_length=255)
    city: String(required=True, max_length=100)
    state: String(max_length=100)
    zip_code: String(max_length=20)
    country: String(max_length=100)
    is_default: Boolean(default=False)


@identity.command(part_of="User")
class UpdateAddress:
    """Modify fields of an existing address."""

    user_id: Identifier(required=True)
    address_id: Identifier(required=True)
    address_type: String(max_length=20)
    first_name: String(max_length=100)
    last_name: String(max_length=100)
    street: String(max_length=255)
    city: String(max_length=100)
    state: String(max_length=100)
    zip_code: String(max_length=20)
    country: String(max_length=100)


@identity.command(part_of="User")
class RemoveAddress:
    user_id: Identifier(required=True)
    address_id: Identifier(required=True)


@identity.command(part_of="User")
class SetDefaultAddress:
    user_id: Identifier(required=True)
    address_id: Identifier(required=True)


@identity.command_handler(part_of=User)
class ManageAddressesHandler:
    @handle(AddAddress)
    def add_address(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)

        address = user.add_address(
            first_name=command.first_name,
            last_name=command.last_name,
            street=command.street,
            city=command.city,
            country=command.country,
            address_type=command.address_type,
            state=command.state,
            zip_code=command.zip_code,
            is_default=bool(command.is_default),
        )
        repo.add(user)
        return str(address.id)

    @handle(UpdateAddress)
    def update_address(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)

        updates = {}
        for field in (
            "address_type",
            "first_name",
            "last_name",
            "street",
            "city",
            "state",
            "zip_code",
            "country",
        ):
            value = getattr(command, field, None)
            if value is not None:
                updates[field] = value

        user.update_address(command.address_id, **updates)
        repo.add(user)

    @handle(RemoveAddress)
    def remove_address(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        user.remove_address(command.address_id)
        repo.add(user)

    @handle(SetDefaultAddress)
    def set_default_address(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        user.set_default_address(command.address_id)
        repo.add(user)
