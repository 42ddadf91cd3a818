"""Domain events for the User aggregate."""

from protean.fields import Boolean, DateTime, Identifier, String

from identity.domain import identity


@identity.event(part_of="User")
class UserRegistered:
    """A new user account was created on the platform."""

    __version__ = 1

    user_id: Identifier(required=True)
    email: String(required=True)
    first_name: String(required=True)
    last_name: String(required=True)
    role: String(required=True)
    registered_at: DateTime(required=True)


@identity.event(part_of="User")
class ProfileUpdated:
    """A user's name or phone number was changed."""

    __version__ = 1

    user_id: Identifier(required=True)
    first_name: String(required=True)
    last_name: String(required=True)
    phone: String()


@identity.event(part_of="User")
class AddressAdded:
    """A new address was added to a user's address book."""

    __version__ = 1

    user_id: Identifier(required=True)
    address_id: Identifier(required=True)
    address_type: String(required=True)
    first_name: String(required=True)
    last_name: String(required=True)
    street: String(required=True)
    city: String(required=True)
    state: String()
    zip_code: String()
    country: String(required=True)
    is_default: Boolean(default=False)


@identity.event(part_of="User")
class AddressUpdated:
    """An address was modified. Carries the full address after the change."""

    __version__ = 1

    user_id: Identifier(required=True)
    address_id: Identifier(required=True)
    address_type: String(required=True)
    first_name: String(required=True)
    last_name: String(required=True)
    street: String(required=True)
    city: String(required=True)
    state: String()
    zip_code: String()
    country: String(required=True)
    is_default: Boolean(default=False)


@identity.event(part_of="User")
class AddressRemoved:
    """An address was removed from a user's address book."""

    __version__ = 1

    user_id: Identifier(required=True)
    address_id: Identifier(required=True)


@identity.event(part_of="User")
class DefaultAddressChanged:
    """A different address became the user's default."""

    __version__ = 1

    user_id: Identifier(required=True)
    address_id: Identifier(required=True)
    previous_default_address_id: Identifier()


@identity.event(part_of="User")
class UserRoleChanged:
    """A user's platform role was changed."""

    __version__ = 1

    user_id: Identifier(required=True)
    previous_role: String(required=True)
    new_role: String(required=True)
    changed_by: Identifier()
    changed_at: DateTime(required=True)


@identity.event(part_of="User")
class UserSuspended:
    """A user account was suspended, blocking further activity."""

    __version__ = 1

    user_id: Identifier(required=True)
    reason: String(required=True)
    suspended_by: Identifier()
    suspended_at: DateTime(required=True)


@identity.event(part_of="User")
class UserReactivated:
    """A suspended user account was restored."""

    __version__ = 1

    user_id: Identifier(required=True)
    reactivated_at: DateTime(required=True)
