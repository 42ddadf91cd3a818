"""Cross-domain event contracts for Identity domain events.

These classes define the event shape for consumption by other domains
(the Marketplace keeps a local copy of each user's delivery addresses,
and Administration writes audit entries for role and status changes).
They are registered as external events via domain.register_external_event()
with matching __type__ strings so Protean's stream deserialization
works correctly.

The source-of-truth events are in src/identity/user/events.py.
"""

from protean.core.event import BaseEvent
from protean.fields import Boolean, DateTime, Identifier, String


class UserRegistered(BaseEvent):
    """A new user account was created on the platform."""

    __version__ = 1

    user_id = Identifier(required=True)
    email = String(required=True)
    first_name = String(required=True)
    last_name = String(required=True)
    role = String(required=True)
    registered_at = DateTime(required=True)


class AddressAdded(BaseEvent):
    """A new address was added to a user's address book."""

    __version__ = 1

    user_id = Identifier(required=True)
    address_id = Identifier(required=True)
    address_type = String(required=True)
    first_name = String(required=True)
    last_name = String(required=True)
    street = String(required=True)
    city = String(required=True)
    state = String()
    zip_code = String()
    country = String(required=True)
    is_default = Boolean(default=False)


class AddressUpdated(BaseEvent):
    """An address was modified. Carries the full address after the change."""

    __version__ = 1

    user_id = Identifier(required=True)
    address_id = Identifier(required=True)
    address_type = String(required=True)
    first_name = String(required=True)
    last_name = String(required=True)
    street = String(required=True)
    city = String(required=True)
    state = String()
    zip_code = String()
    country = String(required=True)
    is_default = Boolean(default=False)


class AddressRemoved(BaseEvent):
    """An address was removed from a user's address book."""

    __version__ = 1

    user_id = Identifier(required=True)
    address_id = Identifier(required=True)


class UserRoleChanged(BaseEvent):
    """A user's platform role was changed."""

    __version__ = 1

    user_id = Identifier(required=True)
    previous_role = String(required=True)
    new_role = String(required=True)
    changed_by = Identifier()
    changed_at = DateTime(required=True)


class UserSuspended(BaseEvent):
    """A user account was suspended, blocking further activity."""

    __version__ = 1

    user_id = Identifier(required=True)
    reason = String(required=True)
    suspended_by = Identifier()
    suspended_at = DateTime(required=True)
