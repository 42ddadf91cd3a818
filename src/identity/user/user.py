"""User aggregate root with the Address entity and Profile value object."""

from datetime import UTC, datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, HasMany, String, ValueObject
from shared.auth import ADMIN_ROLES, Role

from identity.domain import identity
from identity.user.value_objects import EmailAddress, PhoneNumber

MAX_ADDRESSES = 10

# Sentinel for distinguishing "not provided" from None in partial updates
_UNSET = object()

_ADDRESS_FIELDS = (
    "address_type",
    "first_name",
    "last_name",
    "street",
    "city",
    "state",
    "zip_code",
    "country",
)


class UserStatus(Enum):
    ACTIVE = "Active"
    SUSPENDED = "Suspended"


class AddressType(Enum):
    SHIPPING = "Shipping"
    BILLING = "Billing"
    BOTH = "Both"


@identity.value_object(part_of="User")
class Profile:
    """Name and phone of a User, replaced wholesale on update."""

    first_name: String(required=True, max_length=100)
    last_name: String(required=True, max_length=100)
    phone: ValueObject(PhoneNumber)


@identity.entity(part_of="User")
class Address:
    """A delivery or billing address in a User's address book.

    The recipient name is stored on the address itself, so an order can be
    shipped to someone other than the account holder.
    """

    address_type: String(choices=AddressType, default=AddressType.SHIPPING.value)
    first_name: String(required=True, max_length=100)
    last_name: String(required=True, max_length=100)
    street: String(required=True, max_length=255)
    city: String(required=True, max_length=100)
    state: String(max_length=100)
    zip_code: String(max_length=20)
    country: String(required=True, max_length=100, default="Kenya")
    is_default: Boolean(default=False)

    def snapshot(self) -> dict:
        data = {field: getattr(self, field) for field in _ADDRESS_FIELDS}
        data["address_id"] = str(self.id)
        data["is_default"] = bool(self.is_default)
        return data


@identity.aggregate
class User:
    """A person with an account on the marketplace.

    Customers, professionals (vendors) and administrators are all Users; the
    ``role`` decides what they may do. The address book lives inside the
    aggregate so the single-default rule is enforced in one place.
    """

    email: ValueObject(EmailAddress, required=True)
    profile: ValueObject(Profile)
    role: String(choices=Role, default=Role.CUSTOMER.value)
    status: String(choices=UserStatus, default=UserStatus.ACTIVE.value)
    addresses: HasMany(Address)
    registered_at: DateTime()

    @invariant.post
    def addresses_cannot_exceed_maximum(self):
        if len(self.addresses) > MAX_ADDRESSES:
            raise ValidationError({"addresses": [f"Cannot have more than {MAX_ADDRESSES} addresses"]})

    @invariant.post
    def exactly_one_default_address_when_addresses_exist(self):
        if not self.addresses:
            return
        defaults = [a for a in self.addresses if a.is_default]
        if len(defaults) != 1:
            raise ValidationError({"addresses": ["Exactly one address must be marked as default"]})

    @classmethod
    def register(cls, email, first_name, last_name, phone=None, role=Role.CUSTOMER.value):
        from identity.user.events import UserRegistered

        now = datetime.now(UTC)
        user = cls(
            email=EmailAddress(address=email.strip().lower()),
            profile=Profile(
                first_name=first_name,
                last_name=last_name,
                phone=PhoneNumber(number=phone) if phone else None,
            ),
            role=role,
            registered_at=now,
        )
        user.raise_(
            UserRegistered(
                user_id=user.id,
                email=user.email.address,
                first_name=first_name,
                last_name=last_name,
                role=role,
                registered_at=now,
            )
        )
        return user

    @property
    def is_admin(self) -> bool:
        return self.role in ADMIN_ROLES

    def update_profile(self, first_name=_UNSET, last_name=_UNSET, phone=_UNSET):
        from identity.user.events import ProfileUpdated

        new_first = first_name if first_name is not _UNSET and first_name else self.profile.first_name
        new_last = last_name if last_name is not _UNSET and last_name else self.profile.last_name
        if phone is _UNSET:
            phone_vo = self.profile.phone
        else:
            phone_vo = PhoneNumber(number=phone) if phone else None

        self.profile = Profile(first_name=new_first, last_name=new_last, phone=phone_vo)
        self.raise_(
            ProfileUpdated(
                user_id=self.id,
                first_name=new_first,
                last_name=new_last,
                phone=phone_vo.number if phone_vo else None,
            )
        )

    def _find_address(self, address_id):
        address = next((a for a in self.addresses if str(a.id) == str(address_id)), None)
        if address is None:
            raise ValidationError({"addresses": [f"Address {address_id} not found"]})
        return address

    def add_address(
        self,
        first_name,
        last_name,
        street,
        city,
        country="Kenya",
        address_type=AddressType.SHIPPING.value,
        state=None,
        zip_code=None,
        is_default=False,
    ):
        from identity.user.events import AddressAdded

        if len(self.addresses) >= MAX_ADDRESSES:
            raise ValidationError({"addresses": [f"Cannot have more than {MAX_ADDRESSES} addresses"]})

        # First address is always default
        if not self.addresses:
            is_default = True

        with atomic_change(self):
            if is_default:
                for addr in self.addresses:
                    if addr.is_default:
                        addr.is_default = False

            address = Address(
                address_type=address_type or AddressType.SHIPPING.value,
                first_name=first_name,
                last_name=last_name,
                street=street,
                city=city,
                state=state,
                zip_code=zip_code,
                country=country or "Kenya",
                is_default=is_default,
            )
            self.add_addresses(address)

        self.raise_(AddressAdded(user_id=self.id, **address.snapshot()))
        return address

    def update_address(self, address_id, **changes):
        from identity.user.events import AddressUpdated

        address = self._find_address(address_id)
        for field, value in changes.items():
            if field not in _ADDRESS_FIELDS:
                raise ValidationError({field: ["Unknown address field"]})
            if value is not None:
                setattr(address, field, value)

        self.raise_(AddressUpdated(user_id=self.id, **address.snapshot()))

    def remove_address(self, address_id):
        from identity.user.events import AddressRemoved

        address = self._find_address(address_id)
        was_default = address.is_default

        with atomic_change(self):
            self.remove_addresses(address)
            if was_default and self.addresses:
                self.addresses[0].is_default = True

        self.raise_(AddressRemoved(user_id=self.id, address_id=str(address_id)))

    def set_default_address(self, address_id):
        from identity.user.events import DefaultAddressChanged

        address = self._find_address(address_id)
        previous = next((a for a in self.addresses if a.is_default), None)

        with atomic_change(self):
            for addr in self.addresses:
                if addr.is_default:
                    addr.is_default = False
            address.is_default = True

        self.raise_(
            DefaultAddressChanged(
                user_id=self.id,
                address_id=str(address_id),
                previous_default_address_id=str(previous.id) if previous else None,
            )
        )

    def addresses_default_first(self) -> list:
        return sorted(self.addresses, key=lambda a: not a.is_default)

    def change_role(self, new_role, changed_by=None):
        from identity.user.events import UserRoleChanged

        if new_role not in {r.value for r in Role}:
            raise ValidationError({"role": [f"Unknown role: {new_role}"]})
        if new_role == self.role:
            return

        previous_role = self.role
        self.role = new_role
        self.raise_(
            UserRoleChanged(
                user_id=self.id,
                previous_role=previous_role,
                new_role=new_role,
                changed_by=changed_by,
                changed_at=datetime.now(UTC),
            )
        )

    def promote_to_professional(self):
        """Grant vendor rights after the user opens a store.

        Administrators keep their role; they can run a store without losing
        admin rights.
        """
        if self.role == Role.PROFESSIONAL.value or self.is_admin:
            return
        self.change_role(Role.PROFESSIONAL.value)

    def suspend(self, reason, suspended_by=None):
        from identity.user.events import UserSuspended

        if self.status != UserStatus.ACTIVE.value:
            raise ValidationError({"status": ["Only active accounts can be suspended"]})

        self.status = UserStatus.SUSPENDED.value
        self.raise_(
            UserSuspended(
                user_id=self.id,
                reason=reason,
                suspended_by=suspended_by,
                suspended_at=datetime.now(UTC),
            )
        )

    def reactivate(self):
        from identity.user.events import UserReactivated

        if self.status != UserStatus.SUSPENDED.value:
            raise ValidationError({"status": ["Only suspended accounts can be reactivated"]})

        self.status = UserStatus.ACTIVE.value
        self.raise_(UserReactivated(user_id=self.id, reactivated_at=datetime.now(UTC)))
