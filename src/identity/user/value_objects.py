"""Contact value objects carried by the User aggregate."""

import re

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import String

from identity.domain import identity

_EMAIL_PATTERN = re.compile(r"^[^@\s;,<>()\[\]\\]+@[A-Za-z0-9](?:[A-Za-z0-9-]*[A-Za-z0-9])?(?:\.[A-Za-z0-9](?:[A-Za-z0-9-]*[A-Za-z0-9])?)+$")
_PHONE_PATTERN = re.compile(r"^\+?[\d\s\-()]+$")


@identity.value_object(part_of="User")
class EmailAddress:
    """A sign-in email address. Stored lower-cased."""

    address: String(required=True, max_length=254)

    @invariant.post
    def must_be_well_formed(self):
        email = self.address or ""
        local_part = email.split("@", 1)[0]
        if not _EMAIL_PATTERN.match(email) or ".." in email or local_part.startswith(".") or local_part.endswith("."):
            raise ValidationError({"email": [f"Invalid email address: {email!r}"]})


@identity.value_object(part_of="User")
class PhoneNumber:
    """Digits with optional spaces, hyphens, parentheses and a leading +."""

    number: String(required=True, max_length=20)

    @invariant.post
    def must_be_dialable(self):
        number = self.number or ""
        if not re.search(r"\d", number) or not _PHONE_PATTERN.match(number):
            raise ValidationError({"phone": [f"Invalid phone number: {number!r}"]})
