"""Application tests for user registration, addresses and account commands."""

import pytest
from identity.user.account import ChangeRole, ReactivateUser, SuspendUser
from identity.user.addresses import AddAddress, RemoveAddress, SetDefaultAddress, UpdateAddress
from identity.user.profile import UpdateProfile
from identity.user.registration import RegisterUser
from identity.user.user import User
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError


def _register(email="amani@example.com"):
    command = RegisterUser(email=email, first_name="Amani", last_name="Wekesa")
    return current_domain.process(command, asynchronous=False)


def _add_address(user_id, street="12 Moi Avenue", **overrides):
    values = {
        "user_id": user_id,
        "first_name": "Amani",
        "last_name": "Wekesa",
        "street": street,
        "city": "Nairobi",
    }
    values.update(overrides)
    return current_domain.process(AddAddress(**values), asynchronous=False)


def _user(user_id) -> User:
    return current_domain.repository_for(User).get(user_id)


class TestRegisterUser:
    def test_persists_user(self):
        user_id = _register()
        user = _user(user_id)
        assert user.email.address == "amani@example.com"
        assert user.profile.first_name == "Amani"

    def test_invalid_email_is_rejected(self):
        with pytest.raises(ValidationError):
            _register(email="amani-at-example")


class TestUpdateProfile:
    def test_updates_phone(self):
        user_id = _register()
        current_domain.process(UpdateProfile(user_id=user_id, phone="0712 345678"), asynchronous=False)
        assert _user(user_id).profile.phone.number == "0712 345678"

    def test_unknown_user(self):
        with pytest.raises(ObjectNotFoundError):
            current_domain.process(UpdateProfile(user_id="nobody", first_name="X"), asynchronous=False)


class TestAddressCommands:
    def test_add_returns_address_id(self):
        user_id = _register()
        address_id = _add_address(user_id)
        user = _user(user_id)
        assert str(user.addresses[0].id) == address_id
        assert user.addresses[0].is_default is True

    def test_update_address(self):
        user_id = _register()
        address_id = _add_address(user_id)
        current_domain.process(
            UpdateAddress(user_id=user_id, address_id=address_id, city="Nakuru"),
            asynchronous=False,
        )
        assert _user(user_id).addresses[0].city == "Nakuru"

    def test_set_default_and_remove(self):
        user_id = _register()
        first = _add_address(user_id)
        second = _add_address(user_id, street="40 Kenyatta Avenue")

        current_domain.process(SetDefaultAddress(user_id=user_id, address_id=second), asynchronous=False)
        user = _user(user_id)
        assert next(a for a in user.addresses if a.is_default).id == second

        current_domain.process(RemoveAddress(user_id=user_id, address_id=second), asynchronous=False)
        user = _user(user_id)
        assert [str(a.id) for a in user.addresses] == [first]
        assert user.addresses[0].is_default is True


class TestAccountCommands:
    def test_change_role(self):
        user_id = _register()
        current_domain.process(ChangeRole(user_id=user_id, role="Admin", changed_by="root"), asynchronous=False)
        assert _user(user_id).role == "Admin"

    def test_suspend_and_reactivate(self):
        user_id = _register()
        current_domain.process(SuspendUser(user_id=user_id, reason="Fraud"), asynchronous=False)
        assert _user(user_id).status == "Suspended"

        current_domain.process(ReactivateUser(user_id=user_id), asynchronous=False)
        assert _user(user_id).status == "Active"
