"""Application tests for IdentityAddressEventHandler: Marketplace mirrors customers' addresses.

Covers:
- on_address_added: records the address in the DeliveryAddress projection
- on_address_updated: overwrites the recorded fields, or records a missing address
- on_address_removed: deletes the record; a missing record is not an error
"""

from uuid import uuid4

import pytest
from marketplace.order.identity_events import IdentityAddressEventHandler
from marketplace.projections.delivery_address import DeliveryAddress
from protean import current_domain
from protean.exceptions import ObjectNotFoundError
from shared.events.identity import AddressAdded, AddressRemoved, AddressUpdated


def _fields(**overrides):
    fields = {
        "user_id": "cust-addr-001",
        "address_id": f"addr-{uuid4().hex[:8]}",
        "address_type": "Shipping",
        "first_name": "Amina",
        "last_name": "Hassan",
        "street": "7 Digo Road",
        "city": "Mombasa",
        "country": "Kenya",
    }
    fields.update(overrides)
    return fields


def _record(address_id):
    return current_domain.repository_for(DeliveryAddress).get(address_id)


class TestAddressAdded:
    def test_records_delivery_address(self):
        fields = _fields(zip_code="80100")
        IdentityAddressEventHandler().on_address_added(AddressAdded(**fields))

        record = _record(fields["address_id"])
        assert record.customer_id == "cust-addr-001"
        assert record.city == "Mombasa"
        assert record.snapshot()["zip_code"] == "80100"

    def test_replayed_event_is_idempotent(self):
        fields = _fields()
        handler = IdentityAddressEventHandler()
        handler.on_address_added(AddressAdded(**fields))
        handler.on_address_added(AddressAdded(**fields))

        records = current_domain.repository_for(DeliveryAddress)._dao.query.filter(address_id=fields["address_id"]).all()
        assert records.total == 1


class TestAddressUpdated:
    def test_overwrites_fields(self):
        fields = _fields()
        handler = IdentityAddressEventHandler()
        handler.on_address_added(AddressAdded(**fields))
        handler.on_address_updated(AddressUpdated(**{**fields, "street": "9 Nyali Close", "city": "Nyali"}))

        record = _record(fields["address_id"])
        assert record.street == "9 Nyali Close"
        assert record.city == "Nyali"

    def test_unknown_address_is_recorded(self):
        fields = _fields()
        IdentityAddressEventHandler().on_address_updated(AddressUpdated(**fields))
        assert _record(fields["address_id"]).first_name == "Amina"


class TestAddressRemoved:
    def test_deletes_record(self):
        fields = _fields()
        handler = IdentityAddressEventHandler()
        handler.on_address_added(AddressAdded(**fields))
        handler.on_address_removed(AddressRemoved(user_id=fields["user_id"], address_id=fields["address_id"]))

        with pytest.raises(ObjectNotFoundError):
            _record(fields["address_id"])

    def test_missing_record_is_ignored(self):
        IdentityAddressEventHandler().on_address_removed(AddressRemoved(user_id="cust-addr-001", address_id="addr-never"))
