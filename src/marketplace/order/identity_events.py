"""Inbound cross-domain event handler: Marketplace reacts to Identity events.

Keeps the DeliveryAddress projection in step with customers' address books
so orders can be placed without calling back into Identity.

Cross-domain events are imported from shared.events.identity and registered
as external events via marketplace.register_external_event().
"""

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain
from protean.utils.mixins import handle
from shared.events.identity import AddressAdded, AddressRemoved, AddressUpdated

from marketplace.domain import marketplace
from marketplace.order.order import Order
from marketplace.projections.delivery_address import DeliveryAddress

logger = structlog.get_logger(__name__)

marketplace.register_external_event(AddressAdded, "Identity.AddressAdded.v1")
marketplace.register_external_event(AddressUpdated, "Identity.AddressUpdated.v1")
marketplace.register_external_event(AddressRemoved, "Identity.AddressRemoved.v1")


_FIELDS = ("address_type", "first_name", "last_name", "street", "city", "state", "zip_code", "country")


def _upsert(event) -> None:
    repo = current_domain.repository_for(DeliveryAddress)
    values = {field: getattr(event, field) for field in _FIELDS}
    try:
        record = repo.get(str(event.address_id))
    except ObjectNotFoundError:
        record = DeliveryAddress(address_id=str(event.address_id), customer_id=str(event.user_id), **values)
    else:
        for field, value in values.items():
            setattr(record, field, value)
    repo.add(record)


@marketplace.event_handler(part_of=Order, stream_category="identity::user")
class IdentityAddressEventHandler:
    """Mirrors customers' address books into the DeliveryAddress projection."""

    @handle(AddressAdded)
    def on_address_added(self, event: AddressAdded) -> None:
        logger.info("Recording delivery address", customer_id=str(event.user_id), address_id=str(event.address_id))
        _upsert(event)

    @handle(AddressUpdated)
    def on_address_updated(self, event: AddressUpdated) -> None:
        _upsert(event)

    @handle(AddressRemoved)
    def on_address_removed(self, event: AddressRemoved) -> None:
        repo = current_domain.repository_for(DeliveryAddress)
        try:
            record = repo.get(str(event.address_id))
        except ObjectNotFoundError:
            return  # Already removed or never recorded
        repo._dao.delete(record)
