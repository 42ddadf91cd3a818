"""Store management: commands and handler."""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from marketplace.domain import marketplace
from marketplace.store.store import Store

logger = structlog.get_logger(__name__)


def find_store_by_professional(professional_id):
    """Return the professional's store, or None when they have not opened one."""
    repo = current_domain.repository_for(Store)
    return repo._dao.query.filter(professional_id=str(professional_id)).all().first


def get_store_by_professional(professional_id) -> Store:
    store = find_store_by_professional(professional_id)
    if store is None:
        raise ObjectNotFoundError(f"No store for professional {professional_id}")
    return store


@marketplace.command(part_of="Store")
class OpenStore:
    """Open a store for a professional. Each professional runs one store."""

    professional_id = Identifier(required=True)
    business_name = String(required=True, max_length=200)
    specialization = String(max_length=200)
    location = String(max_length=200)
    bio = Text()
    experience_years = Integer(min_value=0)
    free_delivery_threshold = Float(min_value=0.0)


@marketplace.command(part_of="Store")
class UpdateStore:
    store_id = Identifier(required=True)
    business_name = String(max_length=200)
    specialization = String(max_length=200)
    location = String(max_length=200)
    bio = Text()
    experience_years = Integer(min_value=0)
    free_delivery_threshold = Float(min_value=0.0)


@marketplace.command(part_of="Store")
class AddDeliveryZone:
    store_id = Identifier(required=True)
    zone_name = String(required=True, max_length=100)
    base_delivery_fee = Float(required=True, min_value=0.0)
    free_delivery_above = Float(min_value=0.0)
    estimated_days = Integer(min_value=0)


@marketplace.command(part_of="Store")
class RemoveDeliveryZone:
    store_id = Identifier(required=True)
    zone_id = Identifier(required=True)


@marketplace.command(part_of="Store")
class VerifyStore:
    store_id = Identifier(required=True)
    verified_by = Identifier()


@marketplace.command_handler(part_of=Store)
class ManageStoreHandler:
    @handle(OpenStore)
    def open_store(self, command):
        if find_store_by_professional(command.professional_id) is not None:
            raise ValidationError({"professional_id": ["Professional already has a store"]})

        store = Store.open(
            professional_id=command.professional_id,
            business_name=command.business_name,
            specialization=command.specialization,
            location=command.location,
            bio=command.bio,
            experience_years=command.experience_years,
            free_delivery_threshold=command.free_delivery_threshold,
        )
        current_domain.repository_for(Store).add(store)
        logger.info("Store opened", store_id=str(store.id), professional_id=str(command.professional_id))
        return str(store.id)

    @handle(UpdateStore)
    def update_store(self, command):
        repo = current_domain.repository_for(Store)
        store = repo.get(command.store_id)
        store.update_details(
            business_name=command.business_name,
            specialization=command.specialization,
            location=command.location,
            bio=command.bio,
            experience_years=command.experience_years,
            free_delivery_threshold=command.free_delivery_threshold,
        )
        repo.add(store)

    @handle(AddDeliveryZone)
    def add_delivery_zone(self, command):
        repo = current_domain.repository_for(Store)
        store = repo.get(command.store_id)
        zone = store.add_delivery_zone(
            zone_name=command.zone_name,
            base_delivery_fee=command.base_delivery_fee,
            free_delivery_above=command.free_delivery_above,
            estimated_days=command.estimated_days,
        )
        repo.add(store)
        return str(zone.id)

    @handle(RemoveDeliveryZone)
    def remove_delivery_zone(self, command):
        repo = current_domain.repository_for(Store)
        store = repo.get(command.store_id)
        store.remove_delivery_zone(command.zone_id)
        repo.add(store)

    @handle(VerifyStore)
    def verify_store(self, command):
        repo = current_domain.repository_for(Store)
        store = repo.get(command.store_id)
        store.verify(verified_by=command.verified_by)
        repo.add(store)
