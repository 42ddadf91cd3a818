"""Domain events for the Store aggregate."""

from protean.fields import DateTime, Float, Identifier, String

from marketplace.domain import marketplace


@marketplace.event(part_of="Store")
class StoreOpened:
    """A professional opened a store on the marketplace."""

    __version__ = 1

    store_id = Identifier(required=True)
    professional_id = Identifier(required=True)
    business_name = String(required=True)
    opened_at = DateTime(required=True)


@marketplace.event(part_of="Store")
class StoreUpdated:
    __version__ = 1

    store_id = Identifier(required=True)
    business_name = String(required=True)
    location = String()
    free_delivery_threshold = Float()


@marketplace.event(part_of="Store")
class DeliveryZoneAdded:
    __version__ = 1

    store_id = Identifier(required=True)
    zone_id = Identifier(required=True)
    zone_name = String(required=True)
    base_delivery_fee = Float(required=True)
    free_delivery_above = Float()


@marketplace.event(part_of="Store")
class DeliveryZoneRemoved:
    __version__ = 1

    store_id = Identifier(required=True)
    zone_id = Identifier(required=True)
    zone_name = String(required=True)


@marketplace.event(part_of="Store")
class StoreVerified:
    """An administrator vouched for the store's identity and quality."""

    __version__ = 1

    store_id = Identifier(required=True)
    verified_by = Identifier()
    verified_at = DateTime(required=True)
