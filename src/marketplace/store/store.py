"""Store aggregate: a professional's shop front with its delivery zones."""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, HasMany, Identifier, Integer, String, Text

from marketplace.domain import marketplace
from marketplace.store.events import (
    DeliveryZoneAdded,
    DeliveryZoneRemoved,
    StoreOpened,
    StoreUpdated,
    StoreVerified,
)

_EDITABLE_FIELDS = (
    "business_name",
    "specialization",
    "location",
    "bio",
    "experience_years",
    "free_delivery_threshold",
)


@marketplace.entity(part_of="Store")
class DeliveryZone:
    """A named area the store delivers to, with its own fee.

    Orders above ``free_delivery_above`` ship free; when the zone sets no
    threshold the store-wide ``free_delivery_threshold`` applies instead.
    """

    zone_name = String(required=True, max_length=100)
    base_delivery_fee = Float(required=True, min_value=0.0)
    free_delivery_above = Float(min_value=0.0)
    estimated_days = Integer(min_value=0)


@marketplace.aggregate
class Store:
    """The professional profile a vendor sells under. One per professional."""

    professional_id = Identifier(required=True, unique=True)
    business_name = String(required=True, max_length=200)
    specialization = String(max_length=200)
    location = String(max_length=200)
    bio = Text()
    experience_years = Integer(min_value=0)
    free_delivery_threshold = Float(min_value=0.0)
    is_verified = Boolean(default=False)
    rating = Float(default=0.0, min_value=0.0, max_value=5.0)
    total_reviews = Integer(default=0, min_value=0)
    delivery_zones = HasMany(DeliveryZone)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def zone_names_must_be_unique(self):
        names = [z.zone_name.strip().lower() for z in self.delivery_zones]
        if len(names) != len(set(names)):
            raise ValidationError({"delivery_zones": ["Zone names must be unique within a store"]})

    @classmethod
    def open(cls, professional_id, business_name, **details):
        now = datetime.now(UTC)
        store = cls(
            professional_id=professional_id,
            business_name=business_name,
            created_at=now,
            updated_at=now,
            **{k: v for k, v in details.items() if k in _EDITABLE_FIELDS and v is not None},
        )
        store.raise_(
            StoreOpened(
                store_id=str(store.id),
                professional_id=str(professional_id),
                business_name=business_name,
                opened_at=now,
            )
        )
        return store

    def update_details(self, **changes):
        for field, value in changes.items():
            if field not in _EDITABLE_FIELDS:
                raise ValidationError({field: ["Field cannot be changed"]})
            if value is not None:
                setattr(self, field, value)
        self.updated_at = datetime.now(UTC)
        self.raise_(
            StoreUpdated(
                store_id=str(self.id),
                business_name=self.business_name,
                location=self.location,
                free_delivery_threshold=self.free_delivery_threshold,
            )
        )

    def zone_named(self, zone_name):
        """Return the zone whose name matches exactly, or None."""
        return next((z for z in self.delivery_zones if z.zone_name == zone_name), None)

    def add_delivery_zone(self, zone_name, base_delivery_fee, free_delivery_above=None, estimated_days=None):
        if self.zone_named(zone_name) is not None:
            raise ValidationError({"zone_name": [f"Zone {zone_name} already exists"]})

        zone = DeliveryZone(
            zone_name=zone_name,
            base_delivery_fee=base_delivery_fee,
            free_delivery_above=free_delivery_above,
            estimated_days=estimated_days,
        )
        self.add_delivery_zones(zone)
        self.updated_at = datetime.now(UTC)
        self.raise_(
            DeliveryZoneAdded(
                store_id=str(self.id),
                zone_id=str(zone.id),
                zone_name=zone_name,
                base_delivery_fee=base_delivery_fee,
                free_delivery_above=free_delivery_above,
            )
        )
        return zone

    def remove_delivery_zone(self, zone_id):
        zone = next((z for z in self.delivery_zones if str(z.id) == str(zone_id)), None)
        if zone is None:
            raise ValidationError({"delivery_zones": [f"Zone {zone_id} not found"]})

        self.remove_delivery_zones(zone)
        self.updated_at = datetime.now(UTC)
        self.raise_(DeliveryZoneRemoved(store_id=str(self.id), zone_id=str(zone_id), zone_name=zone.zone_name))

    def record_rating(self, average: float, total_reviews: int):
        """Replace the store's average rating with one computed from its published reviews."""
        self.rating = round(average, 2)
        self.total_reviews = total_reviews
        self.updated_at = datetime.now(UTC)

    def verify(self, verified_by=None):
        if self.is_verified:
            return
        self.is_verified = True
        now = datetime.now(UTC)
        self.updated_at = now
        self.raise_(StoreVerified(store_id=str(self.id), verified_by=verified_by, verified_at=now))
