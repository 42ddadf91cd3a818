"""Inbound cross-domain event handler: Identity reacts to Marketplace events.

Opening a store on the marketplace turns the owner into a Professional,
which unlocks the vendor dashboard (product and collection management,
analytics).
"""

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain
from protean.utils.mixins import handle
from shared.events.marketplace import StoreOpened

from identity.domain import identity
from identity.user.user import User

logger = structlog.get_logger(__name__)

identity.register_external_event(StoreOpened, "Marketplace.StoreOpened.v1")


@identity.event_handler(part_of=User, stream_category="marketplace::store")
class MarketplaceUserEventHandler:
    """Promotes store owners to the Professional role."""

    @handle(StoreOpened)
    def on_store_opened(self, event: StoreOpened) -> None:
        repo = current_domain.repository_for(User)
        try:
            user = repo.get(str(event.professional_id))
        except ObjectNotFoundError:
            logger.warning(
                "Store opened for unknown user",
                store_id=str(event.store_id),
                professional_id=str(event.professional_id),
            )
            return

        user.promote_to_professional()
        repo.add(user)
        logger.info(
            "Store owner promoted",
            user_id=str(user.id),
            role=user.role,
        )
