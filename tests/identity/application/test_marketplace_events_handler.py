"""Application tests for the inbound StoreOpened event handler."""

from datetime import UTC, datetime

from identity.user.marketplace_events import MarketplaceUserEventHandler
from identity.user.registration import RegisterUser
from identity.user.user import User
from protean import current_domain
from shared.events.marketplace import StoreOpened


def _store_opened(professional_id):
    return StoreOpened(
        store_id="store-001",
        professional_id=professional_id,
        business_name="Amani Couture",
        opened_at=datetime.now(UTC),
    )


class TestStoreOpenedHandler:
    def test_promotes_store_owner(self):
        user_id = current_domain.process(
            RegisterUser(email="vendor@example.com", first_name="Zawadi", last_name="Mwangi"),
            asynchronous=False,
        )

        MarketplaceUserEventHandler().on_store_opened(_store_opened(user_id))

        assert current_domain.repository_for(User).get(user_id).role == "Professional"

    def test_unknown_user_is_skipped(self):
        # Should not raise, just log and skip
        MarketplaceUserEventHandler().on_store_opened(_store_opened("ghost-user"))
