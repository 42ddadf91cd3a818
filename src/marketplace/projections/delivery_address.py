"""Delivery addresses known to the marketplace.

A local copy of every customer's address book, kept current from Identity's
address events. PlaceOrder checks that the chosen address belongs to the
customer and copies it onto the order.
"""

from protean.fields import Identifier, String

from marketplace.domain import marketplace


@marketplace.projection
class DeliveryAddress:
    address_id = Identifier(identifier=True, required=True)
    customer_id = Identifier(required=True)
    address_type = String(max_length=20)
    first_name = String(required=True, max_length=100)
    last_name = String(required=True, max_length=100)
    street = String(required=True, max_length=255)
    city = String(required=True, max_length=100)
    state = String(max_length=100)
    zip_code = String(max_length=20)
    country = String(required=True, max_length=100)

    def snapshot(self) -> dict:
        return {
            "address_id": str(self.address_id),
            "first_name": self.first_name,
            "last_name": self.last_name,
            "street": self.street,
            "city": self.city,
            "state": self.state,
            "zip_code": self.zip_code,
            "country": self.country,
        }
