"""BDD tests for order pricing."""

from pytest_bdd import scenarios

scenarios("features/order_pricing.feature")
