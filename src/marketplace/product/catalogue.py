"""Storefront product queries: browsing, filtering and the showcase.

Every filter is expressed as query criteria so the provider does the
filtering, sorting and paging. Sizes, colors and tags are stored as JSON
arrays; an element matches when its quoted form appears in the array text.
"""

import json
from dataclasses import dataclass, field

from protean.utils.query import Q
from shared.listing import any_of, fetch_page, query

from marketplace.product.product import Product

SORT_FIELDS = ("created_at", "price", "view_count")


@dataclass
class ProductFilter:
    category_id: str | None = None
    collection_id: str | None = None
    professional_id: str | None = None
    gender: str | None = None
    search: str | None = None
    min_price: float | None = None
    max_price: float | None = None
    tags: list[str] = field(default_factory=list)
    colors: list[str] = field(default_factory=list)
    sizes: list[str] = field(default_factory=list)
    sort_by: str = "created_at"
    sort_order: str = "desc"

    @property
    def ordering(self) -> list[str]:
        sort_by = self.sort_by if self.sort_by in SORT_FIELDS else "created_at"
        direction = "" if self.sort_order == "asc" else "-"
        ordering = [f"{direction}{sort_by}"]
        if sort_by != "created_at":
            ordering.append("-created_at")
        return ordering


def _json_element(field_name: str, values: list[str]) -> Q:
    return any_of(*(Q(**{f"{field_name}__contains": json.dumps(value)}) for value in values))


def product_query(criteria: ProductFilter):
    """Available products matching ``criteria``, in the requested order."""
    clauses = []
    if criteria.search:
        clauses.append(any_of(Q(name__icontains=criteria.search), Q(description__icontains=criteria.search)))
    for field_name in ("tags", "colors", "sizes"):
        values = getattr(criteria, field_name)
        if values:
            clauses.append(_json_element(field_name, values))

    return query(
        Product,
        *clauses,
        is_active=True,
        is_in_stock=True,
        category_id=criteria.category_id or None,
        collection_id=criteria.collection_id or None,
        professional_id=criteria.professional_id or None,
        gender=criteria.gender or None,
        price__gte=criteria.min_price,
        price__lte=criteria.max_price,
    ).order_by(criteria.ordering)


def browse_products(criteria: ProductFilter, page: int = 1, limit: int = 12) -> tuple[list[Product], dict]:
    return fetch_page(product_query(criteria), page, limit)


def showcase_query():
    """Approved, active, in-stock products, most recently approved first."""
    return query(Product, is_showcase_approved=True, is_active=True, is_in_stock=True).order_by(
        ["-approved_at", "-created_at"]
    )


def showcase_products(page: int = 1, limit: int = 10) -> tuple[list[Product], dict]:
    return fetch_page(showcase_query(), page, limit)
