"""Repository reads behind every listing endpoint.

Filtering, ordering and paging run inside the provider, so a page and its
``total`` always reflect every stored record. Aggregates default to a page
of 100 records; ``everything`` lifts that cap for reads that must see the
whole result.
"""

import math
from functools import reduce
from operator import or_

from protean.utils.globals import current_domain
from protean.utils.query import Q


def query(aggregate_cls, *criteria: Q, **filters):
    """QuerySet over ``aggregate_cls``. Filters whose value is None are skipped."""
    filters = {key: value for key, value in filters.items() if value is not None}
    return current_domain.repository_for(aggregate_cls)._dao.query.filter(*criteria, **filters)


def any_of(*alternatives: Q) -> Q:
    """OR the alternatives together; no alternatives matches everything."""
    return reduce(or_, alternatives) if alternatives else Q()


def everything(queryset) -> list:
    """Every record ``queryset`` matches, in its order."""
    return list(queryset.limit(None).all().items)


def count(queryset) -> int:
    return queryset.limit(1).all().total


def pagination(page: int, limit: int, total: int) -> dict:
    return {"page": page, "limit": limit, "total": total, "pages": math.ceil(total / limit)}


def fetch_page(queryset, page: int = 1, limit: int = 10) -> tuple[list, dict]:
    """One page of ``queryset`` plus the pagination block for the response."""
    page = max(page, 1)
    limit = max(limit, 1)
    result = queryset.offset((page - 1) * limit).limit(limit).all()
    return list(result.items), pagination(page, limit, result.total)
