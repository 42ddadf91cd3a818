"""Store directory: the public listing of professionals' stores."""

from protean.utils.query import Q
from shared.listing import any_of, query

from marketplace.store.store import Store


def store_query(verified=None, location=None, search=None):
    """Stores matching the filters, verified first then best rated.

    ``location`` matches as a case-insensitive substring; ``search`` looks in
    the business name and bio.
    """
    clauses = [any_of(Q(business_name__icontains=search), Q(bio__icontains=search))] if search else []
    return query(
        Store,
        *clauses,
        is_verified=verified,
        location__icontains=location or None,
    ).order_by(["-is_verified", "-rating", "-created_at"])
