"""Collection listing with a preview of each collection's newest products."""

from shared.listing import everything, query

from marketplace.collection.collection import Collection
from marketplace.product.product import Product
from marketplace.settings import COLLECTION_PREVIEW_SIZE


def list_collections(category_id=None, featured=None, season=None) -> list[dict]:
    """Active collections, featured first then by display order.

    Each entry is ``{"collection", "products", "product_count"}`` where
    ``products`` holds up to eight of the newest available products and
    ``product_count`` counts all of them.
    """
    collections = query(
        Collection,
        is_active=True,
        category_id=category_id or None,
        is_featured=featured,
        season=season or None,
    ).order_by(["-is_featured", "display_order"])

    listing = []
    for collection in everything(collections):
        preview = (
            query(Product, collection_id=str(collection.id), is_active=True, is_in_stock=True)
            .order_by("-created_at")
            .limit(COLLECTION_PREVIEW_SIZE)
            .all()
        )
        listing.append(
            {
                "collection": collection,
                "products": list(preview.items),
                "product_count": preview.total,
            }
        )
    return listing
