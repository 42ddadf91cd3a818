"""Category tree reads: the full list, top-level parents and one category's page.

Product counts only include active, in-stock products. A category's page
lists products from the category and every active subcategory beneath it.
"""

from shared.listing import count, everything, fetch_page, query

from marketplace.category.category import Category
from marketplace.collection.collection import Collection
from marketplace.product.product import Product
from marketplace.settings import COLLECTION_PREVIEW_SIZE


def _available_products(*category_ids):
    return query(Product, category_id__in=[str(i) for i in category_ids], is_active=True, is_in_stock=True)


def _ref(category: Category) -> dict:
    return {"category_id": str(category.id), "name": category.name, "slug": category.slug}


def _parent_ref(category: Category) -> dict | None:
    if not category.parent_id:
        return None
    parent = query(Category, id=str(category.parent_id)).all().first
    return _ref(parent) if parent else None


def _children(category_id, active_only=False) -> list[Category]:
    children = query(
        Category,
        parent_id=str(category_id),
        is_active=True if active_only else None,
    ).order_by("display_order")
    return everything(children)


def _collections(category_id) -> list[dict]:
    collections = query(Collection, category_id=str(category_id), is_active=True).order_by("display_order")
    return [{"collection_id": str(c.id), "name": c.name, "slug": c.slug} for c in everything(collections)]


def _summary(category: Category, include_products: bool, with_family: bool) -> dict:
    entry = {
        "category": category,
        "collections": _collections(category.id),
        "product_count": count(_available_products(category.id)),
        "products": [],
    }
    if with_family:
        entry["parent"] = _parent_ref(category)
        entry["children"] = [_ref(child) for child in _children(category.id)]
    if include_products:
        preview = _available_products(category.id).order_by("-created_at").limit(COLLECTION_PREVIEW_SIZE)
        entry["products"] = list(preview.all().items)
    return entry


def list_categories(include_products: bool = False) -> list[dict]:
    """Every category, top-level or not, by display order, with its parent and children."""
    categories = everything(query(Category).order_by("display_order"))
    return [_summary(category, include_products, with_family=True) for category in categories]


def parent_categories(include_products: bool = False) -> list[dict]:
    """Top-level categories only, by display order."""
    categories = everything(query(Category, parent_id__isnull=True).order_by("display_order"))
    return [_summary(category, include_products, with_family=False) for category in categories]


def descendant_ids(category_id) -> list[str]:
    """Ids of every active category beneath ``category_id``, at any depth."""
    found: list[str] = []
    pending = [str(category_id)]
    while pending:
        for child in _children(pending.pop(), active_only=True):
            child_id = str(child.id)
            if child_id not in found:
                found.append(child_id)
                pending.append(child_id)
    return found


def category_page(category: Category, include_products: bool = False, page: int = 1, limit: int = 20) -> dict:
    """A category with its active subcategories and, optionally, a page of products.

    Products come from the category and all its active descendants, newest
    first. ``products`` and ``pagination`` stay empty unless asked for.
    """
    children = [
        {**_ref(child), "product_count": count(_available_products(child.id))}
        for child in _children(category.id, active_only=True)
    ]
    result = {
        "category": category,
        "parent": _parent_ref(category),
        "children": children,
        "collections": _collections(category.id),
        "product_count": count(_available_products(category.id)),
        "products": [],
        "pagination": None,
    }
    if include_products:
        products = _available_products(category.id, *descendant_ids(category.id)).order_by("-created_at")
        result["products"], result["pagination"] = fetch_page(products, page, limit)
    return result
