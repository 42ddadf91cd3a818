"""FastAPI endpoints for the Marketplace domain.

Commands go through ``current_domain.process``; listings read through the
query helpers beside each aggregate, which the provider filters and pages.
"""

import json

from fastapi import APIRouter, Depends, HTTPException, Query
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain
from shared.auth import ADMIN_ROLES, Actor, Role, current_actor, require_roles
from shared.listing import fetch_page

from marketplace.analytics.dashboard import dashboard_stats
from marketplace.analytics.professional import DEFAULT_PERIOD, professional_analytics
from marketplace.api.schemas import (
    AddDeliveryZoneRequest,
    AddToCartRequest,
    AddToWishlistRequest,
    CancelOrderRequest,
    CartItemIdResponse,
    CartResponse,
    CategoryIdResponse,
    CategoryPageResponse,
    CategoryRefResponse,
    CategoryResponse,
    CollectionIdResponse,
    CollectionRefResponse,
    CollectionResponse,
    CouponIdResponse,
    CouponListResponse,
    CouponResponse,
    CreateCategoryRequest,
    CreateCollectionRequest,
    CreateCouponRequest,
    CreateProductRequest,
    DeliveryZoneResponse,
    OpenStoreRequest,
    OrderIdResponse,
    OrderItemResponse,
    OrderListResponse,
    OrderPricingResponse,
    OrderResponse,
    PlaceOrderRequest,
    ProductIdResponse,
    ProductListResponse,
    ProductResponse,
    ReleasedEscrowsResponse,
    ReleaseDueEscrowsRequest,
    RemoveReviewRequest,
    RestockProductRequest,
    ReviewIdResponse,
    ReviewListResponse,
    ReviewResponse,
    ShippingAddressResponse,
    ShowcaseApprovalRequest,
    StatusResponse,
    StoreIdResponse,
    StoreListResponse,
    StoreResponse,
    SubmitReviewRequest,
    UpdateCartItemRequest,
    UpdateCategoryRequest,
    UpdateCollectionRequest,
    UpdateOrderStatusRequest,
    UpdateProductRequest,
    UpdateStoreRequest,
    WishlistResponse,
    ZoneIdResponse,
)
from marketplace.cart.items import AddToCart, RemoveCartItem, UpdateCartItem
from marketplace.cart.view import cart_view
from marketplace.category.browsing import category_page, list_categories, parent_categories
from marketplace.category.category import Category
from marketplace.category.management import CreateCategory, UpdateCategory
from marketplace.collection.browsing import list_collections
from marketplace.collection.management import CreateCollection, DeactivateCollection, UpdateCollection
from marketplace.coupon.management import CreateCoupon, DeactivateCoupon, coupon_query
from marketplace.escrow.release import ReleaseDueEscrows
from marketplace.order.cancellation import CancelOrder
from marketplace.order.fulfillment import ConfirmDelivery, UpdateOrderStatus
from marketplace.order.order import Order
from marketplace.order.placement import PlaceOrder
from marketplace.order.queries import can_cancel, can_manage, can_view, order_query
from marketplace.product.catalogue import ProductFilter, browse_products, showcase_products
from marketplace.product.management import (
    CreateProduct,
    DeactivateProduct,
    RecordProductView,
    RestockProduct,
    SetShowcaseApproval,
    UpdateProduct,
)
from marketplace.product.product import Product
from marketplace.review.moderation import RemoveReview, review_query
from marketplace.review.review import Review
from marketplace.review.submission import SubmitReview
from marketplace.settings import PUBLIC_SHOWCASE_SIZE
from marketplace.store.directory import store_query
from marketplace.store.management import (
    AddDeliveryZone,
    OpenStore,
    RemoveDeliveryZone,
    UpdateStore,
    VerifyStore,
)
from marketplace.store.store import Store
from marketplace.wishlist.items import AddToWishlist, RemoveFromWishlist
from marketplace.wishlist.wishlist import Wishlist

store_router = APIRouter(prefix="/stores", tags=["stores"])
product_router = APIRouter(prefix="/products", tags=["products"])
collection_router = APIRouter(prefix="/collections", tags=["collections"])
cart_router = APIRouter(prefix="/cart", tags=["cart"])
wishlist_router = APIRouter(prefix="/wishlist", tags=["wishlist"])
coupon_router = APIRouter(prefix="/coupons", tags=["coupons"])
order_router = APIRouter(prefix="/orders", tags=["orders"])
escrow_router = APIRouter(prefix="/escrows", tags=["escrows"])
analytics_router = APIRouter(prefix="/analytics", tags=["analytics"])
category_router = APIRouter(prefix="/categories", tags=["categories"])
review_router = APIRouter(prefix="/reviews", tags=["reviews"])

_admin = require_roles(*ADMIN_ROLES)
_professional = require_roles(Role.PROFESSIONAL.value)
_super_admin = require_roles(Role.SUPER_ADMIN.value)


def _load(aggregate_cls, identifier: str, label: str):
    try:
        return current_domain.repository_for(aggregate_cls).get(identifier)
    except ObjectNotFoundError:
        raise HTTPException(status_code=404, detail=f"{label} not found")


def _json_list(values):
    return json.dumps(values) if values is not None else None


# ---------------------------------------------------------------------------
# Response builders
# ---------------------------------------------------------------------------
def _store_response(store: Store) -> StoreResponse:
    return StoreResponse(
        store_id=str(store.id),
        professional_id=str(store.professional_id),
        business_name=store.business_name,
        specialization=store.specialization,
        location=store.location,
        bio=store.bio,
        experience_years=store.experience_years,
        free_delivery_threshold=store.free_delivery_threshold,
        is_verified=bool(store.is_verified),
        rating=store.rating or 0.0,
        total_reviews=store.total_reviews or 0,
        delivery_zones=[
            DeliveryZoneResponse(
                zone_id=str(zone.id),
                zone_name=zone.zone_name,
                base_delivery_fee=zone.base_delivery_fee,
                free_delivery_above=zone.free_delivery_above,
                estimated_days=zone.estimated_days,
            )
            for zone in store.delivery_zones
        ],
    )


def _product_response(product: Product) -> ProductResponse:
    return ProductResponse(
        product_id=str(product.id),
        professional_id=str(product.professional_id),
        name=product.name,
        description=product.description,
        price=product.price,
        stock_quantity=product.stock_quantity,
        is_active=bool(product.is_active),
        is_in_stock=bool(product.is_in_stock),
        category_id=str(product.category_id) if product.category_id else None,
        collection_id=str(product.collection_id) if product.collection_id else None,
        sizes=product.size_list,
        colors=product.color_list,
        tags=product.tag_list,
        gender=product.gender,
        material=product.material,
        view_count=product.view_count or 0,
        wishlist_count=product.wishlist_count or 0,
        cart_count=product.cart_count or 0,
        sold_count=product.sold_count or 0,
        is_showcase_approved=bool(product.is_showcase_approved),
        approved_at=product.approved_at,
        created_at=product.created_at,
    )


def _coupon_response(coupon) -> CouponResponse:
    return CouponResponse(
        coupon_id=str(coupon.id),
        code=coupon.code,
        description=coupon.description,
        coupon_type=coupon.coupon_type,
        value=coupon.value,
        min_order_amount=coupon.min_order_amount,
        max_discount=coupon.max_discount,
        usage_limit=coupon.usage_limit,
        used_count=coupon.used_count or 0,
        valid_from=coupon.valid_from,
        valid_until=coupon.valid_until,
        is_active=bool(coupon.is_active),
    )


def _category_response(entry: dict) -> CategoryResponse:
    category: Category = entry["category"]
    return CategoryResponse(
        category_id=str(category.id),
        name=category.name,
        slug=category.slug,
        description=category.description,
        image_url=category.image_url,
        parent_id=str(category.parent_id) if category.parent_id else None,
        display_order=category.display_order or 0,
        is_active=bool(category.is_active),
        parent=CategoryRefResponse(**entry["parent"]) if entry.get("parent") else None,
        children=[CategoryRefResponse(**child) for child in entry.get("children", [])],
        collections=[CollectionRefResponse(**c) for c in entry["collections"]],
        products=[_product_response(p) for p in entry["products"]],
        product_count=entry["product_count"],
    )


def _review_response(review: Review) -> ReviewResponse:
    return ReviewResponse(
        review_id=str(review.id),
        reviewer_id=str(review.reviewer_id),
        target_id=str(review.target_id),
        target_type=review.target_type,
        order_id=str(review.order_id) if review.order_id else None,
        rating=review.rating,
        title=review.title,
        comment=review.comment,
        images=review.image_urls,
        is_verified=bool(review.is_verified),
        created_at=review.created_at,
    )


def _order_response(order: Order) -> OrderResponse:
    address = order.shipping_address
    pricing = order.pricing
    return OrderResponse(
        order_id=str(order.id),
        customer_id=str(order.customer_id),
        status=order.status,
        items=[
            OrderItemResponse(
                item_id=str(item.id),
                product_id=str(item.product_id),
                professional_id=str(item.professional_id),
                product_name=item.product_name,
                unit_price=item.unit_price,
                quantity=item.quantity,
                line_total=item.line_total,
                size=item.size,
                color=item.color,
                notes=item.notes,
            )
            for item in order.items
        ],
        shipping_address=ShippingAddressResponse(
            address_id=str(address.address_id) if address.address_id else None,
            first_name=address.first_name,
            last_name=address.last_name,
            street=address.street,
            city=address.city,
            state=address.state,
            zip_code=address.zip_code,
            country=address.country,
        )
        if address
        else None,
        pricing=OrderPricingResponse(
            subtotal=pricing.subtotal,
            shipping_cost=pricing.shipping_cost,
            discount=pricing.discount,
            tax=pricing.tax,
            total_price=pricing.total_price,
        )
        if pricing
        else None,
        delivery_zone=order.delivery_zone,
        coupon_code=order.coupon_code,
        tracking_number=order.tracking_number,
        notes=order.notes,
        actual_delivery=order.actual_delivery,
        confirmation_deadline=order.confirmation_deadline,
        delivery_confirmed_at=order.delivery_confirmed_at,
        cancellation_reason=order.cancellation_reason,
        created_at=order.created_at,
    )


# ---------------------------------------------------------------------------
# Stores
# ---------------------------------------------------------------------------
def _owned_store(store_id: str, actor: Actor) -> Store:
    store = _load(Store, store_id, "Store")
    if str(store.professional_id) != actor.user_id and not actor.is_admin:
        raise HTTPException(status_code=403, detail="Forbidden")
    return store


@store_router.post("", status_code=201, response_model=StoreIdResponse)
async def open_store(body: OpenStoreRequest, actor: Actor = Depends(current_actor)) -> StoreIdResponse:
    command = OpenStore(professional_id=actor.user_id, **body.model_dump())
    result = current_domain.process(command, asynchronous=False)
    return StoreIdResponse(store_id=result)


@store_router.get("", response_model=StoreListResponse)
async def get_stores(
    verified: bool | None = None,
    location: str | None = None,
    search: str | None = None,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
) -> StoreListResponse:
    stores, pagination = fetch_page(store_query(verified=verified, location=location, search=search), page, limit)
    return StoreListResponse(stores=[_store_response(s) for s in stores], pagination=pagination)


@store_router.get("/{store_id}", response_model=StoreResponse)
async def get_store(store_id: str) -> StoreResponse:
    return _store_response(_load(Store, store_id, "Store"))


@store_router.put("/{store_id}", response_model=StatusResponse)
async def update_store(store_id: str, body: UpdateStoreRequest, actor: Actor = Depends(current_actor)) -> StatusResponse:
    _owned_store(store_id, actor)
    current_domain.process(UpdateStore(store_id=store_id, **body.model_dump()), asynchronous=False)
    return StatusResponse()


@store_router.post("/{store_id}/zones", status_code=201, response_model=ZoneIdResponse)
async def add_delivery_zone(
    store_id: str, body: AddDeliveryZoneRequest, actor: Actor = Depends(current_actor)
) -> ZoneIdResponse:
    _owned_store(store_id, actor)
    result = current_domain.process(AddDeliveryZone(store_id=store_id, **body.model_dump()), asynchronous=False)
    return ZoneIdResponse(zone_id=result)


@store_router.delete("/{store_id}/zones/{zone_id}", response_model=StatusResponse)
async def remove_delivery_zone(store_id: str, zone_id: str, actor: Actor = Depends(current_actor)) -> StatusResponse:
    _owned_store(store_id, actor)
    current_domain.process(RemoveDeliveryZone(store_id=store_id, zone_id=zone_id), asynchronous=False)
    return StatusResponse()


@store_router.put("/{store_id}/verify", response_model=StatusResponse)
async def verify_store(store_id: str, actor: Actor = Depends(_admin)) -> StatusResponse:
    current_domain.process(VerifyStore(store_id=store_id, verified_by=actor.user_id), asynchronous=False)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------------
def _owned_product(product_id: str, actor: Actor) -> Product:
    product = _load(Product, product_id, "Product")
    if str(product.professional_id) != actor.user_id and not actor.is_admin:
        raise HTTPException(status_code=403, detail="Forbidden")
    return product


@product_router.get("", response_model=ProductListResponse)
async def get_products(
    category_id: str | None = None,
    collection_id: str | None = None,
    professional_id: str | None = None,
    gender: str | None = None,
    search: str | None = None,
    min_price: float | None = None,
    max_price: float | None = None,
    tags: list[str] = Query([]),
    colors: list[str] = Query([]),
    sizes: list[str] = Query([]),
    sort_by: str = "created_at",
    sort_order: str = "desc",
    page: int = Query(1, ge=1),
    limit: int = Query(12, ge=1, le=100),
) -> ProductListResponse:
    criteria = ProductFilter(
        category_id=category_id,
        collection_id=collection_id,
        professional_id=professional_id,
        gender=gender,
        search=search,
        min_price=min_price,
        max_price=max_price,
        tags=tags,
        colors=colors,
        sizes=sizes,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    products, pagination = browse_products(criteria, page, limit)
    return ProductListResponse(products=[_product_response(p) for p in products], pagination=pagination)


@product_router.get("/showcase", response_model=list[ProductResponse])
async def get_public_showcase() -> list[ProductResponse]:
    products, _ = showcase_products(limit=PUBLIC_SHOWCASE_SIZE)
    return [_product_response(p) for p in products]


@product_router.get("/showcase/dashboard", response_model=ProductListResponse)
async def get_showcase_dashboard(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    actor: Actor = Depends(_admin),
) -> ProductListResponse:
    products, pagination = showcase_products(page, limit)
    return ProductListResponse(products=[_product_response(p) for p in products], pagination=pagination)


@product_router.post("", status_code=201, response_model=ProductIdResponse)
async def create_product(body: CreateProductRequest, actor: Actor = Depends(_professional)) -> ProductIdResponse:
    command = CreateProduct(
        professional_id=actor.user_id,
        name=body.name,
        description=body.description,
        price=body.price,
        stock_quantity=body.stock_quantity,
        category_id=body.category_id,
        collection_id=body.collection_id,
        sizes=json.dumps(body.sizes),
        colors=json.dumps(body.colors),
        tags=json.dumps(body.tags),
        gender=body.gender,
        material=body.material,
    )
    result = current_domain.process(command, asynchronous=False)
    return ProductIdResponse(product_id=result)


@product_router.get("/{product_id}", response_model=ProductResponse)
async def get_product(product_id: str) -> ProductResponse:
    _load(Product, product_id, "Product")
    current_domain.process(RecordProductView(product_id=product_id), asynchronous=False)
    return _product_response(_load(Product, product_id, "Product"))


@product_router.put("/{product_id}", response_model=StatusResponse)
async def update_product(
    product_id: str, body: UpdateProductRequest, actor: Actor = Depends(current_actor)
) -> StatusResponse:
    _owned_product(product_id, actor)
    command = UpdateProduct(
        product_id=product_id,
        name=body.name,
        description=body.description,
        price=body.price,
        category_id=body.category_id,
        collection_id=body.collection_id,
        sizes=_json_list(body.sizes),
        colors=_json_list(body.colors),
        tags=_json_list(body.tags),
        gender=body.gender,
        material=body.material,
        is_active=body.is_active,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@product_router.put("/{product_id}/restock", response_model=StatusResponse)
async def restock_product(
    product_id: str, body: RestockProductRequest, actor: Actor = Depends(current_actor)
) -> StatusResponse:
    _owned_product(product_id, actor)
    current_domain.process(RestockProduct(product_id=product_id, quantity=body.quantity), asynchronous=False)
    return StatusResponse()


@product_router.delete("/{product_id}", response_model=StatusResponse)
async def deactivate_product(product_id: str, actor: Actor = Depends(current_actor)) -> StatusResponse:
    _owned_product(product_id, actor)
    current_domain.process(DeactivateProduct(product_id=product_id), asynchronous=False)
    return StatusResponse()


@product_router.put("/{product_id}/showcase", response_model=StatusResponse)
async def set_showcase_approval(
    product_id: str, body: ShowcaseApprovalRequest, actor: Actor = Depends(_super_admin)
) -> StatusResponse:
    command = SetShowcaseApproval(product_id=product_id, approved=body.approved, changed_by=actor.user_id)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Categories
# ---------------------------------------------------------------------------
@category_router.get("", response_model=list[CategoryResponse])
async def get_categories(include_products: bool = False) -> list[CategoryResponse]:
    return [_category_response(entry) for entry in list_categories(include_products=include_products)]


@category_router.get("/parents", response_model=list[CategoryResponse])
async def get_parent_categories(include_products: bool = False) -> list[CategoryResponse]:
    return [_category_response(entry) for entry in parent_categories(include_products=include_products)]


@category_router.get("/{category_id}", response_model=CategoryPageResponse)
async def get_category(
    category_id: str,
    include_products: bool = False,
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
) -> CategoryPageResponse:
    category = _load(Category, category_id, "Category")
    result = category_page(category, include_products=include_products, page=page, limit=limit)
    return CategoryPageResponse(
        category=_category_response({**result, "products": []}),
        products=[_product_response(p) for p in result["products"]],
        pagination=result["pagination"],
    )


@category_router.post("", status_code=201, response_model=CategoryIdResponse)
async def create_category(body: CreateCategoryRequest, actor: Actor = Depends(_admin)) -> CategoryIdResponse:
    result = current_domain.process(CreateCategory(**body.model_dump()), asynchronous=False)
    return CategoryIdResponse(category_id=result)


@category_router.put("/{category_id}", response_model=StatusResponse)
async def update_category(
    category_id: str, body: UpdateCategoryRequest, actor: Actor = Depends(_admin)
) -> StatusResponse:
    _load(Category, category_id, "Category")
    current_domain.process(UpdateCategory(category_id=category_id, **body.model_dump()), asynchronous=False)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Collections
# ---------------------------------------------------------------------------
@collection_router.get("", response_model=list[CollectionResponse])
async def get_collections(
    category_id: str | None = None,
    featured: bool | None = None,
    season: str | None = None,
) -> list[CollectionResponse]:
    return [
        CollectionResponse(
            collection_id=str(entry["collection"].id),
            name=entry["collection"].name,
            slug=entry["collection"].slug,
            description=entry["collection"].description,
            image_url=entry["collection"].image_url,
            category_id=str(entry["collection"].category_id) if entry["collection"].category_id else None,
            season=entry["collection"].season,
            is_featured=bool(entry["collection"].is_featured),
            display_order=entry["collection"].display_order or 0,
            products=[_product_response(p) for p in entry["products"]],
            product_count=entry["product_count"],
        )
        for entry in list_collections(category_id=category_id, featured=featured, season=season)
    ]


@collection_router.post("", status_code=201, response_model=CollectionIdResponse)
async def create_collection(body: CreateCollectionRequest, actor: Actor = Depends(_admin)) -> CollectionIdResponse:
    result = current_domain.process(CreateCollection(**body.model_dump()), asynchronous=False)
    return CollectionIdResponse(collection_id=result)


@collection_router.put("/{collection_id}", response_model=StatusResponse)
async def update_collection(
    collection_id: str, body: UpdateCollectionRequest, actor: Actor = Depends(_admin)
) -> StatusResponse:
    current_domain.process(UpdateCollection(collection_id=collection_id, **body.model_dump()), asynchronous=False)
    return StatusResponse()


@collection_router.delete("/{collection_id}", response_model=StatusResponse)
async def deactivate_collection(collection_id: str, actor: Actor = Depends(_admin)) -> StatusResponse:
    current_domain.process(DeactivateCollection(collection_id=collection_id), asynchronous=False)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------
@cart_router.get("", response_model=CartResponse)
async def get_cart(actor: Actor = Depends(current_actor)) -> CartResponse:
    return CartResponse(**cart_view(actor.user_id))


@cart_router.post("/items", status_code=201, response_model=CartItemIdResponse)
async def add_to_cart(body: AddToCartRequest, actor: Actor = Depends(current_actor)) -> CartItemIdResponse:
    command = AddToCart(
        customer_id=actor.user_id,
        product_id=body.product_id,
        quantity=body.quantity,
        size=body.size,
        color=body.color,
    )
    result = current_domain.process(command, asynchronous=False)
    return CartItemIdResponse(item_id=result)


@cart_router.put("/items/{item_id}", response_model=StatusResponse)
async def update_cart_item(
    item_id: str, body: UpdateCartItemRequest, actor: Actor = Depends(current_actor)
) -> StatusResponse:
    command = UpdateCartItem(customer_id=actor.user_id, item_id=item_id, quantity=body.quantity)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@cart_router.delete("/items/{item_id}", response_model=StatusResponse)
async def remove_cart_item(item_id: str, actor: Actor = Depends(current_actor)) -> StatusResponse:
    current_domain.process(RemoveCartItem(customer_id=actor.user_id, item_id=item_id), asynchronous=False)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Wishlist
# ---------------------------------------------------------------------------
@wishlist_router.get("", response_model=WishlistResponse)
async def get_wishlist(actor: Actor = Depends(current_actor)) -> WishlistResponse:
    try:
        wishlist = current_domain.repository_for(Wishlist).get(actor.user_id)
    except ObjectNotFoundError:
        return WishlistResponse(products=[])

    product_repo = current_domain.repository_for(Product)
    products = []
    for item in wishlist.items:
        try:
            products.append(_product_response(product_repo.get(item.product_id)))
        except ObjectNotFoundError:
            continue
    return WishlistResponse(products=products)


@wishlist_router.post("", status_code=201, response_model=StatusResponse)
async def add_to_wishlist(body: AddToWishlistRequest, actor: Actor = Depends(current_actor)) -> StatusResponse:
    current_domain.process(AddToWishlist(customer_id=actor.user_id, product_id=body.product_id), asynchronous=False)
    return StatusResponse()


@wishlist_router.delete("/{product_id}", response_model=StatusResponse)
async def remove_from_wishlist(product_id: str, actor: Actor = Depends(current_actor)) -> StatusResponse:
    current_domain.process(RemoveFromWishlist(customer_id=actor.user_id, product_id=product_id), asynchronous=False)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Coupons
# ---------------------------------------------------------------------------
@coupon_router.get("", response_model=CouponListResponse)
async def get_coupons(
    active: bool | None = None,
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    actor: Actor = Depends(_admin),
) -> CouponListResponse:
    coupons, pagination = fetch_page(coupon_query(active=active), page, limit)
    return CouponListResponse(coupons=[_coupon_response(c) for c in coupons], pagination=pagination)


@coupon_router.post("", status_code=201, response_model=CouponIdResponse)
async def create_coupon(body: CreateCouponRequest, actor: Actor = Depends(_admin)) -> CouponIdResponse:
    command = CreateCoupon(
        code=body.code,
        description=body.description,
        coupon_type=body.coupon_type,
        value=body.value,
        min_order_amount=body.min_order_amount,
        max_discount=body.max_discount,
        usage_limit=body.usage_limit,
        valid_from=body.valid_from,
        valid_until=body.valid_until,
        applicable_categories=json.dumps(body.applicable_categories),
        applicable_professionals=json.dumps(body.applicable_professionals),
        created_by=actor.user_id,
    )
    result = current_domain.process(command, asynchronous=False)
    return CouponIdResponse(coupon_id=result)


@coupon_router.delete("/{coupon_id}", response_model=StatusResponse)
async def deactivate_coupon(coupon_id: str, actor: Actor = Depends(_admin)) -> StatusResponse:
    current_domain.process(DeactivateCoupon(coupon_id=coupon_id), asynchronous=False)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
def _visible_order(order_id: str, actor: Actor) -> Order:
    order = _load(Order, order_id, "Order")
    if not can_view(order, actor):
        raise HTTPException(status_code=403, detail="Forbidden")
    return order


@order_router.post("", status_code=201, response_model=OrderIdResponse)
async def place_order(body: PlaceOrderRequest, actor: Actor = Depends(current_actor)) -> OrderIdResponse:
    command = PlaceOrder(
        customer_id=actor.user_id,
        address_id=body.address_id,
        items=json.dumps([line.model_dump() for line in body.items]),
        delivery_zone=body.delivery_zone,
        coupon_code=body.coupon_code,
    )
    result = current_domain.process(command, asynchronous=False)
    return OrderIdResponse(order_id=result)


@order_router.get("", response_model=OrderListResponse)
async def get_orders(
    status: str | None = None,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    actor: Actor = Depends(current_actor),
) -> OrderListResponse:
    orders, pagination = fetch_page(order_query(actor, status=status), page, limit)
    return OrderListResponse(orders=[_order_response(o) for o in orders], pagination=pagination)


@order_router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str, actor: Actor = Depends(current_actor)) -> OrderResponse:
    return _order_response(_visible_order(order_id, actor))


@order_router.put("/{order_id}/status", response_model=StatusResponse)
async def update_order_status(
    order_id: str, body: UpdateOrderStatusRequest, actor: Actor = Depends(current_actor)
) -> StatusResponse:
    order = _load(Order, order_id, "Order")
    if not can_manage(order, actor):
        raise HTTPException(status_code=403, detail="Forbidden")
    command = UpdateOrderStatus(
        order_id=order_id,
        status=body.status,
        tracking_number=body.tracking_number,
        notes=body.notes,
        changed_by=actor.user_id,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@order_router.put("/{order_id}/confirm-delivery", response_model=StatusResponse)
async def confirm_delivery(order_id: str, actor: Actor = Depends(current_actor)) -> StatusResponse:
    current_domain.process(ConfirmDelivery(order_id=order_id, customer_id=actor.user_id), asynchronous=False)
    return StatusResponse()


@order_router.put("/{order_id}/cancel", response_model=StatusResponse)
async def cancel_order(order_id: str, body: CancelOrderRequest, actor: Actor = Depends(current_actor)) -> StatusResponse:
    order = _load(Order, order_id, "Order")
    if not can_cancel(order, actor):
        raise HTTPException(status_code=403, detail="Only the customer or an administrator can cancel an order")
    command = CancelOrder(
        order_id=order_id,
        reason=body.reason,
        cancelled_by=actor.user_id,
        by_admin=actor.is_admin,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Escrows (maintenance)
# ---------------------------------------------------------------------------
@escrow_router.post("/release-due", response_model=ReleasedEscrowsResponse)
async def release_due_escrows(
    body: ReleaseDueEscrowsRequest | None = None, actor: Actor = Depends(_admin)
) -> ReleasedEscrowsResponse:
    as_of = body.as_of if body else None
    released = current_domain.process(ReleaseDueEscrows(as_of=as_of), asynchronous=False)
    return ReleasedEscrowsResponse(released=released or 0)


# ---------------------------------------------------------------------------
# Analytics
# ---------------------------------------------------------------------------
@analytics_router.get("/professional")
async def get_professional_analytics(
    period: str = DEFAULT_PERIOD,
    compare: bool = False,
    actor: Actor = Depends(_professional),
) -> dict:
    return professional_analytics(actor.user_id, period=period, compare=compare)


@analytics_router.get("/dashboard")
async def get_dashboard_stats(actor: Actor = Depends(_admin)) -> dict:
    return dashboard_stats()


# ---------------------------------------------------------------------------
# Reviews
# ---------------------------------------------------------------------------
@review_router.get("", response_model=ReviewListResponse)
async def get_reviews(
    target_id: str | None = None,
    target_type: str | None = None,
    rating: int | None = Query(None, ge=1, le=5),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
) -> ReviewListResponse:
    reviews, pagination = fetch_page(review_query(target_id, target_type, rating), page, limit)
    return ReviewListResponse(reviews=[_review_response(r) for r in reviews], pagination=pagination)


@review_router.post("", status_code=201, response_model=ReviewIdResponse)
async def submit_review(body: SubmitReviewRequest, actor: Actor = Depends(current_actor)) -> ReviewIdResponse:
    command = SubmitReview(
        reviewer_id=actor.user_id,
        target_id=body.target_id,
        target_type=body.target_type,
        rating=body.rating,
        order_id=body.order_id,
        title=body.title,
        comment=body.comment,
        images=json.dumps(body.images),
    )
    result = current_domain.process(command, asynchronous=False)
    return ReviewIdResponse(review_id=result)


@review_router.delete("/{review_id}", response_model=StatusResponse)
async def remove_review(
    review_id: str, body: RemoveReviewRequest | None = None, actor: Actor = Depends(_admin)
) -> StatusResponse:
    _load(Review, review_id, "Review")
    command = RemoveReview(review_id=review_id, removed_by=actor.user_id, reason=body.reason if body else None)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()
