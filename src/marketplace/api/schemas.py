"""Pydantic request/response schemas for the Marketplace API."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

# --- Request Schemas ---


class OpenStoreRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "business_name": "Amani Couture",
                    "specialization": "Bridal wear",
                    "location": "Westlands, Nairobi",
                    "bio": "Hand-finished gowns and kitenge tailoring.",
                    "experience_years": 8,
                    "free_delivery_threshold": 5000.0,
                }
            ]
        }
    }

    business_name: str = Field(..., max_length=200)
    specialization: str | None = Field(None, max_length=200)
    location: str | None = Field(None, max_length=200)
    bio: str | None = None
    experience_years: int | None = Field(None, ge=0)
    free_delivery_threshold: float | None = Field(None, ge=0)


class UpdateStoreRequest(BaseModel):
    business_name: str | None = Field(None, max_length=200)
    specialization: str | None = Field(None, max_length=200)
    location: str | None = Field(None, max_length=200)
    bio: str | None = None
    experience_years: int | None = Field(None, ge=0)
    free_delivery_threshold: float | None = Field(None, ge=0)


class AddDeliveryZoneRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "zone_name": "Nairobi CBD",
                    "base_delivery_fee": 200.0,
                    "free_delivery_above": 3000.0,
                    "estimated_days": 1,
                }
            ]
        }
    }

    zone_name: str = Field(..., max_length=100)
    base_delivery_fee: float = Field(..., ge=0)
    free_delivery_above: float | None = Field(None, ge=0)
    estimated_days: int | None = Field(None, ge=0)


class CreateProductRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Ankara Wrap Dress",
                    "description": "Midi wrap dress in 100% cotton Ankara print.",
                    "price": 4500.0,
                    "stock_quantity": 12,
                    "sizes": ["S", "M", "L"],
                    "colors": ["Orange", "Teal"],
                    "tags": ["ankara", "dress"],
                    "gender": "Women",
                    "material": "Cotton",
                }
            ]
        }
    }

    name: str = Field(..., max_length=255)
    description: str | None = None
    price: float = Field(..., ge=0)
    stock_quantity: int = Field(0, ge=0)
    category_id: str | None = None
    collection_id: str | None = None
    sizes: list[str] = []
    colors: list[str] = []
    tags: list[str] = []
    gender: str | None = Field(None, max_length=10)
    material: str | None = Field(None, max_length=100)


class UpdateProductRequest(BaseModel):
    name: str | None = Field(None, max_length=255)
    description: str | None = None
    price: float | None = Field(None, ge=0)
    category_id: str | None = None
    collection_id: str | None = None
    sizes: list[str] | None = None
    colors: list[str] | None = None
    tags: list[str] | None = None
    gender: str | None = Field(None, max_length=10)
    material: str | None = Field(None, max_length=100)
    is_active: bool | None = None


class RestockProductRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"quantity": 20}]}}

    quantity: int


class ShowcaseApprovalRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"approved": True}]}}

    approved: bool


class CreateCollectionRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [{"name": "Harmattan Edit", "season": "Winter", "is_featured": True, "display_order": 1}]
        }
    }

    name: str = Field(..., max_length=150)
    slug: str | None = Field(None, max_length=160)
    description: str | None = None
    image_url: str | None = Field(None, max_length=500)
    category_id: str | None = None
    season: str | None = Field(None, max_length=20)
    is_featured: bool = False
    display_order: int = 0


class UpdateCollectionRequest(BaseModel):
    name: str | None = Field(None, max_length=150)
    description: str | None = None
    image_url: str | None = Field(None, max_length=500)
    category_id: str | None = None
    season: str | None = Field(None, max_length=20)
    is_featured: bool | None = None
    display_order: int | None = None
    is_active: bool | None = None


class AddToCartRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"product_id": "p-1", "quantity": 2, "size": "M"}]}}

    product_id: str
    quantity: int = 1
    size: str | None = Field(None, max_length=20)
    color: str | None = Field(None, max_length=50)


class UpdateCartItemRequest(BaseModel):
    quantity: int


class AddToWishlistRequest(BaseModel):
    product_id: str


class CreateCouponRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "code": "KARIBU10",
                    "coupon_type": "Percentage",
                    "value": 10,
                    "max_discount": 1000,
                    "usage_limit": 500,
                    "valid_from": "2026-01-01T00:00:00Z",
                    "valid_until": "2026-12-31T23:59:59Z",
                }
            ]
        }
    }

    code: str = Field(..., max_length=50)
    description: str | None = None
    coupon_type: str = Field(..., max_length=20)
    value: float = Field(..., ge=0)
    min_order_amount: float | None = Field(None, ge=0)
    max_discount: float | None = Field(None, ge=0)
    usage_limit: int | None = Field(None, ge=1)
    valid_from: datetime
    valid_until: datetime
    applicable_categories: list[str] = []
    applicable_professionals: list[str] = []


class OrderLineRequest(BaseModel):
    product_id: str
    quantity: int = 1
    size: str | None = Field(None, max_length=20)
    color: str | None = Field(None, max_length=50)
    notes: str | None = None


class PlaceOrderRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "address_id": "addr-1",
                    "items": [{"product_id": "p-1", "quantity": 2, "size": "M"}],
                    "delivery_zone": "Nairobi CBD",
                    "coupon_code": "KARIBU10",
                }
            ]
        }
    }

    address_id: str
    items: list[OrderLineRequest] = Field(..., min_length=1)
    delivery_zone: str | None = Field(None, max_length=100)
    coupon_code: str | None = Field(None, max_length=50)


class UpdateOrderStatusRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"status": "Shipped", "tracking_number": "G4S-001234"}]}}

    status: str | None = Field(None, max_length=20)
    tracking_number: str | None = Field(None, max_length=100)
    notes: str | None = None


class CancelOrderRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"reason": "Ordered the wrong size"}]}}

    reason: str | None = Field(None, max_length=500)


class ReleaseDueEscrowsRequest(BaseModel):
    as_of: datetime | None = None


class CreateCategoryRequest(BaseModel):
    model_config = {
        "json_schema_extra": {"examples": [{"name": "Evening Wear", "parent_id": None, "display_order": 2}]}
    }

    name: str = Field(..., max_length=100)
    slug: str | None = Field(None, max_length=120)
    description: str | None = None
    image_url: str | None = Field(None, max_length=500)
    parent_id: str | None = None
    display_order: int = 0
    is_active: bool = True


class UpdateCategoryRequest(BaseModel):
    name: str | None = Field(None, max_length=100)
    description: str | None = None
    image_url: str | None = Field(None, max_length=500)
    parent_id: str | None = None
    make_top_level: bool = False
    display_order: int | None = None
    is_active: bool | None = None


class SubmitReviewRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "target_id": "pro-001",
                    "target_type": "Professional",
                    "order_id": "o-1",
                    "rating": 5,
                    "title": "Perfect fit",
                    "comment": "The tailoring was spot on and delivery was quick.",
                }
            ]
        }
    }

    target_id: str
    target_type: str = Field(..., max_length=20)
    rating: int
    order_id: str | None = None
    title: str | None = Field(None, max_length=200)
    comment: str | None = None
    images: list[str] = []


class RemoveReviewRequest(BaseModel):
    reason: str | None = Field(None, max_length=500)


# --- Response Schemas ---


class StoreIdResponse(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"store_id": "a1b2c3d4-e5f6-7890-abcd-ef1234567890"}]}}

    store_id: str


class ZoneIdResponse(BaseModel):
    zone_id: str


class ProductIdResponse(BaseModel):
    product_id: str


class CollectionIdResponse(BaseModel):
    collection_id: str


class CartItemIdResponse(BaseModel):
    item_id: str


class CouponIdResponse(BaseModel):
    coupon_id: str


class CategoryIdResponse(BaseModel):
    category_id: str


class OrderIdResponse(BaseModel):
    order_id: str


class ReviewIdResponse(BaseModel):
    review_id: str


class ReleasedEscrowsResponse(BaseModel):
    released: int


class StatusResponse(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"status": "ok"}]}}

    status: str = "ok"


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    pages: int


class DeliveryZoneResponse(BaseModel):
    zone_id: str
    zone_name: str
    base_delivery_fee: float
    free_delivery_above: float | None = None
    estimated_days: int | None = None


class StoreResponse(BaseModel):
    store_id: str
    professional_id: str
    business_name: str
    specialization: str | None = None
    location: str | None = None
    bio: str | None = None
    experience_years: int | None = None
    free_delivery_threshold: float | None = None
    is_verified: bool
    rating: float
    total_reviews: int = 0
    delivery_zones: list[DeliveryZoneResponse] = []


class StoreListResponse(BaseModel):
    stores: list[StoreResponse]
    pagination: Pagination


class ProductResponse(BaseModel):
    product_id: str
    professional_id: str
    name: str
    description: str | None = None
    price: float
    stock_quantity: int
    is_active: bool
    is_in_stock: bool
    category_id: str | None = None
    collection_id: str | None = None
    sizes: list[str] = []
    colors: list[str] = []
    tags: list[str] = []
    gender: str
    material: str | None = None
    view_count: int = 0
    wishlist_count: int = 0
    cart_count: int = 0
    sold_count: int = 0
    is_showcase_approved: bool = False
    approved_at: datetime | None = None
    created_at: datetime | None = None


class ProductListResponse(BaseModel):
    products: list[ProductResponse]
    pagination: Pagination


class CollectionResponse(BaseModel):
    collection_id: str
    name: str
    slug: str
    description: str | None = None
    image_url: str | None = None
    category_id: str | None = None
    season: str
    is_featured: bool
    display_order: int
    products: list[ProductResponse] = []
    product_count: int = 0


class CategoryRefResponse(BaseModel):
    category_id: str
    name: str
    slug: str
    product_count: int | None = None


class CollectionRefResponse(BaseModel):
    collection_id: str
    name: str
    slug: str


class CategoryResponse(BaseModel):
    category_id: str
    name: str
    slug: str
    description: str | None = None
    image_url: str | None = None
    parent_id: str | None = None
    display_order: int = 0
    is_active: bool
    parent: CategoryRefResponse | None = None
    children: list[CategoryRefResponse] = []
    collections: list[CollectionRefResponse] = []
    products: list[ProductResponse] = []
    product_count: int = 0


class CategoryPageResponse(BaseModel):
    category: CategoryResponse
    products: list[ProductResponse] = []
    pagination: Pagination | None = None


class ReviewResponse(BaseModel):
    review_id: str
    reviewer_id: str
    target_id: str
    target_type: str
    order_id: str | None = None
    rating: int
    title: str | None = None
    comment: str | None = None
    images: list[str] = []
    is_verified: bool = False
    created_at: datetime | None = None


class ReviewListResponse(BaseModel):
    reviews: list[ReviewResponse]
    pagination: Pagination


class CartLineResponse(BaseModel):
    item_id: str
    product_id: str
    product_name: str
    unit_price: float
    quantity: int
    size: str | None = None
    color: str | None = None
    line_total: float
    is_available: bool


class CartSummary(BaseModel):
    item_count: int
    subtotal: float
    estimated_total: float


class CartResponse(BaseModel):
    items: list[CartLineResponse]
    summary: CartSummary


class WishlistResponse(BaseModel):
    products: list[ProductResponse]


class CouponResponse(BaseModel):
    coupon_id: str
    code: str
    description: str | None = None
    coupon_type: str
    value: float
    min_order_amount: float | None = None
    max_discount: float | None = None
    usage_limit: int | None = None
    used_count: int
    valid_from: datetime
    valid_until: datetime
    is_active: bool


class CouponListResponse(BaseModel):
    coupons: list[CouponResponse]
    pagination: Pagination


class OrderItemResponse(BaseModel):
    item_id: str
    product_id: str
    professional_id: str
    product_name: str
    unit_price: float
    quantity: int
    line_total: float
    size: str | None = None
    color: str | None = None
    notes: str | None = None


class ShippingAddressResponse(BaseModel):
    address_id: str | None = None
    first_name: str
    last_name: str
    street: str
    city: str
    state: str | None = None
    zip_code: str | None = None
    country: str


class OrderPricingResponse(BaseModel):
    subtotal: float
    shipping_cost: float
    discount: float
    tax: float
    total_price: float


class OrderResponse(BaseModel):
    order_id: str
    customer_id: str
    status: str
    items: list[OrderItemResponse]
    shipping_address: ShippingAddressResponse | None = None
    pricing: OrderPricingResponse | None = None
    delivery_zone: str | None = None
    coupon_code: str | None = None
    tracking_number: str | None = None
    notes: str | None = None
    actual_delivery: datetime | None = None
    confirmation_deadline: datetime | None = None
    delivery_confirmed_at: datetime | None = None
    cancellation_reason: str | None = None
    created_at: datetime | None = None


class OrderListResponse(BaseModel):
    orders: list[OrderResponse]
    pagination: Pagination
