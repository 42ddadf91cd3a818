"""Platform-wide figures for the administrators' dashboard."""

from datetime import datetime

from shared.clock import as_utc, utcnow
from shared.listing import count, everything, query

from marketplace.order.order import Order, OrderStatus
from marketplace.order.pricing import round_money
from marketplace.product.product import Product
from marketplace.store.store import Store


def _month_start(moment: datetime, months_back: int = 0) -> datetime:
    index = moment.year * 12 + (moment.month - 1) - months_back
    return moment.replace(year=index // 12, month=index % 12 + 1, day=1, hour=0, minute=0, second=0, microsecond=0)


def summarize(orders, stores_count: int, products_count: int, now: datetime) -> dict:
    """Order totals plus month-over-month growth in order count."""
    now = as_utc(now)
    this_month = _month_start(now)
    last_month = _month_start(now, 1)
    next_month = _month_start(now, -1)

    current = previous = 0
    for order in orders:
        placed = as_utc(order.created_at)
        if placed is None:
            continue
        if this_month <= placed < next_month:
            current += 1
        elif last_month <= placed < this_month:
            previous += 1

    growth = (current - previous) / previous * 100 if previous else 0.0
    return {
        "total_orders": len(orders),
        "total_revenue": round_money(sum(o.pricing.total_price for o in orders if o.pricing)),
        "pending_orders": sum(1 for o in orders if o.status == OrderStatus.PENDING.value),
        "stores_count": stores_count,
        "products_count": products_count,
        "monthly_growth": round(growth, 2),
    }


def dashboard_stats(now=None) -> dict:
    """Counts come from the provider; revenue is summed over every order."""
    return summarize(
        everything(query(Order)),
        stores_count=count(query(Store)),
        products_count=count(query(Product, is_active=True)),
        now=now or utcnow(),
    )
