"""Vendor dashboard analytics.

All figures are aggregated in memory from the vendor's products and the
order lines they sold within the reporting period. Cancelled and refunded
orders do not count as sales.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta

from shared.clock import as_utc, utcnow
from shared.listing import everything, query

from marketplace.order.order import Order, OrderStatus
from marketplace.order.pricing import round_money
from marketplace.product.product import Product

PERIODS = {
    "7d": timedelta(days=7),
    "30d": timedelta(days=30),
    "90d": timedelta(days=90),
    "1y": timedelta(days=365),
}
DEFAULT_PERIOD = "30d"

_UNSOLD_STATES = {OrderStatus.CANCELLED.value, OrderStatus.REFUNDED.value}


@dataclass(frozen=True)
class SoldLine:
    product_id: str
    product_name: str
    revenue: float
    quantity: int
    ordered_at: datetime


def period_bounds(period: str, now: datetime) -> tuple[datetime, datetime]:
    """Start and end of the reporting window. Unknown periods fall back to 30 days."""
    length = PERIODS.get(period, PERIODS[DEFAULT_PERIOD])
    return now - length, now


def sold_lines(orders, professional_id, start: datetime, end: datetime) -> list[SoldLine]:
    """The vendor's order lines from orders placed in ``[start, end)``."""
    lines = []
    for order in orders:
        placed = as_utc(order.created_at)
        if order.status in _UNSOLD_STATES or placed is None or not (start <= placed < end):
            continue
        for item in order.items:
            if str(item.professional_id) != str(professional_id):
                continue
            lines.append(
                SoldLine(
                    product_id=str(item.product_id),
                    product_name=item.product_name,
                    revenue=item.unit_price * item.quantity,
                    quantity=item.quantity,
                    ordered_at=placed,
                )
            )
    return lines


def peak_hours(lines: list[SoldLine]) -> dict[str, int]:
    """Share of sales per part of the day (UTC), as rounded percentages."""
    buckets = {"morning": 0, "afternoon": 0, "evening": 0, "night": 0}
    for line in lines:
        hour = line.ordered_at.hour
        if 6 <= hour < 12:
            buckets["morning"] += 1
        elif 12 <= hour < 18:
            buckets["afternoon"] += 1
        elif 18 <= hour < 22:
            buckets["evening"] += 1
        else:
            buckets["night"] += 1

    total = len(lines)
    return {name: round(count / total * 100) if total else 0 for name, count in buckets.items()}


def monthly_revenue(lines: list[SoldLine]) -> dict[str, float]:
    """Revenue keyed by ``M/YYYY``."""
    months: dict[str, float] = {}
    for line in lines:
        key = f"{line.ordered_at.month}/{line.ordered_at.year}"
        months[key] = months.get(key, 0.0) + line.revenue
    return {key: round_money(value) for key, value in months.items()}


def top_products(lines: list[SoldLine], limit: int = 5) -> list[dict]:
    by_product: dict[str, dict] = {}
    for line in lines:
        entry = by_product.setdefault(
            line.product_id,
            {"product_id": line.product_id, "name": line.product_name, "revenue": 0.0, "orders": 0},
        )
        entry["revenue"] += line.revenue
        entry["orders"] += 1

    ranked = sorted(by_product.values(), key=lambda e: e["revenue"], reverse=True)[:limit]
    return [{**entry, "revenue": round_money(entry["revenue"])} for entry in ranked]


def most_viewed(products, limit: int = 5) -> list[dict]:
    viewed = sorted((p for p in products if (p.view_count or 0) > 0), key=lambda p: p.view_count, reverse=True)
    return [
        {
            "product_id": str(p.id),
            "name": p.name,
            "views": p.view_count,
            "conversion_rate": round(min((p.sold_count or 0) / p.view_count * 100, 100), 2),
        }
        for p in viewed[:limit]
    ]


def build_report(professional_id, products, orders, period=DEFAULT_PERIOD, compare=False, now=None) -> dict:
    """Assemble the analytics report for one vendor."""
    now = as_utc(now) or utcnow()
    if period not in PERIODS:
        period = DEFAULT_PERIOD
    start, end = period_bounds(period, now)
    lines = sold_lines(orders, professional_id, start, end)

    total_views = sum(p.view_count or 0 for p in products)
    total_sold = sum(p.sold_count or 0 for p in products)
    conversion_rate = total_sold / total_views * 100 if total_views else 0.0
    total_revenue = sum(line.revenue for line in lines)

    report = {
        "period": period,
        "date_range": {"start": start.isoformat(), "end": end.isoformat()},
        "overview": {
            "total_products": len(products),
            "total_views": total_views,
            "total_sales": total_sold,
            "total_revenue": round_money(total_revenue),
            "total_orders": len(lines),
            "conversion_rate": round(conversion_rate, 2),
            "avg_order_value": round_money(total_revenue / len(lines)) if lines else 0.0,
        },
        "top_products": top_products(lines),
        "most_viewed_products": most_viewed(products),
        "peak_hours": peak_hours(lines),
        "monthly_revenue": monthly_revenue(lines),
        "comparison": None,
    }

    if compare:
        previous_start = start - (end - start)
        previous = sold_lines(orders, professional_id, previous_start, start)
        change = (len(lines) - len(previous)) / len(previous) * 100 if previous else 0.0
        report["comparison"] = {
            "previous_period": {
                "orders": len(previous),
                "start": previous_start.isoformat(),
                "end": start.isoformat(),
            },
            "current_period": {"orders": len(lines), "start": start.isoformat(), "end": end.isoformat()},
            "change_percent": round(change, 2),
        }

    return report


def professional_analytics(professional_id, period=DEFAULT_PERIOD, compare=False, now=None) -> dict:
    """Load the vendor's active products and the orders inside the window(s), then build the report."""
    now = as_utc(now) or utcnow()
    start, end = period_bounds(period, now)
    earliest = start - (end - start) if compare else start

    products = everything(query(Product, professional_id=str(professional_id), is_active=True))
    orders = everything(query(Order, created_at__gte=earliest, **Order.vendor_criteria(professional_id)))
    return build_report(professional_id, products, orders, period=period, compare=compare, now=now)
