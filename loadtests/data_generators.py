"""Faker-based payloads for the load test journeys.

Field names follow the API's Pydantic request schemas; values stay inside
the limits the aggregates enforce.
"""

import random
import uuid

from faker import Faker

fake = Faker()

SIZES = ["XS", "S", "M", "L", "XL"]
COLORS = ["Indigo", "Ochre", "Terracotta", "Emerald", "Ivory", "Black"]
TAGS = ["handmade", "cotton", "linen", "ankara", "kitenge", "beaded", "leather"]
ZONES = ["Westlands", "Kilimani", "CBD", "Karen", "Lavington"]

# ---------- Identity ----------


def email() -> str:
    """A unique address; the identity domain rejects malformed ones."""
    return f"{fake.user_name()[:20]}.{uuid.uuid4().hex[:6]}@{fake.free_email_domain()}"


def user_data() -> dict:
    return {
        "email": email(),
        "first_name": fake.first_name()[:100],
        "last_name": fake.last_name()[:100],
    }


def address_data() -> dict:
    return {
        "address_type": "Shipping",
        "first_name": fake.first_name()[:100],
        "last_name": fake.last_name()[:100],
        "street": fake.street_address()[:255],
        "city": fake.city()[:100],
        "zip_code": fake.postcode()[:20],
        "country": "Kenya",
    }


# ---------- Stores and catalogue ----------


def store_data() -> dict:
    return {
        "business_name": f"{fake.last_name()} {random.choice(['Atelier', 'Couture', 'Tailors', 'Studio'])}",
        "specialization": random.choice(["Bridal", "Streetwear", "Accessories", "Menswear"]),
        "location": random.choice(["Nairobi", "Mombasa", "Kisumu", "Nakuru"]),
        "bio": fake.sentence(nb_words=12),
        "experience_years": random.randint(0, 25),
        "free_delivery_threshold": random.choice([None, 5000.0, 10000.0]),
    }


def zone_data(zone_name: str | None = None) -> dict:
    return {
        "zone_name": zone_name or random.choice(ZONES),
        "base_delivery_fee": float(random.choice([150, 200, 250, 350])),
        "free_delivery_above": random.choice([None, 3000.0, 6000.0]),
        "estimated_days": random.randint(1, 5),
    }


def product_data() -> dict:
    return {
        "name": f"{random.choice(COLORS)} {fake.word().capitalize()} {random.choice(['Dress', 'Shirt', 'Wrap', 'Bag'])}",
        "description": fake.paragraph(nb_sentences=2),
        "price": round(random.uniform(300, 8000), 2),
        "stock_quantity": random.randint(5, 50),
        "sizes": random.sample(SIZES, k=random.randint(1, 3)),
        "colors": random.sample(COLORS, k=random.randint(1, 2)),
        "tags": random.sample(TAGS, k=2),
        "gender": random.choice(["Men", "Women", "Unisex", "Kids"]),
    }


# ---------- Orders ----------


def order_lines(product_ids: list[str]) -> list[dict]:
    chosen = random.sample(product_ids, k=min(len(product_ids), random.randint(1, 3)))
    return [
        {"product_id": product_id, "quantity": random.randint(1, 2), "size": random.choice(SIZES)}
        for product_id in chosen
    ]
