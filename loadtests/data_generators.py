"""Faker-based data generators for Locust load test scenarios.

Each generator produces payloads that pass the storefront's validation rules
and match the exact field names expected by the API's Pydantic request
schemas.
"""

import random
import uuid

from faker import Faker

fake = Faker()

# ---------- Profiles ----------


def unique_user_id() -> str:
    """Generate unique user IDs like 'LT-USER-a1b2c3d4'."""
    return f"LT-USER-{uuid.uuid4().hex[:8]}"


def valid_email() -> str:
    local = fake.user_name()[:20]
    domain = fake.free_email_domain()
    return f"{local}.{uuid.uuid4().hex[:4]}@{domain}"


def profile_data(user_id: str | None = None) -> dict:
    """Generate SignUpRequest payload."""
    return {
        "user_id": user_id or unique_user_id(),
        "email": valid_email(),
        "full_name": fake.name()[:255],
    }


# ---------- Catalog ----------


def product_slug(title: str) -> str:
    """Lowercase, hyphen-separated, unique slug for a product title."""
    words = "".join(c if c.isalnum() else " " for c in title.lower()).split()
    return "-".join(words + [uuid.uuid4().hex[:6]])


def product_data() -> dict:
    """Generate CreateProductRequest payload."""
    title = f"{fake.color_name()} {fake.word().capitalize()}"[:255]
    price = round(random.uniform(5.0, 120.0), 2)
    on_sale = random.random() < 0.3
    return {
        "title": title,
        "slug": product_slug(title),
        "price": price,
        "compare_price": round(price * random.uniform(1.1, 1.5), 2) if on_sale else None,
        "description": fake.paragraph(nb_sentences=3),
        "images": [fake.image_url() for _ in range(random.randint(1, 3))],
        "stock_quantity": random.randint(0, 50),
        "sku": f"LT-{uuid.uuid4().hex[:8].upper()}",
    }


def category_data() -> dict:
    """Generate CreateCategoryRequest payload."""
    name = f"{fake.word().capitalize()} {uuid.uuid4().hex[:4]}"
    return {"name": name, "slug": product_slug(name), "description": fake.sentence()}


# ---------- Cart & Checkout ----------


def cart_quantity() -> int:
    return random.randint(1, 3)


def shipping_form_data() -> dict:
    """Generate ShippingForm payload (every field required)."""
    return {
        "full_name": fake.name()[:255],
        "email": valid_email(),
        "phone": fake.phone_number()[:50],
        "address": fake.street_address()[:255],
        "city": fake.city()[:100],
        "state": fake.state()[:100],
        "zip_code": fake.zipcode()[:20],
        "country": "US",
    }
