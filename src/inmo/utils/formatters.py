"""
Formateo de precios, superficies y etiquetas para mostrar propiedades.

Convenciones del mercado indio: lakh (1e5) y crore (1e7).
"""

import re
from datetime import datetime, timezone
from typing import Optional, Union

CRORE = 10_000_000
LAKH = 100_000
THOUSAND = 1_000

PROPERTY_TYPE_LABELS = {
    "apartment": "Apartment",
    "villa": "Villa",
    "independent_house": "Independent House",
    "plot": "Plot",
    "commercial": "Commercial",
    "office": "Office Space",
    "shop": "Shop",
    "warehouse": "Warehouse",
    "farmhouse": "Farmhouse",
    "penthouse": "Penthouse",
    "studio": "Studio Apartment",
}

LISTING_TYPE_LABELS = {
    "sale": "For Sale",
    "rent": "For Rent",
    "lease": "For Lease",
    "pg": "PG/Hostel",
}

# (unidad, segundos), de mayor a menor
_TIME_UNITS = (
    ("year", 31_536_000),
    ("month", 2_592_000),
    ("week", 604_800),
    ("day", 86_400),
    ("hour", 3_600),
    ("minute", 60),
)


def _group_indian(value: int) -> str:
    """Agrupa dígitos al estilo indio: 12,34,567."""
    sign = "-" if value < 0 else ""
    digits = str(abs(value))
    if len(digits) <= 3:
        return sign + digits
    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return sign + ",".join(groups + [tail])


def format_indian_price(price: float, include_symbol: bool = True) -> str:
    """
    Formatea un precio en Cr / L / K.

    >>> format_indian_price(25_000_000)
    '₹2.50 Cr'
    """
    symbol = "₹" if include_symbol else ""

    if price >= CRORE:
        return f"{symbol}{price / CRORE:.2f} Cr"
    if price >= LAKH:
        return f"{symbol}{price / LAKH:.2f} L"
    if price >= THOUSAND:
        return f"{symbol}{price / THOUSAND:.2f} K"
    return f"{symbol}{_group_indian(round(price))}"


def format_area(area: float) -> str:
    return f"{_group_indian(round(area))} sq.ft"


def calculate_price_per_sqft(price: float, area: float) -> int:
    """Precio por sq.ft redondeado; 0 si no hay superficie."""
    if not area:
        return 0
    return round(price / area)


def get_property_type_label(property_type: str) -> str:
    return PROPERTY_TYPE_LABELS.get(property_type, property_type)


def get_listing_type_label(listing_type: str) -> str:
    return LISTING_TYPE_LABELS.get(listing_type, listing_type)


def generate_property_slug(title: str, property_id: str) -> str:
    """Slug para URLs: título normalizado + primeros 8 caracteres del ID."""
    slug = re.sub(r"[^a-z0-9]+", "-", title.lower()).strip("-")
    return f"{slug}-{property_id[:8]}"


def format_phone_number(phone: str) -> str:
    """Formatea números de 10 dígitos como +91 XXXXX XXXXX."""
    cleaned = re.sub(r"\D", "", phone)
    if len(cleaned) == 10:
        return f"+91 {cleaned[:5]} {cleaned[5:]}"
    return phone


def parse_budget_range(budget: str) -> Optional[tuple[float, float]]:
    """
    Parsea un rango "min-max".

    Returns:
        (min, max) o None si el texto no es un rango válido
    """
    if not budget:
        return None
    parts = budget.split("-")
    if len(parts) != 2:
        return None
    try:
        return float(parts[0]), float(parts[1])
    except ValueError:
        return None


def time_ago(date: Union[str, datetime], now: Optional[datetime] = None) -> str:
    """Texto relativo: '3 days ago', '1 hour ago', 'Just now'."""
    if isinstance(date, str):
        date = datetime.fromisoformat(date.replace("Z", "+00:00"))
    if date.tzinfo is None:
        date = date.replace(tzinfo=timezone.utc)

    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    seconds = int((now - date).total_seconds())
    for unit, unit_seconds in _TIME_UNITS:
        interval = seconds // unit_seconds
        if interval >= 1:
            return f"{interval} {unit}{'s' if interval > 1 else ''} ago"
    return "Just now"
