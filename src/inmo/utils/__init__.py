"""
Utilidades de presentación.
"""

from inmo.utils.formatters import (
    calculate_price_per_sqft,
    format_area,
    format_indian_price,
    format_phone_number,
    generate_property_slug,
    get_listing_type_label,
    get_property_type_label,
    parse_budget_range,
    time_ago,
)

__all__ = [
    "calculate_price_per_sqft",
    "format_area",
    "format_indian_price",
    "format_phone_number",
    "generate_property_slug",
    "get_listing_type_label",
    "get_property_type_label",
    "parse_budget_range",
    "time_ago",
]
