"""
Inferencia de preferencias a partir de la actividad del usuario.

Ciudad y tipo: los valores más frecuentes entre propiedades visitadas
y favoritas. Presupuesto y dormitorios: bandas alrededor del promedio.
Las búsquedas guardadas suman ciudades y tipos explícitos.
"""

import math
from collections import Counter
from typing import Optional

from inmo.models import PreferenceProfile, Property, UserActivity

MAX_PREFERRED_CITIES = 3
MAX_PREFERRED_TYPES = 2

BUDGET_LOWER_FACTOR = 0.7
BUDGET_UPPER_FACTOR = 1.3
BEDROOM_SPREAD = 1


def most_common(values: list[str], limit: int) -> list[str]:
    """
    Los `limit` valores más frecuentes.

    Counter.most_common es estable: ante empate gana el que
    apareció primero.
    """
    return [value for value, _ in Counter(values).most_common(limit)]


def round_half_up(value: float) -> int:
    """Redondeo aritmético (2.5 -> 3), no el de banquero de round()."""
    return math.floor(value + 0.5)


def _mean(values: list[float]) -> Optional[float]:
    return sum(values) / len(values) if values else None


def extract_preferences(activity: UserActivity) -> PreferenceProfile:
    """
    Construye el perfil implícito de un usuario.

    Args:
        activity: Visitas, favoritos y búsquedas guardadas recientes

    Returns:
        PreferenceProfile; vacío si no hay historial
    """
    properties: list[Property] = activity.viewed_properties + activity.favorited_properties
    profile = PreferenceProfile()

    if properties:
        cities = [p.city for p in properties if p.city]
        types = [p.property_type for p in properties if p.property_type]
        if cities:
            profile.preferred_cities = most_common(cities, MAX_PREFERRED_CITIES)
        if types:
            profile.preferred_types = most_common(types, MAX_PREFERRED_TYPES)

        avg_price = _mean([p.price for p in properties if p.price is not None])
        if avg_price is not None:
            profile.budget_min = math.floor(avg_price * BUDGET_LOWER_FACTOR)
            profile.budget_max = math.ceil(avg_price * BUDGET_UPPER_FACTOR)

        avg_bedrooms = _mean([p.bedrooms for p in properties if p.bedrooms is not None])
        if avg_bedrooms is not None:
            rounded = round_half_up(avg_bedrooms)
            profile.min_bedrooms = max(1, rounded - BEDROOM_SPREAD)
            profile.max_bedrooms = rounded + BEDROOM_SPREAD

    # Las búsquedas guardadas se agregan sin tope (ver DESIGN.md)
    for search in activity.saved_searches:
        criteria = search.search_criteria
        if criteria.city and criteria.city not in (profile.preferred_cities or []):
            profile.preferred_cities = [*(profile.preferred_cities or []), criteria.city]
        if criteria.property_type and criteria.property_type not in (profile.preferred_types or []):
            profile.preferred_types = [*(profile.preferred_types or []), criteria.property_type]

    return profile
