"""
Score de similitud entre dos propiedades.

Suma de comparaciones independientes con pesos fijos; el máximo
es 100. La proximidad de precio y superficie usa la propiedad de
referencia como denominador, así que el score no es simétrico.
"""

from typing import Optional

from inmo.models import Property

CITY_POINTS = 30
LOCALITY_POINTS = 20
TYPE_POINTS = 15
BEDROOM_POINTS = 10

# (umbral de diferencia relativa, puntos), de más estricto a más laxo
PRICE_TIERS = ((0.2, 15), (0.4, 10))
AREA_TIERS = ((0.2, 10), (0.4, 5))


def relative_difference(reference: Optional[float], other: Optional[float]) -> Optional[float]:
    """
    |reference - other| / reference.

    None si falta algún valor o si la referencia no es positiva.
    """
    if reference is None or other is None or reference <= 0:
        return None
    return abs(reference - other) / reference


def _tier_points(diff: Optional[float], tiers: tuple[tuple[float, int], ...]) -> int:
    if diff is None:
        return 0
    for threshold, points in tiers:
        if diff < threshold:
            return points
    return 0


def price_points(reference: Property, candidate: Property) -> int:
    return _tier_points(relative_difference(reference.price, candidate.price), PRICE_TIERS)


def area_points(reference: Property, candidate: Property) -> int:
    # Superficie 0 cuenta como ausente
    if not reference.carpet_area or not candidate.carpet_area:
        return 0
    return _tier_points(
        relative_difference(reference.carpet_area, candidate.carpet_area), AREA_TIERS
    )


def calculate_similarity(reference: Property, candidate: Property) -> int:
    """
    Calcula la compatibilidad de `candidate` respecto de `reference`.

    | Comparación  | Puntos                         |
    |--------------|--------------------------------|
    | Ciudad       | 30                             |
    | Localidad    | 20                             |
    | Tipo         | 15                             |
    | Precio       | 15 (<20%), 10 (<40%), 0        |
    | Dormitorios  | 10                             |
    | Superficie   | 10 (<20%), 5 (<40%), 0         |

    Returns:
        Entero entre 0 y 100
    """
    score = 0

    if reference.city == candidate.city:
        score += CITY_POINTS
    if reference.locality == candidate.locality:
        score += LOCALITY_POINTS
    if reference.property_type == candidate.property_type:
        score += TYPE_POINTS

    score += price_points(reference, candidate)

    if reference.bedrooms == candidate.bedrooms:
        score += BEDROOM_POINTS

    score += area_points(reference, candidate)

    return score
