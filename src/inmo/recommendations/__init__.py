"""
Motor de recomendaciones.

Combina preferencias inferidas de la actividad del usuario con
un score de similitud entre propiedades.
"""

from inmo.recommendations.engine import RecommendationEngine
from inmo.recommendations.preferences import extract_preferences
from inmo.recommendations.protocols import ActivityReader, PropertyCatalog
from inmo.recommendations.ranking import SimilarProperty, rank_similar
from inmo.recommendations.similarity import calculate_similarity

__all__ = [
    "RecommendationEngine",
    "SimilarProperty",
    "extract_preferences",
    "calculate_similarity",
    "rank_similar",
    "ActivityReader",
    "PropertyCatalog",
]
