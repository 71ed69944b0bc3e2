"""
Ranking de propiedades similares a una de referencia.
"""

from dataclasses import dataclass

from inmo.models import Property
from inmo.recommendations.similarity import calculate_similarity


@dataclass
class SimilarProperty:
    """Propiedad candidata con su score respecto de la referencia."""

    property: Property
    similarity: int  # 0 a 100

    def to_dict(self) -> dict:
        """Serializa la propiedad agregando el campo `similarity`."""
        data = self.property.model_dump(mode="json")
        data["similarity"] = self.similarity
        return data


def _created_at_key(item: SimilarProperty) -> float:
    created_at = item.property.created_at
    return created_at.timestamp() if created_at else 0.0


def rank_similar(
    reference: Property,
    candidates: list[Property],
    limit: int = 6,
) -> list[SimilarProperty]:
    """
    Ordena candidatos por similitud con la referencia.

    Desempate: más nuevas primero; sin fecha, se respeta el orden
    de llegada. La referencia nunca forma parte del resultado.

    Args:
        reference: Propiedad de referencia
        candidates: Candidatas (normalmente de la misma ciudad)
        limit: Cantidad máxima a devolver

    Returns:
        Lista de SimilarProperty, score descendente
    """
    scored = [
        SimilarProperty(property=candidate, similarity=calculate_similarity(reference, candidate))
        for candidate in candidates
        if candidate.id != reference.id
    ]

    # Dos pasadas estables: primero la clave secundaria
    scored.sort(key=_created_at_key, reverse=True)
    scored.sort(key=lambda item: item.similarity, reverse=True)

    return scored[: max(0, limit)]
