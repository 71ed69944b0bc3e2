"""
Motor de recomendaciones.

Implementa:
- Recomendaciones personalizadas: perfil implícito + filtro de candidatos
- Propiedades similares: score por pares contra una propiedad de referencia

Es una funcionalidad best-effort: ante cualquier error o timeout
devuelve una lista vacía en vez de propagar la excepción.
"""

import asyncio
from typing import Optional

import structlog

from inmo.config import Settings, get_settings
from inmo.models import Property, UserActivity
from inmo.recommendations.preferences import extract_preferences
from inmo.recommendations.protocols import ActivityReader, PropertyCatalog
from inmo.recommendations.ranking import SimilarProperty, rank_similar

logger = structlog.get_logger()


class RecommendationEngine:
    """
    Motor de recomendaciones sobre el catálogo de propiedades.

    Flujo de `get_recommendations`:
    1. Leer visitas, favoritos y búsquedas guardadas (en paralelo)
    2. Inferir el perfil de preferencias
    3. Consultar candidatos activos excluyendo lo ya visto
    """

    def __init__(
        self,
        catalog: Optional[PropertyCatalog] = None,
        activity: Optional[ActivityReader] = None,
        settings: Optional[Settings] = None,
    ):
        self.settings = settings or get_settings()

        if catalog is None or activity is None:
            from inmo.database import ActivityRepository, PropertyRepository

            catalog = catalog or PropertyRepository()
            activity = activity or ActivityRepository()

        self.catalog = catalog
        self.activity = activity

    async def get_recommendations(
        self,
        user_id: str,
        limit: Optional[int] = None,
        timeout: Optional[float] = None,
    ) -> list[Property]:
        """
        Recomienda propiedades nuevas para un usuario.

        Args:
            user_id: UUID del usuario
            limit: Máximo de resultados (default de settings)
            timeout: Tiempo máximo en segundos (default de settings)

        Returns:
            Propiedades activas, más nuevas primero; lista vacía ante error
        """
        limit = max(0, self.settings.recommendation_limit if limit is None else limit)
        timeout = self.settings.recommendation_timeout_seconds if timeout is None else timeout

        try:
            return await asyncio.wait_for(self._recommend(user_id, limit), timeout=timeout)
        except asyncio.TimeoutError:
            logger.warning("Timeout obteniendo recomendaciones", user_id=user_id, timeout=timeout)
            return []
        except Exception as e:
            logger.error("Error obteniendo recomendaciones", user_id=user_id, error=str(e))
            return []

    async def get_similar_properties(
        self,
        property_id: str,
        limit: Optional[int] = None,
        timeout: Optional[float] = None,
    ) -> list[SimilarProperty]:
        """
        Busca propiedades similares a una de referencia.

        Args:
            property_id: UUID de la propiedad de referencia
            limit: Máximo de resultados (default de settings)
            timeout: Tiempo máximo en segundos (default de settings)

        Returns:
            Lista de SimilarProperty ordenada por score; vacía si la
            referencia no existe o ante error
        """
        limit = max(0, self.settings.similar_limit if limit is None else limit)
        timeout = self.settings.recommendation_timeout_seconds if timeout is None else timeout

        try:
            return await asyncio.wait_for(self._similar(property_id, limit), timeout=timeout)
        except asyncio.TimeoutError:
            logger.warning(
                "Timeout obteniendo propiedades similares",
                property_id=property_id,
                timeout=timeout,
            )
            return []
        except Exception as e:
            logger.error(
                "Error obteniendo propiedades similares",
                property_id=property_id,
                error=str(e),
            )
            return []

    async def load_activity(self, user_id: str) -> UserActivity:
        """Lee la actividad reciente del usuario (las tres consultas en paralelo)."""
        history_limit = self.settings.history_limit

        viewings, favorites, saved_searches = await asyncio.gather(
            asyncio.to_thread(self.activity.recent_viewings, user_id, history_limit),
            asyncio.to_thread(self.activity.recent_favorites, user_id, history_limit),
            asyncio.to_thread(
                self.activity.recent_saved_searches, user_id, self.settings.saved_search_limit
            ),
        )

        return UserActivity(
            viewings=viewings,
            favorites=favorites,
            saved_searches=saved_searches,
        )

    async def _recommend(self, user_id: str, limit: int) -> list[Property]:
        activity = await self.load_activity(user_id)
        profile = extract_preferences(activity)
        seen_ids = activity.seen_property_ids

        candidates = await asyncio.to_thread(
            self.catalog.find_candidates, profile, seen_ids, limit
        )

        seen = set(seen_ids)
        recommendations = [p for p in candidates if p.id not in seen][:limit]

        logger.info(
            "Recomendaciones generadas",
            user_id=user_id,
            profile_empty=profile.is_empty,
            excluded=len(seen_ids),
            total=len(recommendations),
        )
        return recommendations

    async def _similar(self, property_id: str, limit: int) -> list[SimilarProperty]:
        reference = await asyncio.to_thread(self.catalog.get_by_id, property_id)
        if reference is None:
            logger.info("Propiedad de referencia no encontrada", property_id=property_id)
            return []

        if not reference.city:
            logger.info("Propiedad de referencia sin ciudad", property_id=property_id)
            return []

        candidates = await asyncio.to_thread(
            self.catalog.find_in_city,
            reference.city,
            property_id,
            self.settings.similar_candidate_limit,
        )

        ranked = rank_similar(reference, candidates, limit)

        logger.info(
            "Propiedades similares calculadas",
            property_id=property_id,
            candidates=len(candidates),
            returned=len(ranked),
        )
        return ranked
