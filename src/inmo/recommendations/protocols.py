"""
Interfaces que el motor de recomendaciones necesita de la capa de datos.

Los repositorios de Supabase las implementan; los tests usan
implementaciones en memoria.
"""

from typing import Optional, Protocol

from inmo.models import Favorite, PreferenceProfile, Property, SavedSearch, Viewing


class PropertyCatalog(Protocol):
    """Consultas de lectura sobre el catálogo de propiedades."""

    def get_by_id(self, property_id: str) -> Optional[Property]: ...

    def find_candidates(
        self,
        profile: PreferenceProfile,
        exclude_ids: Optional[list[str]] = None,
        limit: int = 10,
    ) -> list[Property]: ...

    def find_in_city(
        self,
        city: str,
        exclude_id: Optional[str] = None,
        limit: int = 20,
    ) -> list[Property]: ...


class ActivityReader(Protocol):
    """Lectura acotada de la actividad reciente de un usuario."""

    def recent_viewings(self, user_id: str, limit: int = 20) -> list[Viewing]: ...

    def recent_favorites(self, user_id: str, limit: int = 20) -> list[Favorite]: ...

    def recent_saved_searches(self, user_id: str, limit: int = 5) -> list[SavedSearch]: ...
