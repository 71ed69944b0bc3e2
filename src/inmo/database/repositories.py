"""
Repositorios para operaciones CRUD en Supabase.

Cada repositorio maneja una tabla/entidad específica.
"""

import re
from typing import Optional

import structlog

from inmo.database.supabase_client import get_supabase_client, SupabaseClient
from inmo.models import (
    Favorite,
    Lead,
    PreferenceProfile,
    Property,
    PropertyFilters,
    PropertyPage,
    SavedSearch,
    Viewing,
)

logger = structlog.get_logger()

# Columnas embebidas en los listados (card con imagen principal)
LISTING_COLUMNS = "*, property_images(url, is_primary)"
EMBEDDED_PROPERTY = "*, property:properties(*, property_images(url, is_primary))"

# Caracteres con significado en la sintaxis de filtros de PostgREST
_POSTGREST_RESERVED = re.compile(r"[,()*%]")


class BaseRepository:
    """Clase base para repositorios."""

    def __init__(self, client: Optional[SupabaseClient] = None):
        self._client = client or get_supabase_client()

    @property
    def client(self) -> SupabaseClient:
        return self._client


class PropertyRepository(BaseRepository):
    """Repositorio del catálogo de propiedades."""

    TABLE = "properties"

    def get_by_id(self, property_id: str) -> Optional[Property]:
        """Obtiene una propiedad por su UUID (con imágenes)."""
        response = (
            self.client.table(self.TABLE)
            .select("*, property_images(url, caption, is_primary, display_order)")
            .eq("id", property_id)
            .limit(1)
            .execute()
        )
        return Property.model_validate(response.data[0]) if response.data else None

    def search(
        self,
        filters: Optional[PropertyFilters] = None,
        page: int = 1,
        limit: int = 12,
    ) -> PropertyPage:
        """
        Búsqueda paginada de propiedades activas.

        Args:
            filters: Filtros opcionales (ciudad, tipo, rango de precio, etc.)
            page: Página (desde 1)
            limit: Resultados por página

        Returns:
            PropertyPage con el total exacto de coincidencias
        """
        filters = filters or PropertyFilters()
        page = max(1, page)

        query = (
            self.client.table(self.TABLE)
            .select(LISTING_COLUMNS, count="exact")
            .eq("status", "active")
        )

        if filters.city:
            query = query.eq("city", filters.city)
        if filters.locality:
            query = query.eq("locality", filters.locality)
        if filters.property_type:
            query = query.eq("property_type", filters.property_type)
        if filters.listing_type:
            query = query.eq("listing_type", filters.listing_type)
        if filters.min_price is not None:
            query = query.gte("price", filters.min_price)
        if filters.max_price is not None:
            query = query.lte("price", filters.max_price)
        if filters.bedrooms is not None:
            query = query.eq("bedrooms", filters.bedrooms)
        if filters.bathrooms is not None:
            query = query.eq("bathrooms", filters.bathrooms)
        if filters.furnishing:
            query = query.eq("furnishing", filters.furnishing)
        if filters.min_area is not None:
            query = query.gte("carpet_area", filters.min_area)
        if filters.max_area is not None:
            query = query.lte("carpet_area", filters.max_area)

        return self._paginate(query, page, limit)

    def search_text(self, text: str, page: int = 1, limit: int = 12) -> PropertyPage:
        """
        Búsqueda libre sobre título, descripción, ciudad y localidad.

        Raises:
            ValueError: Si el texto está vacío
        """
        term = _POSTGREST_RESERVED.sub(" ", text or "").strip()
        if not term:
            raise ValueError("Se requiere un texto de búsqueda")

        pattern = f"%{term}%"
        query = (
            self.client.table(self.TABLE)
            .select(LISTING_COLUMNS, count="exact")
            .eq("status", "active")
            .or_(
                f"title.ilike.{pattern},description.ilike.{pattern},"
                f"city.ilike.{pattern},locality.ilike.{pattern}"
            )
        )
        return self._paginate(query, max(1, page), limit)

    def _paginate(self, query, page: int, limit: int) -> PropertyPage:
        start = (page - 1) * limit
        response = (
            query.order("created_at", desc=True)
            .range(start, start + limit - 1)
            .execute()
        )
        return PropertyPage(
            properties=[Property.model_validate(row) for row in response.data or []],
            total=response.count or 0,
            page=page,
            limit=limit,
        )

    def get_featured(self, limit: int = 8) -> list[Property]:
        """Obtiene las propiedades destacadas más recientes."""
        response = (
            self.client.table(self.TABLE)
            .select(LISTING_COLUMNS)
            .eq("status", "active")
            .eq("featured", True)
            .order("created_at", desc=True)
            .limit(limit)
            .execute()
        )
        return [Property.model_validate(row) for row in response.data or []]

    def find_candidates(
        self,
        profile: PreferenceProfile,
        exclude_ids: Optional[list[str]] = None,
        limit: int = 10,
    ) -> list[Property]:
        """
        Busca candidatos a recomendar según un perfil de preferencias.

        Cada predicado se aplica solo si el campo del perfil existe;
        un perfil vacío equivale a "las activas más nuevas".

        Args:
            profile: Preferencias inferidas del usuario
            exclude_ids: IDs ya vistos o favoritos por el usuario
            limit: Máximo de resultados

        Returns:
            Propiedades activas ordenadas por fecha de creación (desc)
        """
        query = self.client.table(self.TABLE).select(LISTING_COLUMNS).eq("status", "active")

        if profile.preferred_cities:
            query = query.in_("city", profile.preferred_cities)
        if profile.preferred_types:
            query = query.in_("property_type", profile.preferred_types)
        if profile.budget_min is not None:
            query = query.gte("price", profile.budget_min)
        if profile.budget_max is not None:
            query = query.lte("price", profile.budget_max)
        if profile.min_bedrooms is not None:
            query = query.gte("bedrooms", profile.min_bedrooms)

        # Un IN vacío es un error de sintaxis en PostgREST
        if exclude_ids:
            query = query.not_.in_("id", exclude_ids)

        response = query.order("created_at", desc=True).limit(limit).execute()
        return [Property.model_validate(row) for row in response.data or []]

    def find_in_city(
        self,
        city: str,
        exclude_id: Optional[str] = None,
        limit: int = 20,
    ) -> list[Property]:
        """Propiedades activas de una ciudad, excluyendo opcionalmente una."""
        query = (
            self.client.table(self.TABLE)
            .select(LISTING_COLUMNS)
            .eq("status", "active")
            .eq("city", city)
        )
        if exclude_id:
            query = query.neq("id", exclude_id)

        response = query.order("created_at", desc=True).limit(limit).execute()
        return [Property.model_validate(row) for row in response.data or []]

    def increment_views(self, property_id: str) -> int:
        """
        Incrementa el contador de vistas.

        Returns:
            El nuevo valor del contador (0 si la propiedad no existe)
        """
        response = (
            self.client.table(self.TABLE)
            .select("views")
            .eq("id", property_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return 0

        views = (response.data[0].get("views") or 0) + 1
        self.client.table(self.TABLE).update({"views": views}).eq("id", property_id).execute()
        return views


class ViewingRepository(BaseRepository):
    """Repositorio de visitas agendadas."""

    TABLE = "viewings"

    def schedule(self, viewing: Viewing) -> Viewing:
        """
        Agenda una visita.

        La visita queda asignada al agente de la propiedad salvo que
        ya traiga uno.

        Raises:
            ValueError: Si faltan la propiedad, el usuario o la fecha,
                o si la propiedad no existe
        """
        if not viewing.property_id or not viewing.user_id or not viewing.scheduled_at:
            raise ValueError("property_id, user_id y scheduled_at son requeridos")

        found = (
            self.client.table(PropertyRepository.TABLE)
            .select("id, agent_id")
            .eq("id", viewing.property_id)
            .limit(1)
            .execute()
        )
        if not found.data:
            raise ValueError(f"Propiedad no encontrada: {viewing.property_id}")

        update = {"status": "scheduled"}
        if not viewing.agent_id:
            update["agent_id"] = found.data[0].get("agent_id")
        data = viewing.model_copy(update=update).to_db_dict()
        response = self.client.table(self.TABLE).insert(data).execute()
        logger.info(
            "Visita agendada",
            property_id=viewing.property_id,
            user_id=viewing.user_id,
            scheduled_at=data.get("scheduled_at"),
        )
        return Viewing.model_validate(response.data[0]) if response.data else viewing

    def list_for_user(self, user_id: str, limit: int = 20) -> list[Viewing]:
        """Visitas del usuario (con la propiedad embebida), más recientes primero."""
        response = (
            self.client.table(self.TABLE)
            .select(EMBEDDED_PROPERTY)
            .eq("user_id", user_id)
            .order("created_at", desc=True)
            .limit(limit)
            .execute()
        )
        return [Viewing.model_validate(row) for row in response.data or []]


class FavoriteRepository(BaseRepository):
    """Repositorio de favoritos."""

    TABLE = "favorites"

    def add(self, user_id: str, property_id: str) -> dict:
        """
        Marca una propiedad como favorita y actualiza su contador.

        Raises:
            ValueError: Si la propiedad ya está en favoritos
        """
        existing = (
            self.client.table(self.TABLE)
            .select("id")
            .eq("user_id", user_id)
            .eq("property_id", property_id)
            .limit(1)
            .execute()
        )
        if existing.data:
            raise ValueError("La propiedad ya está en favoritos")

        response = (
            self.client.table(self.TABLE)
            .insert({"user_id": user_id, "property_id": property_id})
            .execute()
        )
        self.client.execute_rpc("increment_favorites", {"property_id": property_id})
        logger.info("Favorito agregado", user_id=user_id, property_id=property_id)
        return response.data[0] if response.data else {}

    def remove(self, user_id: str, property_id: str) -> bool:
        """Quita una propiedad de favoritos y actualiza su contador."""
        response = (
            self.client.table(self.TABLE)
            .delete()
            .eq("user_id", user_id)
            .eq("property_id", property_id)
            .execute()
        )
        if not response.data:
            return False

        self.client.execute_rpc("decrement_favorites", {"property_id": property_id})
        logger.info("Favorito eliminado", user_id=user_id, property_id=property_id)
        return True

    def list_for_user(self, user_id: str, limit: int = 20) -> list[Favorite]:
        """Favoritos del usuario (con la propiedad embebida), más recientes primero."""
        response = (
            self.client.table(self.TABLE)
            .select(EMBEDDED_PROPERTY)
            .eq("user_id", user_id)
            .order("created_at", desc=True)
            .limit(limit)
            .execute()
        )
        return [Favorite.model_validate(row) for row in response.data or []]


class SavedSearchRepository(BaseRepository):
    """Repositorio de búsquedas guardadas."""

    TABLE = "saved_searches"

    def create(self, saved_search: SavedSearch) -> SavedSearch:
        """
        Guarda una búsqueda.

        Raises:
            ValueError: Si la búsqueda no tiene nombre
        """
        if not saved_search.name.strip():
            raise ValueError("La búsqueda guardada requiere un nombre")

        response = self.client.table(self.TABLE).insert(saved_search.to_db_dict()).execute()
        logger.info(
            "Búsqueda guardada",
            user_id=saved_search.user_id,
            alert_enabled=saved_search.alert_enabled,
        )
        return SavedSearch.model_validate(response.data[0]) if response.data else saved_search

    def list_for_user(self, user_id: str, limit: int = 5) -> list[SavedSearch]:
        """Búsquedas guardadas del usuario, más recientes primero."""
        response = (
            self.client.table(self.TABLE)
            .select("*")
            .eq("user_id", user_id)
            .order("created_at", desc=True)
            .limit(limit)
            .execute()
        )
        return [SavedSearch.model_validate(row) for row in response.data or []]


class LeadRepository(BaseRepository):
    """Repositorio de leads (consultas de interesados)."""

    TABLE = "leads"

    def create(self, lead: Lead) -> Lead:
        """Registra un lead para el dueño/agente de la propiedad."""
        response = self.client.table(self.TABLE).insert(lead.to_db_dict()).execute()
        logger.info(
            "Lead creado",
            property_id=lead.property_id,
            source=lead.source,
        )
        return Lead.model_validate(response.data[0]) if response.data else lead

    def list_for_property(self, property_id: str, limit: int = 50) -> list[Lead]:
        """Leads recibidos por una propiedad, más recientes primero."""
        response = (
            self.client.table(self.TABLE)
            .select("*")
            .eq("property_id", property_id)
            .order("created_at", desc=True)
            .limit(limit)
            .execute()
        )
        return [Lead.model_validate(row) for row in response.data or []]


class ActivityRepository(BaseRepository):
    """
    Lectura de la actividad reciente de un usuario.

    Agrupa los repositorios de visitas, favoritos y búsquedas
    guardadas detrás de una sola interfaz de lectura.
    """

    def __init__(self, client: Optional[SupabaseClient] = None):
        super().__init__(client)
        self.viewings = ViewingRepository(self.client)
        self.favorites = FavoriteRepository(self.client)
        self.saved_searches = SavedSearchRepository(self.client)

    def recent_viewings(self, user_id: str, limit: int = 20) -> list[Viewing]:
        return self.viewings.list_for_user(user_id, limit)

    def recent_favorites(self, user_id: str, limit: int = 20) -> list[Favorite]:
        return self.favorites.list_for_user(user_id, limit)

    def recent_saved_searches(self, user_id: str, limit: int = 5) -> list[SavedSearch]:
        return self.saved_searches.list_for_user(user_id, limit)
