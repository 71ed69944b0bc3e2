"""
Módulo de base de datos.

Provee acceso a Supabase y operaciones CRUD.
"""

from inmo.database.supabase_client import get_supabase_client, SupabaseClient
from inmo.database.repositories import (
    ActivityRepository,
    FavoriteRepository,
    LeadRepository,
    PropertyRepository,
    SavedSearchRepository,
    ViewingRepository,
)

__all__ = [
    "get_supabase_client",
    "SupabaseClient",
    "ActivityRepository",
    "FavoriteRepository",
    "LeadRepository",
    "PropertyRepository",
    "SavedSearchRepository",
    "ViewingRepository",
]
