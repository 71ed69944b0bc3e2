"""
Modelos de datos del sistema.

- Catálogo: Property, PropertyImage, PropertyFilters, PropertyPage
- Actividad: Viewing, Favorite, SavedSearch, SearchCriteria
- Contacto: Lead
- Preferencias inferidas: PreferenceProfile
"""

from inmo.models.property import (
    Property,
    PropertyImage,
    PropertyFilters,
    PropertyPage,
)
from inmo.models.activity import (
    Favorite,
    SavedSearch,
    SearchCriteria,
    UserActivity,
    Viewing,
)
from inmo.models.lead import Lead
from inmo.models.preferences import PreferenceProfile

__all__ = [
    # Catálogo
    "Property",
    "PropertyImage",
    "PropertyFilters",
    "PropertyPage",
    # Actividad
    "Favorite",
    "SavedSearch",
    "SearchCriteria",
    "UserActivity",
    "Viewing",
    # Contacto
    "Lead",
    # Preferencias
    "PreferenceProfile",
]
