"""
Modelo de Propiedad (listing).

Representa una fila de la tabla `properties` de Supabase,
con sus imágenes embebidas cuando la consulta las incluye.
"""

import math
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from inmo.config import FURNISHING_TYPES


class PropertyImage(BaseModel):
    """Imagen asociada a una propiedad."""

    model_config = ConfigDict(extra="ignore")

    url: str
    caption: Optional[str] = None
    is_primary: bool = False
    display_order: int = 0


class Property(BaseModel):
    """
    Propiedad publicada en el marketplace.

    Los campos numéricos son opcionales porque el catálogo admite
    publicaciones incompletas (ej: un plot no tiene dormitorios).
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    # Identificación
    id: str = Field(..., description="UUID generado por Supabase")
    title: str = Field(default="", description="Título del anuncio")
    description: Optional[str] = Field(None, description="Descripción completa")

    # Categoría
    property_type: Optional[str] = Field(None, description="apartment, villa, plot, ...")
    listing_type: Optional[str] = Field(None, description="sale, rent, lease o pg")
    status: str = Field(default="active", description="active, pending, sold, rented o inactive")

    # Precio
    price: Optional[float] = Field(None, description="Precio en INR")
    maintenance_cost: Optional[float] = None
    security_deposit: Optional[float] = None

    # Ubicación
    address: Optional[str] = None
    locality: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    pincode: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    # Características físicas
    bedrooms: Optional[int] = None
    bathrooms: Optional[int] = None
    carpet_area: Optional[float] = Field(None, description="Superficie útil en sq.ft")
    built_up_area: Optional[float] = Field(None, description="Superficie construida en sq.ft")
    furnishing: Optional[str] = None

    # Relaciones
    owner_id: Optional[str] = None
    agent_id: Optional[str] = None

    # Contadores y flags
    views: int = 0
    favorites_count: int = 0
    featured: bool = False
    verified: bool = False

    # Media
    images: list[PropertyImage] = Field(
        default_factory=list,
        alias="property_images",
        description="Imágenes embebidas por la consulta",
    )

    # Metadatos
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def primary_image(self) -> Optional[str]:
        """URL de la imagen principal, o la primera disponible."""
        for image in self.images:
            if image.is_primary:
                return image.url
        return self.images[0].url if self.images else None


class PropertyFilters(BaseModel):
    """Filtros de búsqueda del catálogo (todos opcionales)."""

    city: Optional[str] = None
    locality: Optional[str] = None
    property_type: Optional[str] = None
    listing_type: Optional[str] = None
    min_price: Optional[float] = Field(None, ge=0)
    max_price: Optional[float] = Field(None, ge=0)
    bedrooms: Optional[int] = Field(None, ge=0)
    bathrooms: Optional[int] = Field(None, ge=0)
    furnishing: Optional[str] = None
    min_area: Optional[float] = Field(None, ge=0)
    max_area: Optional[float] = Field(None, ge=0)

    @field_validator("furnishing")
    @classmethod
    def _known_furnishing(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and value not in FURNISHING_TYPES:
            raise ValueError(f"Amueblado inválido: {value}")
        return value


class PropertyPage(BaseModel):
    """Página de resultados de búsqueda."""

    properties: list[Property] = Field(default_factory=list)
    total: int = 0
    page: int = 1
    limit: int = 12

    @property
    def total_pages(self) -> int:
        if self.limit <= 0:
            return 0
        return math.ceil(self.total / self.limit)
