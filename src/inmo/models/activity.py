"""
Actividad del usuario: visitas, favoritos y búsquedas guardadas.

Estos registros son la señal implícita de la que se infieren
las preferencias para recomendar propiedades.
"""

import math
from datetime import datetime
from typing import Optional

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationInfo,
    field_validator,
)

from inmo.config import VIEWING_STATUSES
from inmo.models.property import Property


class SearchCriteria(BaseModel):
    """
    Criterios de una búsqueda guardada.

    Conjunto cerrado de claves reconocidas; cualquier otra clave
    del JSONB se ignora. Acepta tanto snake_case como camelCase
    porque el frontend guardó ambas variantes.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    city: Optional[str] = None
    property_type: Optional[str] = Field(
        None, validation_alias=AliasChoices("property_type", "propertyType")
    )
    listing_type: Optional[str] = Field(
        None, validation_alias=AliasChoices("listing_type", "listingType")
    )
    min_price: Optional[float] = Field(
        None, validation_alias=AliasChoices("min_price", "minPrice")
    )
    max_price: Optional[float] = Field(
        None, validation_alias=AliasChoices("max_price", "maxPrice")
    )
    bedrooms: Optional[int] = None

    @field_validator("*", mode="before")
    @classmethod
    def _blank_to_none(cls, value):
        # Los formularios guardan "" cuando el filtro quedó vacío
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("min_price", "max_price", "bedrooms", mode="before")
    @classmethod
    def _lenient_number(cls, value, info: ValidationInfo):
        """
        Los criterios vienen de parámetros de URL: "4+" se lee como 4
        y un valor ilegible se descarta en lugar de invalidar la fila.
        """
        if value is None:
            return None
        if isinstance(value, str):
            value = value.strip().rstrip("+").replace(",", "")
        try:
            number = float(value)
        except (TypeError, ValueError):
            return None
        if not math.isfinite(number):
            return None
        return int(number) if info.field_name == "bedrooms" else number

    def to_db_dict(self) -> dict:
        """Convierte a diccionario para el JSONB `search_criteria`."""
        return self.model_dump(exclude_none=True)


class SavedSearch(BaseModel):
    """Búsqueda guardada por un usuario, opcionalmente con alertas."""

    model_config = ConfigDict(extra="ignore")

    id: Optional[str] = Field(None, description="UUID generado por Supabase")
    user_id: str = Field(..., description="FK al perfil")
    name: str = Field(default="", description="Nombre visible de la búsqueda")
    search_criteria: SearchCriteria = Field(default_factory=SearchCriteria)
    alert_enabled: bool = False
    created_at: Optional[datetime] = None

    @field_validator("search_criteria", mode="before")
    @classmethod
    def _null_criteria(cls, value):
        return {} if value is None else value

    def to_db_dict(self) -> dict:
        """Convierte a diccionario para inserción en Supabase."""
        return {
            "user_id": self.user_id,
            "name": self.name,
            "search_criteria": self.search_criteria.to_db_dict(),
            "alert_enabled": self.alert_enabled,
        }


class Favorite(BaseModel):
    """Propiedad marcada como favorita."""

    model_config = ConfigDict(extra="ignore")

    id: Optional[str] = None
    user_id: Optional[str] = None
    property_id: Optional[str] = None
    created_at: Optional[datetime] = None
    property: Optional[Property] = Field(None, description="Propiedad embebida")


class Viewing(BaseModel):
    """Visita presencial agendada a una propiedad."""

    model_config = ConfigDict(extra="ignore")

    id: Optional[str] = None
    property_id: Optional[str] = None
    user_id: Optional[str] = None
    agent_id: Optional[str] = None
    scheduled_at: Optional[datetime] = None
    status: str = Field(default="scheduled", description="scheduled, completed o cancelled")
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    property: Optional[Property] = Field(None, description="Propiedad embebida")

    @field_validator("status")
    @classmethod
    def _known_status(cls, value: str) -> str:
        if value not in VIEWING_STATUSES:
            raise ValueError(f"Estado de visita inválido: {value}")
        return value

    def to_db_dict(self) -> dict:
        """Convierte a diccionario para inserción en Supabase."""
        return self.model_dump(
            mode="json",
            exclude={"id", "created_at", "property"},
            exclude_none=True,
        )


class UserActivity(BaseModel):
    """
    Actividad reciente de un usuario, leída en una sola pasada.

    No se persiste: es la unión de sus visitas, favoritos y
    búsquedas guardadas al momento de la consulta.
    """

    viewings: list[Viewing] = Field(default_factory=list)
    favorites: list[Favorite] = Field(default_factory=list)
    saved_searches: list[SavedSearch] = Field(default_factory=list)

    @property
    def viewed_properties(self) -> list[Property]:
        return [v.property for v in self.viewings if v.property is not None]

    @property
    def favorited_properties(self) -> list[Property]:
        return [f.property for f in self.favorites if f.property is not None]

    @property
    def seen_property_ids(self) -> list[str]:
        """IDs ya vistos o favoritos, sin duplicados y en orden de aparición."""
        ids = [p.id for p in self.viewed_properties + self.favorited_properties]
        return list(dict.fromkeys(ids))
