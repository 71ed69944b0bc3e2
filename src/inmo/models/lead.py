"""
Modelo de Lead (consulta de un interesado sobre una propiedad).
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from inmo.config import LEAD_STATUSES


class Lead(BaseModel):
    """Pedido de contacto generado desde la ficha de una propiedad."""

    model_config = ConfigDict(extra="ignore")

    id: Optional[str] = Field(None, description="UUID generado por Supabase")
    property_id: str = Field(..., min_length=1, description="FK a la propiedad")
    user_id: Optional[str] = Field(None, description="Usuario logueado, si lo hay")
    agent_id: Optional[str] = None

    # Contacto
    name: str = Field(..., min_length=1)
    email: Optional[str] = None
    phone: str = Field(..., min_length=1)
    message: Optional[str] = None

    status: str = Field(default="new", description="new, contacted, qualified, converted o lost")
    source: str = Field(default="website", description="Canal de origen")
    created_at: Optional[datetime] = None

    @field_validator("name", "phone")
    @classmethod
    def _strip_required(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("campo requerido")
        return value

    @field_validator("status")
    @classmethod
    def _known_status(cls, value: str) -> str:
        if value not in LEAD_STATUSES:
            raise ValueError(f"Estado de lead inválido: {value}")
        return value

    def to_db_dict(self) -> dict:
        """Convierte a diccionario para inserción en Supabase."""
        return self.model_dump(
            mode="json",
            exclude={"id", "created_at"},
            exclude_none=True,
        )
