"""
Perfil de preferencias implícito.

Se calcula en cada request a partir de la actividad del usuario
y nunca se persiste.
"""

from typing import Optional

from pydantic import BaseModel, Field


class PreferenceProfile(BaseModel):
    """
    Preferencias inferidas de un usuario.

    Cada campo ausente significa "sin señal": el filtro de candidatos
    no aplica el predicado correspondiente.
    """

    preferred_cities: Optional[list[str]] = Field(
        None, description="Ciudades más frecuentes (hasta 3, más las de búsquedas guardadas)"
    )
    preferred_types: Optional[list[str]] = Field(
        None, description="Tipos de propiedad más frecuentes (hasta 2, más los de búsquedas)"
    )
    budget_min: Optional[int] = Field(None, description="70% del precio promedio")
    budget_max: Optional[int] = Field(None, description="130% del precio promedio")
    min_bedrooms: Optional[int] = Field(None, ge=1)
    max_bedrooms: Optional[int] = None

    @property
    def is_empty(self) -> bool:
        """True si no hay ninguna restricción que aplicar."""
        return not any(
            [
                self.preferred_cities,
                self.preferred_types,
                self.budget_min is not None,
                self.budget_max is not None,
                self.min_bedrooms is not None,
            ]
        )
