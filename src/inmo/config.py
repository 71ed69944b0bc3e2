"""
Configuración centralizada del sistema.
Carga variables de entorno y define settings globales.
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# config.py -> inmo/ -> src/ -> raíz del proyecto (donde está el .env)
_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """Configuración principal de la aplicación."""

    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Supabase
    supabase_url: str = Field(..., description="URL del proyecto Supabase")
    supabase_key: str = Field(..., description="Anon key de Supabase")
    supabase_service_key: Optional[str] = Field(
        None, description="Service role key para operaciones admin"
    )
    supabase_timeout_seconds: float = Field(
        10.0, gt=0, description="Timeout de cada request a PostgREST (segundos)"
    )

    # Recomendaciones
    recommendation_limit: int = Field(
        10, ge=1, description="Cantidad por defecto de recomendaciones por usuario"
    )
    similar_limit: int = Field(
        6, ge=1, description="Cantidad por defecto de propiedades similares"
    )
    history_limit: int = Field(
        20, ge=1, description="Máximo de visitas/favoritos leídos para inferir preferencias"
    )
    saved_search_limit: int = Field(
        5, ge=0, description="Máximo de búsquedas guardadas leídas por usuario"
    )
    similar_candidate_limit: int = Field(
        20, ge=1, description="Candidatos de la misma ciudad a puntuar"
    )
    recommendation_timeout_seconds: float = Field(
        10.0, gt=0, description="Tiempo máximo total de una recomendación"
    )

    # Logging
    log_level: str = Field("INFO", description="Nivel de logging")


@lru_cache
def get_settings() -> Settings:
    """Obtiene la configuración cacheada."""
    return Settings()


# Constantes del sistema
PROPERTY_TYPES = [
    "apartment",
    "villa",
    "independent_house",
    "plot",
    "commercial",
    "office",
    "shop",
    "warehouse",
    "farmhouse",
    "penthouse",
    "studio",
]

LISTING_TYPES = ["sale", "rent", "lease", "pg"]

FURNISHING_TYPES = ["unfurnished", "semi-furnished", "fully-furnished"]

VIEWING_STATUSES = ["scheduled", "completed", "cancelled"]

LEAD_STATUSES = ["new", "contacted", "qualified", "converted", "lost"]
