"""
Script para obtener recomendaciones personalizadas de un usuario.

Uso:
    python -m inmo.scripts.run_recommendations --user-id <uuid>
    python -m inmo.scripts.run_recommendations --user-id <uuid> --limit 5 --json
"""

import argparse
import asyncio
import json
import sys
from typing import Optional

import structlog

from inmo.models import Property
from inmo.recommendations import RecommendationEngine
from inmo.scripts.logging_setup import configure_logging
from inmo.utils import format_indian_price, get_property_type_label

logger = structlog.get_logger()


def format_property_line(position: int, prop: Property) -> str:
    """Una línea legible por propiedad."""
    price = format_indian_price(prop.price) if prop.price is not None else "-"
    kind = get_property_type_label(prop.property_type) if prop.property_type else "-"
    location = ", ".join(part for part in (prop.locality, prop.city) if part) or "-"
    if prop.bedrooms:
        kind = f"{prop.bedrooms} BHK {kind}"
    return f"{position:>2}. {prop.title or prop.id} | {kind} | {location} | {price}"


async def run_recommendations(user_id: str, limit: Optional[int] = None) -> list[Property]:
    """Ejecuta el motor de recomendaciones para un usuario."""
    engine = RecommendationEngine()
    return await engine.get_recommendations(user_id, limit=limit)


def main():
    """Entry point del script."""
    parser = argparse.ArgumentParser(
        description="Muestra recomendaciones personalizadas para un usuario"
    )
    parser.add_argument("--user-id", required=True, help="UUID del usuario")
    parser.add_argument("--limit", type=int, default=None, help="Máximo de resultados")
    parser.add_argument("--json", action="store_true", help="Salida en JSON")
    args = parser.parse_args()

    configure_logging()
    logger.info("Buscando recomendaciones", user_id=args.user_id)

    try:
        properties = asyncio.run(run_recommendations(args.user_id, args.limit))
    except KeyboardInterrupt:
        logger.info("Interrumpido por usuario")
        sys.exit(130)
    except Exception as e:
        logger.error("Error fatal obteniendo recomendaciones", error=str(e))
        sys.exit(1)

    if args.json:
        print(json.dumps([p.model_dump(mode="json") for p in properties], ensure_ascii=False, indent=2))
    elif not properties:
        print("Sin recomendaciones por ahora.")
    else:
        for position, prop in enumerate(properties, start=1):
            print(format_property_line(position, prop))

    sys.exit(0)


if __name__ == "__main__":
    main()
