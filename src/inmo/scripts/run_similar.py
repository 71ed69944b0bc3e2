"""
Script para listar propiedades similares a una de referencia.

Uso:
    python -m inmo.scripts.run_similar --property-id <uuid>
    python -m inmo.scripts.run_similar --property-id <uuid> --limit 3 --json
"""

import argparse
import asyncio
import json
import sys
from typing import Optional

import structlog

from inmo.recommendations import RecommendationEngine, SimilarProperty
from inmo.scripts.logging_setup import configure_logging
from inmo.scripts.run_recommendations import format_property_line

logger = structlog.get_logger()


async def run_similar(property_id: str, limit: Optional[int] = None) -> list[SimilarProperty]:
    engine = RecommendationEngine()
    return await engine.get_similar_properties(property_id, limit=limit)


def main():
    """Entry point del script."""
    parser = argparse.ArgumentParser(
        description="Muestra propiedades similares a una propiedad dada"
    )
    parser.add_argument("--property-id", required=True, help="UUID de la propiedad de referencia")
    parser.add_argument("--limit", type=int, default=None, help="Máximo de resultados")
    parser.add_argument("--json", action="store_true", help="Salida en JSON")
    args = parser.parse_args()

    configure_logging()
    logger.info("Buscando propiedades similares", property_id=args.property_id)

    try:
        similar = asyncio.run(run_similar(args.property_id, args.limit))
    except KeyboardInterrupt:
        logger.info("Interrumpido por usuario")
        sys.exit(130)
    except Exception as e:
        logger.error("Error fatal obteniendo similares", error=str(e))
        sys.exit(1)

    if args.json:
        print(json.dumps([item.to_dict() for item in similar], ensure_ascii=False, indent=2))
    elif not similar:
        print("No hay propiedades similares.")
    else:
        for position, item in enumerate(similar, start=1):
            print(f"{format_property_line(position, item.property)} | score {item.similarity}")

    sys.exit(0)


if __name__ == "__main__":
    main()
