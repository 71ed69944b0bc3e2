"""
Script para buscar en el catálogo de propiedades activas.

Uso:
    python -m inmo.scripts.run_search --city Pune --type apartment --min-price 5000000
    python -m inmo.scripts.run_search --q "sea view" --page 2
    python -m inmo.scripts.run_search --featured
"""

import argparse
import json
import sys

import structlog

from inmo.config import FURNISHING_TYPES, LISTING_TYPES, PROPERTY_TYPES
from inmo.database import PropertyRepository
from inmo.models import PropertyFilters
from inmo.scripts.logging_setup import configure_logging
from inmo.scripts.run_recommendations import format_property_line

logger = structlog.get_logger()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Busca propiedades activas")
    parser.add_argument("--q", default=None, help="Texto libre (título, descripción, ciudad, localidad)")
    parser.add_argument("--featured", action="store_true", help="Solo destacadas")
    parser.add_argument("--city", default=None)
    parser.add_argument("--locality", default=None)
    parser.add_argument("--type", dest="property_type", choices=PROPERTY_TYPES, default=None)
    parser.add_argument("--listing", dest="listing_type", choices=LISTING_TYPES, default=None)
    parser.add_argument("--min-price", type=float, default=None)
    parser.add_argument("--max-price", type=float, default=None)
    parser.add_argument("--bedrooms", type=int, default=None)
    parser.add_argument("--furnishing", choices=FURNISHING_TYPES, default=None)
    parser.add_argument("--min-area", type=float, default=None)
    parser.add_argument("--max-area", type=float, default=None)
    parser.add_argument("--page", type=int, default=1)
    parser.add_argument("--limit", type=int, default=12)
    parser.add_argument("--json", action="store_true", help="Salida en JSON")
    return parser


def main():
    """Entry point del script."""
    args = build_parser().parse_args()
    configure_logging()

    try:
        repo = PropertyRepository()

        if args.featured:
            properties = repo.get_featured(limit=args.limit)
            total, total_pages = len(properties), 1
        else:
            if args.q:
                page = repo.search_text(args.q, page=args.page, limit=args.limit)
            else:
                filters = PropertyFilters(
                    city=args.city,
                    locality=args.locality,
                    property_type=args.property_type,
                    listing_type=args.listing_type,
                    min_price=args.min_price,
                    max_price=args.max_price,
                    bedrooms=args.bedrooms,
                    furnishing=args.furnishing,
                    min_area=args.min_area,
                    max_area=args.max_area,
                )
                page = repo.search(filters, page=args.page, limit=args.limit)
            properties, total, total_pages = page.properties, page.total, page.total_pages

    except KeyboardInterrupt:
        logger.info("Búsqueda interrumpida por usuario")
        sys.exit(130)
    except Exception as e:
        logger.error("Error fatal en búsqueda", error=str(e))
        sys.exit(1)

    logger.info("Búsqueda completada", total=total, page=args.page, total_pages=total_pages)

    if args.json:
        print(json.dumps([p.model_dump(mode="json") for p in properties], ensure_ascii=False, indent=2))
    else:
        offset = (args.page - 1) * args.limit if not args.featured else 0
        for position, prop in enumerate(properties, start=offset + 1):
            print(format_property_line(position, prop))
        print(f"\nPágina {args.page}/{max(total_pages, 1)} - {total} resultados")

    sys.exit(0)


if __name__ == "__main__":
    main()
