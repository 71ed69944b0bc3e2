"""
Scripts de línea de comandos.

Uso:
    python -m inmo.scripts.run_recommendations --user-id <uuid>
    python -m inmo.scripts.run_similar --property-id <uuid>
    python -m inmo.scripts.run_search --city Pune --type apartment
"""
