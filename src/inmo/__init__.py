"""
inmo: recomendaciones y catálogo para un marketplace inmobiliario sobre Supabase.
"""

__version__ = "0.1.0"
