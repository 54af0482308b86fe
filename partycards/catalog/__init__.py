"""
Catalog Module - Card packs available to new games.

A catalog is a list of packs, each with prompt ("black") cards
and response ("white") cards. It is loaded once per process and
treated as immutable.
"""

from .loader import Catalog, Pack, load_catalog, DEFAULT_CATALOG_PATH

__all__ = [
    "Catalog",
    "Pack",
    "load_catalog",
    "DEFAULT_CATALOG_PATH",
]
