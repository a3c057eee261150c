"""
Objets valeur immutables representant des concepts du domaine sans identite.

Exports :
- VideoMetadata : Metadonnees techniques extraites par ffprobe
- FileStats : Taille et dates d'un fichier
- SortKey : Ordres de tri du catalogue
- Page : Resultat d'une requete paginee
"""

from shadowcrawler.core.value_objects.media_info import FileStats, VideoMetadata
from shadowcrawler.core.value_objects.catalog import (
    DEFAULT_PAGE_SIZE,
    Page,
    SortKey,
    page_offset,
)

__all__ = [
    "VideoMetadata",
    "FileStats",
    "SortKey",
    "Page",
    "DEFAULT_PAGE_SIZE",
    "page_offset",
]
