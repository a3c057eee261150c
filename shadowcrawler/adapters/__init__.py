"""
Couche adaptateurs.

Les adaptateurs implémentent les ports définis dans core/ports/ et fournissent
des implémentations concrètes pour les systèmes externes.

Sous-packages :
- cli/ : Interface ligne de commande (Typer + Rich)
- probing/ : Sondage ffprobe et miniatures ffmpeg

Chaque adaptateur dépend de core/ mais core/ ne dépend jamais des adaptateurs.
"""

from shadowcrawler.adapters.file_system import FileSystemAdapter
from shadowcrawler.adapters.probing.ffprobe_extractor import FFprobeExtractor

__all__ = [
    "FileSystemAdapter",
    "FFprobeExtractor",
]
