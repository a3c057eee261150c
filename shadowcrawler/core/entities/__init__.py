"""
Entités métier du catalogue.

Exports:
- VideoRecord: Fichier vidéo indexé avec ses métadonnées techniques
- StorageStats: Statistiques de stockage d'un répertoire racine
"""

from shadowcrawler.core.entities.video import StorageStats, VideoRecord

__all__ = [
    "VideoRecord",
    "StorageStats",
]
