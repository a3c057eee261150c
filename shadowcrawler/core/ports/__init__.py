"""
Ports (interfaces abstraites) définissant les contrats pour les adaptateurs.

Les ports sont les frontières de l'architecture hexagonale. Ils définissent
ce dont le domaine a besoin du monde extérieur sans spécifier
comment ces besoins sont satisfaits.

Ports repository : Contrats de persistance
- IVideoRepository : Catalogue des fichiers vidéo indexés
- IStorageStatsCache : Cache des statistiques de stockage

Ports outils externes :
- IMediaProbe : Extraction des métadonnées et des miniatures

Ports système de fichiers :
- IFileSystem : Lectures asynchrones sur les fichiers
- DirectoryListing : Contenu d'un répertoire
"""

from shadowcrawler.core.ports.repositories import (
    IStorageStatsCache,
    IVideoRepository,
)
from shadowcrawler.core.ports.media_probe import IMediaProbe
from shadowcrawler.core.ports.file_system import DirectoryListing, IFileSystem

__all__ = [
    # Repositories
    "IVideoRepository",
    "IStorageStatsCache",
    # Outils externes
    "IMediaProbe",
    # Système de fichiers
    "IFileSystem",
    "DirectoryListing",
]
