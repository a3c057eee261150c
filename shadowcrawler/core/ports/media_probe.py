"""
Interfaces ports pour l'extraction de métadonnées techniques.

Le domaine délègue l'inspection des fichiers vidéo et le rendu des miniatures
à une capacité externe (ffprobe / ffmpeg dans l'implémentation concrète).
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from shadowcrawler.core.value_objects.media_info import VideoMetadata


class IMediaProbe(ABC):
    """
    Interface pour l'extraction des metadonnees techniques d'un fichier video.

    Aucune methode ne leve d'exception pour un fichier illisible ou non video :
    l'echec se traduit par None.
    """

    @abstractmethod
    async def is_available(self) -> bool:
        """Verifie que l'outil de sondage peut etre execute."""
        ...

    @abstractmethod
    async def extract(self, file_path: Path) -> Optional[VideoMetadata]:
        """
        Extrait les metadonnees techniques et genere la miniature.

        Args:
            file_path: Chemin absolu du fichier video

        Retourne:
            VideoMetadata, ou None si aucun flux video exploitable
            (outil absent, echec d'execution, sortie malformee, fichier non video)
        """
        ...

    @abstractmethod
    async def generate_thumbnail(self, file_path: Path) -> Optional[str]:
        """
        Genere une miniature JPEG du fichier video.

        Retourne:
            Chemin de l'image generee, ou None en cas d'echec
        """
        ...

    @abstractmethod
    async def probe_creation_time(self, file_path: Path) -> Optional[int]:
        """Date de creation rapportee par le conteneur (secondes depuis epoch)."""
        ...

    @abstractmethod
    async def probe_container_size(self, file_path: Path) -> Optional[int]:
        """Taille rapportee par le conteneur en octets."""
        ...
