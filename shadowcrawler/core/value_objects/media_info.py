"""
Objets valeur pour les informations techniques des fichiers vidéo.

Objets valeur immutables produits par l'extracteur ffprobe et par la lecture
des statistiques du système de fichiers.
Tous les objets valeur utilisent @dataclass(frozen=True) pour garantir l'immutabilité.
"""

from dataclasses import dataclass, replace
from typing import Optional


@dataclass(frozen=True)
class VideoMetadata:
    """
    Métadonnées techniques extraites d'un fichier vidéo.

    N'existe que si le fichier contient au moins un flux vidéo exploitable.

    Attributs :
        duration : Durée du conteneur en secondes
        width : Largeur du premier flux vidéo en pixels
        height : Hauteur du premier flux vidéo en pixels
        fps : Images par seconde (depuis r_frame_rate "num/den")
        codec : Nom court du codec (codec_name ffprobe)
        thumbnail_path : Chemin de la miniature, None si la génération a échoué
    """

    duration: Optional[float] = None
    width: Optional[int] = None
    height: Optional[int] = None
    fps: Optional[float] = None
    codec: Optional[str] = None
    thumbnail_path: Optional[str] = None

    def with_thumbnail(self, thumbnail_path: Optional[str]) -> "VideoMetadata":
        """Retourne une copie avec le chemin de miniature renseigné."""
        return replace(self, thumbnail_path=thumbnail_path)


@dataclass(frozen=True)
class FileStats:
    """
    Statistiques d'un fichier (taille et dates en secondes depuis epoch).

    Attributs :
        size : Taille en octets (0 si inconnue)
        ctime : Date de création
        mtime : Date de dernière modification
    """

    size: int
    ctime: int
    mtime: int
