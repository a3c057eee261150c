"""
Entités du catalogue vidéo.

Entités représentant les fichiers vidéo indexés et les statistiques de stockage
calculées pour un répertoire racine.
"""

from dataclasses import dataclass
from typing import Any, Optional


@dataclass
class VideoRecord:
    """
    Représente un fichier vidéo indexé dans le catalogue.

    Un VideoRecord est créé ou remplacé uniquement par une passe d'indexation.
    full_path est la clé unique : réindexer le même chemin remplace l'entrée.

    Attributs :
        id : Identifiant dérivé de (nom du dossier parent, nom du fichier)
        folder_name : Nom du répertoire contenant (pas le chemin complet)
        full_path : Chemin absolu du fichier
        file_name : Nom du fichier
        file_size : Taille en octets
        creation_date : Date de création (secondes depuis epoch)
        modified_date : Date de modification (secondes depuis epoch)
        duration : Durée en secondes
        width, height : Résolution en pixels
        fps : Images par seconde
        codec : Nom court du codec vidéo (ex: "h264")
        thumbnail_path : Chemin absolu de la miniature générée
        indexed_at : Date de la passe d'indexation (secondes depuis epoch)
        blob_url, is_preloaded : Champs de la couche présentation, stockés tels quels
    """

    id: str
    folder_name: str
    full_path: str
    file_name: str
    file_size: int = 0
    creation_date: int = 0
    modified_date: int = 0
    duration: Optional[float] = None
    width: Optional[int] = None
    height: Optional[int] = None
    fps: Optional[float] = None
    codec: Optional[str] = None
    thumbnail_path: Optional[str] = None
    indexed_at: int = 0
    blob_url: Optional[str] = None
    is_preloaded: bool = False


# Cles du document de cache, identiques a celles de l'application de bureau
_STATS_KEYS = {
    "directory_path": "directoryPath",
    "total_files": "totalFiles",
    "total_size": "totalSize",
    "video_files": "videoFiles",
    "video_size": "videoSize",
    "last_updated": "lastUpdated",
}


@dataclass
class StorageStats:
    """
    Statistiques agrégées d'un répertoire racine.

    last_updated est exprimé en millisecondes depuis epoch.
    """

    directory_path: str
    total_files: int = 0
    total_size: int = 0
    video_files: int = 0
    video_size: int = 0
    last_updated: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Serialise avec les cles camelCase du fichier de cache."""
        return {json_key: getattr(self, attr) for attr, json_key in _STATS_KEYS.items()}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "StorageStats":
        """
        Reconstruit depuis une entree du fichier de cache.

        Raises:
            KeyError, TypeError, ValueError: si l'entree est malformee
        """
        values = {attr: data[json_key] for attr, json_key in _STATS_KEYS.items()}
        directory_path = values.pop("directory_path")
        if not isinstance(directory_path, str):
            raise TypeError("directoryPath doit etre une chaine")
        return cls(
            directory_path=directory_path,
            **{attr: int(value) for attr, value in values.items()},
        )

