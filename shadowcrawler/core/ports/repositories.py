"""
Interfaces ports pour les repositories.

Interfaces abstraites (ports) définissant les contrats pour la persistance du
catalogue et du cache des statistiques de stockage. Les implémentations
(adaptateurs) fournissent les mécanismes concrets (SQLite via SQLModel,
document JSON, mémoire pour les tests).
"""

from abc import ABC, abstractmethod
from typing import Any, Optional, Union

from shadowcrawler.core.entities.video import StorageStats, VideoRecord
from shadowcrawler.core.value_objects.catalog import DEFAULT_PAGE_SIZE, Page, SortKey

SortKeyLike = Union[SortKey, str]


class IVideoRepository(ABC):
    """
    Interface de stockage du catalogue vidéo.

    Toute lecture reflète les écritures terminées avant son début.
    """

    @abstractmethod
    def upsert(self, record: VideoRecord) -> VideoRecord:
        """Insère ou remplace entièrement l'enregistrement (par id ou full_path)."""
        ...

    @abstractmethod
    def get_by_path(self, full_path: str) -> Optional[VideoRecord]:
        """Récupère un enregistrement par son chemin absolu."""
        ...

    @abstractmethod
    def get_by_id(self, record_id: str) -> Optional[VideoRecord]:
        """Récupère un enregistrement par son identifiant."""
        ...

    @abstractmethod
    def list_sorted(self, sort_key: SortKeyLike = SortKey.CREATION_DATE_DESC) -> list[VideoRecord]:
        """Liste tous les enregistrements dans l'ordre demandé."""
        ...

    @abstractmethod
    def list_paginated(
        self,
        sort_key: SortKeyLike = SortKey.CREATION_DATE_DESC,
        page: int = 1,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> Page:
        """Retourne une page (numérotée à partir de 1) du catalogue trié."""
        ...

    @abstractmethod
    def list_by_folder(self, folder_name: str) -> list[VideoRecord]:
        """Liste les enregistrements d'un dossier (égalité exacte du nom)."""
        ...

    @abstractmethod
    def list_by_folder_paginated(
        self,
        folder_name: str,
        sort_key: SortKeyLike = SortKey.CREATION_DATE_DESC,
        page: int = 1,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> Page:
        """Retourne une page des enregistrements d'un dossier."""
        ...

    @abstractmethod
    def distinct_folders(self) -> list[str]:
        """Liste les noms de dossiers distincts, par ordre croissant."""
        ...

    @abstractmethod
    def search(self, query: str) -> list[VideoRecord]:
        """Recherche insensible à la casse sur nom de fichier, dossier et codec."""
        ...

    @abstractmethod
    def update(self, record_id: str, **fields: Any) -> bool:
        """Met à jour partiellement un enregistrement. Retourne True si trouvé."""
        ...

    @abstractmethod
    def delete(self, record_id: str) -> bool:
        """Supprime un enregistrement par ID. Retourne True si supprimé."""
        ...

    @abstractmethod
    def count(self) -> int:
        """Nombre total d'enregistrements."""
        ...

    @abstractmethod
    def clear_all(self) -> None:
        """Supprime tous les enregistrements."""
        ...


class IStorageStatsCache(ABC):
    """
    Interface du cache des statistiques de stockage.

    Le cache est indexé par chemin de répertoire racine.
    """

    @abstractmethod
    def get(self, directory_path: str) -> Optional[StorageStats]:
        """Retourne les statistiques fraîches, ou None si absentes, périmées ou malformées."""
        ...

    @abstractmethod
    def save(self, stats: StorageStats) -> None:
        """Enregistre (lecture-modification-écriture) les statistiques d'un répertoire."""
        ...
