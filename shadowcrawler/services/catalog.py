"""
Service de consultation du catalogue.

Facade de lecture consommee par la couche presentation (CLI, interface) :
listes triees et paginees, dossiers, recherche, et mise a jour des champs
de presentation (blob_url, is_preloaded).
"""

from dataclasses import asdict
from typing import Any, Optional

from loguru import logger

from shadowcrawler.core.entities.video import VideoRecord
from shadowcrawler.core.ports.repositories import IVideoRepository, SortKeyLike
from shadowcrawler.core.value_objects.catalog import DEFAULT_PAGE_SIZE, Page, SortKey


def to_presentation(record: VideoRecord) -> dict[str, Any]:
    """
    Convertit un enregistrement au format attendu par l'interface.

    Les dates passent des secondes aux millisecondes ; les champs de
    presentation reprennent leurs noms camelCase.
    """
    data = asdict(record)
    data["creation_date"] = record.creation_date * 1000
    data["modified_date"] = record.modified_date * 1000
    data["blobUrl"] = data.pop("blob_url")
    data["isPreloaded"] = data.pop("is_preloaded")
    return data


class CatalogService:
    """Requetes de lecture sur le catalogue video."""

    def __init__(self, repository: IVideoRepository) -> None:
        self._repository = repository

    def list_videos(self, sort_key: SortKeyLike = SortKey.CREATION_DATE_DESC) -> list[VideoRecord]:
        return self._repository.list_sorted(sort_key)

    def list_page(
        self,
        sort_key: SortKeyLike = SortKey.CREATION_DATE_DESC,
        page: int = 1,
        page_size: int = DEFAULT_PAGE_SIZE,
        folder_name: Optional[str] = None,
    ) -> Page:
        """
        Retourne une page du catalogue, eventuellement restreinte a un dossier.

        Raises:
            ValueError: si page ou page_size < 1
        """
        if folder_name:
            return self._repository.list_by_folder_paginated(folder_name, sort_key, page, page_size)
        return self._repository.list_paginated(sort_key, page, page_size)

    def videos_in_folder(self, folder_name: str) -> list[VideoRecord]:
        return self._repository.list_by_folder(folder_name)

    def folders(self) -> list[str]:
        return self._repository.distinct_folders()

    def search(self, query: str) -> list[VideoRecord]:
        return self._repository.search(query)

    def get_video(self, record_id: str) -> Optional[VideoRecord]:
        return self._repository.get_by_id(record_id)

    def count(self) -> int:
        return self._repository.count()

    def mark_preloaded(self, record_id: str, blob_url: Optional[str] = None) -> bool:
        """Marque un enregistrement comme precharge par l'interface.

        Sans blob_url, l'URL deja enregistree est conservee.
        """
        changes: dict[str, Any] = {"is_preloaded": True}
        if blob_url is not None:
            changes["blob_url"] = blob_url
        return self._repository.update(record_id, **changes)

    def delete_video(self, record_id: str) -> bool:
        return self._repository.delete(record_id)

    def clear_index(self) -> int:
        """Vide le catalogue. Retourne le nombre d'enregistrements supprimes."""
        removed = self._repository.count()
        self._repository.clear_all()
        logger.info(f"Catalogue vide: {removed} enregistrement(s) supprime(s)")
        return removed
