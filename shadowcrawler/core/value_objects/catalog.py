"""
Objets valeur pour les requêtes sur le catalogue.

SortKey enumere les ordres de tri supportes par le store, Page porte le
resultat d'une requete paginee.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union

from shadowcrawler.core.entities.video import VideoRecord


class SortKey(Enum):
    """Ordres de tri du catalogue (valeurs identiques a la couche presentation)."""

    CREATION_DATE_DESC = "creation_date_desc"
    CREATION_DATE_ASC = "creation_date_asc"
    MODIFIED_DATE_DESC = "modified_date_desc"
    MODIFIED_DATE_ASC = "modified_date_asc"
    NAME_ASC = "name_asc"
    NAME_DESC = "name_desc"
    SIZE_DESC = "size_desc"
    SIZE_ASC = "size_asc"

    @classmethod
    def parse(cls, value: Optional[Union[str, "SortKey"]]) -> "SortKey":
        """
        Convertit une valeur libre en SortKey.

        Une valeur inconnue ou absente retombe sur CREATION_DATE_DESC,
        comme le tri par defaut de l'interface.
        """
        if isinstance(value, SortKey):
            return value
        try:
            return cls(value)
        except ValueError:
            return cls.CREATION_DATE_DESC


DEFAULT_PAGE_SIZE = 20


@dataclass(frozen=True)
class Page:
    """
    Une page de resultats du catalogue.

    Attributs :
        records : Enregistrements de la page
        total_count : Nombre total d'enregistrements correspondant a la requete
        has_more : True si une page strictement posterieure est non vide
        page : Numero de page (commence a 1)
        page_size : Taille de page demandee
    """

    records: list[VideoRecord] = field(default_factory=list)
    total_count: int = 0
    has_more: bool = False
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE


def page_offset(page: int, page_size: int) -> int:
    """
    Calcule l'offset SQL d'une page (pages numerotees a partir de 1).

    Raises:
        ValueError: si page ou page_size est inferieur a 1
    """
    if page < 1:
        raise ValueError(f"Numero de page invalide: {page}")
    if page_size < 1:
        raise ValueError(f"Taille de page invalide: {page_size}")
    return (page - 1) * page_size
