"""
Interfaces ports pour le système de fichiers.

Interfaces abstraites (ports) définissant les contrats des lectures fichiers
utilisées par l'indexation et l'analyse du stockage. Toutes les opérations sont
asynchrones : chaque appel est un point de suspension de la boucle d'événements.
"""

import os
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class DirectoryListing:
    """
    Contenu d'un répertoire, trié par nom.

    Attributs :
        path : Répertoire listé
        files : Noms des entrées non-répertoires
        directories : Noms des sous-répertoires (liens symboliques exclus)
        identity : (st_dev, st_ino) du répertoire, pour la détection de cycles
    """

    path: Path
    files: list[str] = field(default_factory=list)
    directories: list[str] = field(default_factory=list)
    identity: tuple[int, int] = (0, 0)


class IFileSystem(ABC):
    """
    Interface pour les lectures sur le système de fichiers.

    Les erreurs d'accès (permissions, chemin absent) sont levées sous forme
    d'OSError : c'est aux services de décider si elles sont fatales.
    """

    @abstractmethod
    async def list_directory(self, path: Path) -> DirectoryListing:
        """
        Liste un répertoire en séparant fichiers et sous-répertoires.

        Args :
            path : Répertoire à lister

        Retourne :
            DirectoryListing trié par nom

        Lève :
            OSError si le répertoire ne peut pas être lu
        """
        ...

    @abstractmethod
    async def stat(self, path: Path) -> os.stat_result:
        """
        Lit les statistiques natives d'un fichier.

        Lève :
            OSError si le fichier ne peut pas être lu
        """
        ...

    @abstractmethod
    async def get_size(self, path: Path) -> int:
        """
        Récupère la taille réelle du fichier en octets.

        Lève :
            OSError si la taille ne peut pas être déterminée
        """
        ...
