"""
Canal de progression et jeton d'annulation.

Les services d'indexation et d'analyse publient des evenements de progression
sur un ProgressChannel possede par le container. Plusieurs abonnes peuvent
ecouter simultanement (CLI, tests, couche presentation).
"""

from dataclasses import dataclass
from typing import Callable, Union

from loguru import logger


@dataclass(frozen=True)
class IndexingProgress:
    """
    Progression d'une indexation.

    Attributs:
        indexed_count: Nombre total d'enregistrements ecrits depuis le debut de la passe
        current_file: Dernier fichier ecrit (vide pour l'evenement final)
        is_complete: True uniquement pour l'evenement final
    """

    indexed_count: int
    current_file: str = ""
    is_complete: bool = False


@dataclass(frozen=True)
class StorageProgress:
    """
    Progression d'une analyse du stockage.

    Attributs:
        current_path: Dernier fichier traite (la racine pour l'evenement final)
        files_processed: Fichiers traites dans le repertoire courant
            (total de l'analyse pour l'evenement final)
        total_size: Taille cumulee depuis le debut de l'analyse
        is_complete: True uniquement pour l'evenement final
    """

    current_path: str
    files_processed: int
    total_size: int
    is_complete: bool = False


ProgressEvent = Union[IndexingProgress, StorageProgress]
ProgressSubscriber = Callable[[ProgressEvent], None]


class ProgressChannel:
    """
    Liste d'observateurs pour les evenements de progression.

    Une exception levee par un abonne est journalisee et n'interrompt ni
    les autres abonnes ni le service emetteur.
    """

    def __init__(self) -> None:
        self._subscribers: list[ProgressSubscriber] = []

    def subscribe(self, subscriber: ProgressSubscriber) -> Callable[[], None]:
        """
        Abonne un observateur.

        Returns:
            Fonction de desabonnement
        """
        self._subscribers.append(subscriber)
        return lambda: self.unsubscribe(subscriber)

    def unsubscribe(self, subscriber: ProgressSubscriber) -> None:
        """Retire un observateur (sans effet s'il n'est pas abonne)."""
        if subscriber in self._subscribers:
            self._subscribers.remove(subscriber)

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def emit(self, event: ProgressEvent) -> None:
        """Diffuse un evenement a tous les abonnes."""
        for subscriber in list(self._subscribers):
            try:
                subscriber(event)
            except Exception as e:
                logger.warning(f"Abonne de progression en echec: {e}")


class CancellationToken:
    """Jeton d'annulation cooperative, verifie avant chaque fichier et repertoire."""

    def __init__(self) -> None:
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def is_cancelled(self) -> bool:
        return self._cancelled
