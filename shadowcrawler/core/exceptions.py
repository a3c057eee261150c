"""
Exceptions du domaine.

Seules les erreurs de niveau racine sont levees vers l'appelant : les echecs
sur un fichier ou un sous-repertoire sont absorbes et journalises par les services.
"""

from pathlib import Path
from typing import Optional


class ShadowCrawlerError(Exception):
    """Exception de base de l'application."""


class CrawlRootError(ShadowCrawlerError):
    """Le repertoire racine d'une indexation ne peut pas etre lu."""

    def __init__(self, path: Path, cause: Optional[BaseException] = None) -> None:
        self.path = path
        self.cause = cause
        message = f"Impossible de lire le repertoire racine: {path}"
        if cause is not None:
            message += f" ({cause})"
        super().__init__(message)


class StorageAnalysisError(ShadowCrawlerError):
    """Le repertoire racine d'une analyse de stockage ne peut pas etre lu."""

    def __init__(self, path: Path, cause: Optional[BaseException] = None) -> None:
        self.path = path
        self.cause = cause
        message = f"Analyse du stockage impossible: {path}"
        if cause is not None:
            message += f" ({cause})"
        super().__init__(message)
