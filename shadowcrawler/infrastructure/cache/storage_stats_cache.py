"""
Cache persistant des statistiques de stockage.

Sauvegarde les statistiques par repertoire racine dans un document JSON pour
eviter de re-parcourir une arborescence a chaque affichage. Une entree de plus
de 24 heures est consideree perimee et n'est jamais servie.
"""

import json
import time
from pathlib import Path
from typing import Any, Callable, Optional

from loguru import logger

from shadowcrawler.core.entities.video import StorageStats
from shadowcrawler.core.ports.repositories import IStorageStatsCache

_CACHE_FILENAME = "storage_stats.json"


class JsonStorageStatsCache(IStorageStatsCache):
    """
    Cache des StorageStats dans <cache_dir>/storage_stats.json.

    Le document est un objet JSON indexe par chemin de repertoire ; chaque
    sauvegarde relit le document, remplace l'entree du repertoire et le reecrit.
    """

    def __init__(
        self,
        cache_dir: Path,
        max_age_hours: int = 24,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """
        Args:
            cache_dir: Repertoire du cache (cree a la premiere sauvegarde)
            max_age_hours: Age maximum d'une entree servie
            clock: Horloge en secondes (injectable pour les tests)
        """
        self._cache_file = cache_dir / _CACHE_FILENAME
        self._max_age_ms = max_age_hours * 60 * 60 * 1000
        self._clock = clock

    @property
    def cache_file(self) -> Path:
        """Chemin du document de cache."""
        return self._cache_file

    def _now_ms(self) -> int:
        return int(self._clock() * 1000)

    def _read_document(self) -> dict[str, Any]:
        """
        Lit le document de cache.

        Un fichier absent, illisible ou malforme donne un document vide.
        """
        if not self._cache_file.exists():
            return {}

        try:
            data = json.loads(self._cache_file.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError, UnicodeDecodeError) as e:
            logger.warning(f"Cache des statistiques illisible, ignore: {e}")
            return {}

        if not isinstance(data, dict):
            logger.warning("Cache des statistiques malforme (objet attendu), ignore")
            return {}
        return data

    def get(self, directory_path: str) -> Optional[StorageStats]:
        """
        Charge les statistiques d'un repertoire si elles sont recentes.

        Args:
            directory_path: Repertoire racine analyse

        Returns:
            StorageStats si l'entree existe, est valide et a moins de 24h, None sinon.
        """
        entry = self._read_document().get(str(directory_path))
        if entry is None:
            return None

        try:
            stats = StorageStats.from_dict(entry)
        except (KeyError, TypeError, ValueError) as e:
            logger.warning(f"Entree de cache malformee pour {directory_path}: {e}")
            return None

        # Verifier l'age de l'entree
        age_ms = self._now_ms() - stats.last_updated
        if age_ms >= self._max_age_ms:
            logger.info(
                f"Statistiques en cache perimees ({age_ms / 3_600_000:.0f}h) pour {directory_path}"
            )
            return None

        logger.debug(
            f"Statistiques en cache utilisees ({age_ms / 3_600_000:.0f}h) pour {directory_path}"
        )
        return stats

    def save(self, stats: StorageStats) -> None:
        """
        Sauvegarde les statistiques d'un repertoire (lecture-modification-ecriture).
        Une erreur d'ecriture est journalisee sans etre propagee.

        Args:
            stats: Statistiques a enregistrer, indexees par stats.directory_path
        """
        document = self._read_document()
        document[stats.directory_path] = stats.to_dict()

        try:
            self._cache_file.parent.mkdir(parents=True, exist_ok=True)
            self._cache_file.write_text(
                json.dumps(document, ensure_ascii=False, indent=2), encoding="utf-8"
            )
        except OSError as e:
            logger.warning(f"Ecriture du cache impossible ({self._cache_file}): {e}")
            return
        logger.debug(f"Statistiques de stockage en cache pour {stats.directory_path}")
