"""
Service d'analyse de l'occupation disque.

Parcourt recursivement un repertoire racine et totalise le nombre et la taille
des fichiers, en distinguant les fichiers video. Le resultat est mis en cache
pour 24 heures.
"""

import time
from pathlib import Path
from typing import Optional

from loguru import logger

from shadowcrawler.adapters.file_system import is_skipped_file, is_video_file
from shadowcrawler.core.entities.video import StorageStats
from shadowcrawler.core.exceptions import StorageAnalysisError
from shadowcrawler.core.ports.file_system import DirectoryListing, IFileSystem
from shadowcrawler.core.ports.media_probe import IMediaProbe
from shadowcrawler.core.ports.repositories import IStorageStatsCache
from shadowcrawler.services.progress import ProgressChannel, StorageProgress
from shadowcrawler.utils.formatting import format_bytes


class StorageAnalyzerService:
    """
    Service calculant les StorageStats d'un repertoire racine.

    La taille d'un fichier est celle annoncee par le conteneur (ffprobe) quand
    elle est positive, sinon la taille reelle lue sur le disque, sinon 0.
    """

    def __init__(
        self,
        extractor: IMediaProbe,
        file_system: IFileSystem,
        cache: IStorageStatsCache,
        progress: ProgressChannel,
        progress_interval: int = 100,
    ) -> None:
        """
        Args:
            extractor: Sonde utilisee pour la taille annoncee par le conteneur
            file_system: Lectures du systeme de fichiers
            cache: Cache des statistiques
            progress: Canal de progression
            progress_interval: Emission d'un evenement tous les N fichiers d'un repertoire
        """
        self._extractor = extractor
        self._file_system = file_system
        self._cache = cache
        self._progress = progress
        self._progress_interval = progress_interval

    async def analyze_storage(self, root: Path) -> StorageStats:
        """
        Analyse l'occupation disque et met le resultat en cache.

        Raises:
            StorageAnalysisError: si le repertoire racine ne peut pas etre lu
        """
        logger.info(f"Analyse du stockage: {root}")
        stats = StorageStats(directory_path=str(root), last_updated=int(time.time() * 1000))

        try:
            listing = await self._file_system.list_directory(root)
        except OSError as e:
            logger.error(f"Repertoire racine illisible: {root}: {e}")
            raise StorageAnalysisError(root, e) from e

        await self._analyze_listing(listing, stats, {listing.identity})

        self._cache.save(stats)
        logger.info(
            f"Analyse terminee: {stats.total_files} fichier(s) ({format_bytes(stats.total_size)}), "
            f"{stats.video_files} video(s) ({format_bytes(stats.video_size)})"
        )
        self._progress.emit(
            StorageProgress(
                current_path=str(root),
                files_processed=stats.total_files,
                total_size=stats.total_size,
                is_complete=True,
            )
        )
        return stats

    def get_cached_stats(self, root: Path) -> Optional[StorageStats]:
        """Statistiques en cache de moins de 24 heures, ou None."""
        return self._cache.get(str(root))

    async def _analyze_listing(
        self,
        listing: DirectoryListing,
        stats: StorageStats,
        visited: set[tuple[int, int]],
    ) -> None:
        files_processed = 0
        for name in listing.files:
            if is_skipped_file(name):
                continue

            file_path = listing.path / name
            size = await self._file_size(file_path)
            stats.total_files += 1
            stats.total_size += size
            if is_video_file(name):
                stats.video_files += 1
                stats.video_size += size

            files_processed += 1
            if files_processed % self._progress_interval == 0:
                self._progress.emit(
                    StorageProgress(
                        current_path=str(file_path),
                        files_processed=files_processed,
                        total_size=stats.total_size,
                    )
                )

        for name in listing.directories:
            directory = listing.path / name
            try:
                sub_listing = await self._file_system.list_directory(directory)
            except OSError as e:
                logger.warning(f"Sous-repertoire ignore (lecture impossible): {directory}: {e}")
                continue

            if sub_listing.identity != (0, 0):
                if sub_listing.identity in visited:
                    continue
                visited.add(sub_listing.identity)

            await self._analyze_listing(sub_listing, stats, visited)

    async def _file_size(self, file_path: Path) -> int:
        size = await self._extractor.probe_container_size(file_path)
        if size and size > 0:
            return size

        try:
            return await self._file_system.get_size(file_path)
        except OSError as e:
            logger.warning(f"Taille inconnue pour {file_path}: {e}")
            return 0
