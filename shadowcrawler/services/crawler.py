"""
Service d'indexation des arborescences video.

Parcourt un repertoire racine, extrait les metadonnees des fichiers video et
les enregistre dans le catalogue. Les sous-repertoires de premier niveau sont
repartis en couloirs (lanes) executes en concurrence sur la boucle asyncio ;
chaque couloir traite ses repertoires l'un apres l'autre.
"""

import asyncio
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence, TypeVar

from loguru import logger

from shadowcrawler.adapters.file_system import is_video_file
from shadowcrawler.config import Settings
from shadowcrawler.core.exceptions import CrawlRootError
from shadowcrawler.core.ports.file_system import DirectoryListing, IFileSystem
from shadowcrawler.core.ports.media_probe import IMediaProbe
from shadowcrawler.core.ports.repositories import IVideoRepository
from shadowcrawler.services.progress import (
    CancellationToken,
    IndexingProgress,
    ProgressChannel,
)
from shadowcrawler.services.record_builder import build_record, read_file_stats

T = TypeVar("T")

# Identite renvoyee quand le systeme de fichiers ne la fournit pas
_UNKNOWN_IDENTITY = (0, 0)


def create_lanes(items: Sequence[T], lane_count: int) -> list[list[T]]:
    """
    Repartit les elements en couloirs par tourniquet.

    L'element i va dans le couloir i % lane_count ; l'ordre d'origine est
    conserve dans chaque couloir.

    Raises:
        ValueError: si lane_count < 1
    """
    if lane_count < 1:
        raise ValueError(f"lane_count doit etre >= 1 (recu: {lane_count})")
    lanes: list[list[T]] = [[] for _ in range(lane_count)]
    for index, item in enumerate(items):
        lanes[index % lane_count].append(item)
    return lanes


@dataclass
class _CrawlRun:
    """Etat partage par les couloirs d'une meme passe d'indexation."""

    cancel_token: CancellationToken
    indexed_at: int
    indexed_count: int = 0


class CrawlerService:
    """
    Service orchestrant l'indexation d'une arborescence.

    Coordonne:
    - Le systeme de fichiers (IFileSystem) pour lister les repertoires
    - L'extracteur (IMediaProbe) pour les metadonnees et miniatures
    - Le repository (IVideoRepository) pour la persistance
    - Le canal de progression pour les abonnes
    """

    def __init__(
        self,
        repository: IVideoRepository,
        extractor: IMediaProbe,
        file_system: IFileSystem,
        progress: ProgressChannel,
        settings: Settings,
    ) -> None:
        self._repository = repository
        self._extractor = extractor
        self._file_system = file_system
        self._progress = progress
        self._settings = settings

    async def crawl(
        self,
        root: Path,
        lane_count: Optional[int] = None,
        cancel_token: Optional[CancellationToken] = None,
    ) -> int:
        """
        Indexe l'arborescence en repartissant les sous-repertoires en couloirs.

        Les fichiers du repertoire racine sont traites d'abord, puis les
        couloirs sont lances en concurrence.

        Args:
            root: Repertoire racine a indexer
            lane_count: Nombre de couloirs (defaut: settings.lane_count)
            cancel_token: Jeton d'annulation optionnel

        Returns:
            Nombre d'enregistrements ecrits pendant la passe

        Raises:
            CrawlRootError: si le repertoire racine ne peut pas etre lu
            ValueError: si lane_count < 1
        """
        lane_count = self._settings.lane_count if lane_count is None else lane_count
        if lane_count < 1:
            raise ValueError(f"lane_count doit etre >= 1 (recu: {lane_count})")

        run = self._new_run(cancel_token)
        listing = await self._list_root(root)
        logger.info(
            f"Indexation de {root}: {len(listing.files)} fichier(s), "
            f"{len(listing.directories)} sous-repertoire(s), {lane_count} couloir(s)"
        )

        await self._index_files(listing, run)

        lanes = create_lanes(listing.directories, lane_count)
        await asyncio.gather(
            *(self._run_lane(root, lane, listing.identity, run) for lane in lanes if lane)
        )

        return self._finish(root, run)

    async def crawl_sequential(
        self,
        root: Path,
        cancel_token: Optional[CancellationToken] = None,
    ) -> int:
        """
        Indexe l'arborescence sur un seul couloir, en profondeur d'abord.

        Semantique par fichier identique a crawl().

        Raises:
            CrawlRootError: si le repertoire racine ne peut pas etre lu
        """
        run = self._new_run(cancel_token)
        listing = await self._list_root(root)
        logger.info(f"Indexation sequentielle de {root}")

        await self._index_listing(listing, run, {listing.identity})

        return self._finish(root, run)

    def _new_run(self, cancel_token: Optional[CancellationToken]) -> _CrawlRun:
        return _CrawlRun(
            cancel_token=cancel_token or CancellationToken(),
            indexed_at=int(time.time()),
        )

    async def _list_root(self, root: Path) -> DirectoryListing:
        try:
            return await self._file_system.list_directory(root)
        except OSError as e:
            logger.error(f"Repertoire racine illisible: {root}: {e}")
            raise CrawlRootError(root, e) from e

    def _finish(self, root: Path, run: _CrawlRun) -> int:
        if run.cancel_token.is_cancelled:
            logger.warning(f"Indexation de {root} annulee apres {run.indexed_count} fichier(s)")
        else:
            logger.info(f"Indexation de {root} terminee: {run.indexed_count} fichier(s) indexe(s)")
        self._progress.emit(IndexingProgress(indexed_count=run.indexed_count, is_complete=True))
        return run.indexed_count

    async def _run_lane(
        self,
        root: Path,
        directories: list[str],
        root_identity: tuple[int, int],
        run: _CrawlRun,
    ) -> None:
        """Traite sequentiellement les repertoires d'un couloir."""
        visited = {root_identity}
        for name in directories:
            if run.cancel_token.is_cancelled:
                return
            await self._index_directory(root / name, run, visited)

    async def _index_directory(
        self,
        directory: Path,
        run: _CrawlRun,
        visited: set[tuple[int, int]],
    ) -> None:
        """Liste puis indexe un sous-repertoire. Un echec de lecture est absorbe."""
        if run.cancel_token.is_cancelled:
            return
        try:
            listing = await self._file_system.list_directory(directory)
        except OSError as e:
            logger.warning(f"Sous-repertoire ignore (lecture impossible): {directory}: {e}")
            return

        if listing.identity != _UNKNOWN_IDENTITY:
            if listing.identity in visited:
                logger.debug(f"Repertoire deja visite, ignore: {directory}")
                return
            visited.add(listing.identity)

        await self._index_listing(listing, run, visited)

    async def _index_listing(
        self,
        listing: DirectoryListing,
        run: _CrawlRun,
        visited: set[tuple[int, int]],
    ) -> None:
        """Fichiers d'abord, puis sous-repertoires en profondeur dans l'ordre des noms."""
        await self._index_files(listing, run)
        for name in listing.directories:
            if run.cancel_token.is_cancelled:
                return
            await self._index_directory(listing.path / name, run, visited)

    async def _index_files(self, listing: DirectoryListing, run: _CrawlRun) -> None:
        for name in listing.files:
            if run.cancel_token.is_cancelled:
                return
            if not is_video_file(name):
                continue
            await self._index_file(listing.path / name, run)

    async def _index_file(self, file_path: Path, run: _CrawlRun) -> None:
        """
        Indexe un fichier video.

        Un fichier deja indexe avec la meme date de modification est ignore.
        Les erreurs d'extraction sont journalisees et le fichier ignore ; les
        erreurs du repository remontent.
        """
        try:
            stats = await read_file_stats(file_path, self._file_system, self._extractor)
        except Exception as e:
            logger.warning(f"Statistiques illisibles, fichier ignore: {file_path}: {e}")
            return

        existing = self._repository.get_by_path(str(file_path))
        if existing is not None and existing.modified_date == stats.mtime:
            logger.debug(f"Inchange, ignore: {file_path}")
            return

        try:
            metadata = await self._extractor.extract(file_path)
        except Exception as e:
            logger.warning(f"Echec de l'extraction, fichier ignore: {file_path}: {e}")
            return

        if metadata is None:
            logger.debug(f"Aucun flux video exploitable: {file_path}")
            return

        record = build_record(file_path, stats, metadata, indexed_at=run.indexed_at)
        self._repository.upsert(record)
        run.indexed_count += 1

        self._progress.emit(
            IndexingProgress(indexed_count=run.indexed_count, current_file=str(file_path))
        )
