"""
Adaptateur pour les operations sur le systeme de fichiers.

Implementation concrete de IFileSystem : les appels bloquants (scandir, stat)
sont executes via asyncio.to_thread pour ne pas bloquer la boucle d'evenements.
Fournit egalement le classifieur de fichiers video.
"""

import asyncio
import os
from pathlib import Path

from loguru import logger

from shadowcrawler.core.ports.file_system import DirectoryListing, IFileSystem

# Extensions video supportees (comparaison en minuscules, point inclus)
VIDEO_EXTENSIONS: frozenset[str] = frozenset({
    ".mp4", ".avi", ".mov", ".mkv", ".webm", ".flv", ".wmv", ".m4v",
    ".mpg", ".mpeg", ".3gp", ".ogv",
})

# Fichiers systeme / metadonnees ignores (comparaison exacte, sensible a la casse)
SKIPPED_FILENAMES: frozenset[str] = frozenset({
    ".DS_Store",
    "Thumbs.db",
    "desktop.ini",
    ".Spotlight-V100",
    ".Trashes",
    ".fseventsd",
    ".TemporaryItems",
    ".VolumeIcon.icns",
    ".apdisk",
    ".localized",
    ".metadata_never_index",
    ".parentlock",
    ".symlinks",
    ".VolumeIcon.ico",
    "ehthumbs.db",
    "ehthumbs_vista.db",
    "Folder.jpg",
    "Folder.gif",
    "Folder.png",
    "Thumbs.db:encryptable",
})


def is_skipped_file(filename: str) -> bool:
    """Indique si le nom correspond a un fichier systeme a ignorer."""
    return filename in SKIPPED_FILENAMES


def is_video_file(filename: str) -> bool:
    """
    Determine si un fichier est une video indexable.

    Regles, dans l'ordre :
    - nom present dans SKIPPED_FILENAMES -> refuse
    - pas d'extension -> refuse
    - extension en minuscules presente dans VIDEO_EXTENSIONS -> accepte

    Args:
        filename: Nom du fichier (sans le chemin)

    Returns:
        True si le fichier doit etre indexe
    """
    if is_skipped_file(filename):
        return False

    suffix = Path(filename).suffix
    if not suffix:
        return False

    return suffix.lower() in VIDEO_EXTENSIONS


class FileSystemAdapter(IFileSystem):
    """
    Implementation de IFileSystem pour le systeme de fichiers reel.

    Les liens symboliques vers des repertoires ne sont pas suivis, ce qui
    evite les cycles dans les parcours recursifs.
    """

    async def list_directory(self, path: Path) -> DirectoryListing:
        """Liste un repertoire (scandir execute dans un thread)."""
        return await asyncio.to_thread(self._scan, path)

    def _scan(self, path: Path) -> DirectoryListing:
        """
        Parcourt les entrees d'un repertoire.

        Les entrees sont triees par nom pour un ordre de visite deterministe.
        """
        files: list[str] = []
        directories: list[str] = []

        with os.scandir(path) as entries:
            for entry in entries:
                try:
                    if entry.is_dir(follow_symlinks=False):
                        directories.append(entry.name)
                    elif entry.is_symlink() and entry.is_dir():
                        # Lien vers un repertoire: ignore (garde contre les cycles)
                        logger.debug(f"Lien symbolique de repertoire ignore: {entry.path}")
                    else:
                        files.append(entry.name)
                except OSError as e:
                    logger.warning(f"Entree illisible ignoree: {entry.path} ({e})")

        stat_result = os.stat(path)
        return DirectoryListing(
            path=path,
            files=sorted(files),
            directories=sorted(directories),
            identity=(stat_result.st_dev, stat_result.st_ino),
        )

    async def stat(self, path: Path) -> os.stat_result:
        """Lit les statistiques natives du fichier."""
        return await asyncio.to_thread(os.stat, path)

    async def get_size(self, path: Path) -> int:
        """Recupere la taille reelle du fichier en octets."""
        stat_result = await self.stat(path)
        return stat_result.st_size
