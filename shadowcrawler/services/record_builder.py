"""
Construction des enregistrements du catalogue.

Fonctions pures (ou presque) partagees par l'indexation parallele et
l'indexation sequentielle : identifiant, statistiques fichier et assemblage
du VideoRecord.
"""

import re
import time
from pathlib import Path
from typing import Callable, Optional

from loguru import logger

from shadowcrawler.core.entities.video import VideoRecord
from shadowcrawler.core.ports.file_system import IFileSystem
from shadowcrawler.core.ports.media_probe import IMediaProbe
from shadowcrawler.core.value_objects.media_info import FileStats, VideoMetadata

_ID_FORBIDDEN_CHARS = re.compile(r"[^A-Za-z0-9_-]")


def generate_record_id(file_name: str, folder_path: Path | str) -> str:
    """
    Genere l'identifiant d'un enregistrement.

    "{nom du dossier parent}_{nom du fichier}" ou chaque caractere hors
    [A-Za-z0-9_-] est remplace par "_". Deux dossiers homonymes a des
    emplacements differents produisent des identifiants identiques.

    Exemple:
        >>> generate_record_id("My Clip.mp4", "/videos/Holidays 2023")
        'Holidays_2023_My_Clip_mp4'
    """
    return _ID_FORBIDDEN_CHARS.sub("_", f"{Path(folder_path).name}_{file_name}")


async def read_file_stats(
    file_path: Path,
    file_system: IFileSystem,
    prober: IMediaProbe,
    clock: Callable[[], float] = time.time,
) -> FileStats:
    """
    Lit la taille et les dates d'un fichier.

    Chaine de repli:
    1. stat natif (st_birthtime si la plateforme l'expose, sinon st_ctime)
    2. creation_time du conteneur (ffprobe) pour les deux dates, taille 0
    3. date courante pour les deux dates, taille 0
    """
    try:
        st = await file_system.stat(file_path)
        created = getattr(st, "st_birthtime", None) or st.st_ctime
        return FileStats(size=st.st_size, ctime=int(created), mtime=int(st.st_mtime))
    except OSError as e:
        logger.warning(f"Stat impossible pour {file_path}, repli sur ffprobe: {e}")

    creation_time = await prober.probe_creation_time(file_path)
    if creation_time is not None:
        return FileStats(size=0, ctime=creation_time, mtime=creation_time)

    now = int(clock())
    return FileStats(size=0, ctime=now, mtime=now)


def build_record(
    file_path: Path,
    stats: FileStats,
    metadata: VideoMetadata,
    indexed_at: Optional[int] = None,
) -> VideoRecord:
    """Assemble un VideoRecord a partir du chemin, des statistiques et des metadonnees."""
    folder = file_path.parent
    return VideoRecord(
        id=generate_record_id(file_path.name, folder),
        folder_name=folder.name,
        full_path=str(file_path),
        file_name=file_path.name,
        file_size=stats.size,
        creation_date=stats.ctime,
        modified_date=stats.mtime,
        duration=metadata.duration,
        width=metadata.width,
        height=metadata.height,
        fps=metadata.fps,
        codec=metadata.codec,
        thumbnail_path=metadata.thumbnail_path,
        indexed_at=indexed_at if indexed_at is not None else int(time.time()),
    )
