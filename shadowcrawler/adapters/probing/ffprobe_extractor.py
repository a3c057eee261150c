"""
Implementation de l'extracteur de metadonnees techniques avec ffprobe/ffmpeg.

Ce module fournit FFprobeExtractor qui implemente IMediaProbe :
- ffprobe pour la duree, la resolution, les images par seconde et le codec
- ffmpeg pour la miniature JPEG (une image a 10 secondes, 320x180)

Les outils sont lances en sous-processus asynchrones : plusieurs couloirs
d'indexation peuvent donc sonder des fichiers en parallele au niveau systeme.
"""

import asyncio
import json
from datetime import datetime, timezone
from pathlib import Path, PurePath
from typing import Any, Optional

from loguru import logger

from shadowcrawler.core.ports.media_probe import IMediaProbe
from shadowcrawler.core.value_objects.media_info import VideoMetadata


def parse_fps(rate: Optional[str]) -> Optional[float]:
    """
    Convertit un debit d'images rationnel ffprobe ("30000/1001") en float.

    Args:
        rate: Chaine "num/den" (r_frame_rate)

    Returns:
        Images par seconde, ou None pour "0/0", un denominateur nul
        ou une chaine invalide
    """
    if not rate or rate == "0/0":
        return None

    num_str, _, den_str = rate.partition("/")
    try:
        num = float(num_str)
        den = float(den_str) if den_str else 0.0
    except ValueError:
        return None

    if den == 0:
        return None
    return num / den


def parse_duration(value: Any) -> Optional[float]:
    """Convertit format.duration en secondes (absent, invalide ou nul -> None)."""
    try:
        duration = float(value)
    except (TypeError, ValueError):
        return None
    if duration != duration or duration == 0:  # NaN ou zero
        return None
    return duration


def parse_creation_time(value: Optional[str]) -> Optional[int]:
    """
    Convertit le tag creation_time (ISO 8601) en secondes depuis epoch.

    Une date sans fuseau est interpretee en UTC.
    """
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return int(parsed.timestamp())


def thumbnail_base_name(file_path: str) -> str:
    """
    Calcule le nom de base de la miniature d'un fichier.

    Nom du fichier sans extension, ou nom complet s'il n'a pas d'extension.
    Si la decomposition echoue, les separateurs du chemin sont remplaces par "_".
    Deux fichiers de meme nom dans des dossiers differents partagent la meme
    miniature (la derniere generee ecrase l'autre).
    """
    try:
        path = PurePath(file_path)
        if not path.name:
            raise ValueError(f"Chemin sans nom de fichier: {file_path!r}")
        return path.stem if path.suffix else path.name
    except (TypeError, ValueError) as e:
        logger.warning(f"Nom de miniature de secours pour {file_path!r}: {e}")
        return "file_" + str(file_path).replace("\\", "_").replace("/", "_")


def _positive_int(value: Any) -> Optional[int]:
    """Convertit une valeur ffprobe en entier strictement positif, sinon None."""
    try:
        number = int(value)
    except (TypeError, ValueError):
        return None
    return number if number > 0 else None


class FFprobeExtractor(IMediaProbe):
    """
    Extracteur de metadonnees techniques utilisant ffprobe et ffmpeg.

    Exemple d'utilisation:
        extractor = FFprobeExtractor(thumbnails_dir=Path("~/.shadowcrawler/thumbnails"))
        metadata = await extractor.extract(Path("/videos/clip.mp4"))
    """

    def __init__(
        self,
        thumbnails_dir: Path,
        ffprobe_path: str = "ffprobe",
        ffmpeg_path: str = "ffmpeg",
        timeout_seconds: float = 60.0,
        thumbnail_offset_seconds: int = 10,
        thumbnail_size: str = "320x180",
    ) -> None:
        """
        Initialise l'extracteur.

        Args:
            thumbnails_dir: Repertoire de destination des miniatures
            ffprobe_path: Executable ffprobe
            ffmpeg_path: Executable ffmpeg
            timeout_seconds: Duree maximale d'un appel d'outil
            thumbnail_offset_seconds: Position de l'image extraite
            thumbnail_size: Dimensions de la miniature ("LxH")
        """
        self._thumbnails_dir = thumbnails_dir
        self._ffprobe = ffprobe_path
        self._ffmpeg = ffmpeg_path
        self._timeout = timeout_seconds
        self._thumbnail_offset = thumbnail_offset_seconds
        self._thumbnail_size = thumbnail_size
        self._ffprobe_available = False  # Memorise le premier succes

    async def _run(self, cmd: list[str]) -> Optional[tuple[int, bytes, bytes]]:
        """
        Execute un outil externe et retourne (code, stdout, stderr).

        Returns:
            None si l'outil est introuvable, non executable ou depasse le delai
        """
        try:
            process = await asyncio.create_subprocess_exec(
                *cmd,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            logger.debug(f"Lancement impossible de {cmd[0]}: {e}")
            return None

        try:
            stdout, stderr = await asyncio.wait_for(
                process.communicate(), timeout=self._timeout
            )
        except asyncio.TimeoutError:
            logger.warning(f"Timeout {cmd[0]} apres {self._timeout}s: {cmd[-1]}")
            process.kill()
            await process.wait()
            return None

        return process.returncode, stdout, stderr

    async def _probe_json(self, file_path: Path, args: list[str]) -> Optional[dict[str, Any]]:
        """Lance ffprobe en sortie JSON et retourne le document decode."""
        cmd = [self._ffprobe, "-v", "quiet", "-print_format", "json", *args, str(file_path)]
        result = await self._run(cmd)
        if result is None:
            return None

        returncode, stdout, stderr = result
        if returncode != 0:
            logger.debug(
                f"ffprobe code {returncode} pour {file_path}: "
                f"{stderr.decode(errors='replace').strip()}"
            )
            return None

        try:
            data = json.loads(stdout.decode(errors="replace"))
        except json.JSONDecodeError as e:
            logger.warning(f"Sortie ffprobe malformee pour {file_path}: {e}")
            return None

        return data if isinstance(data, dict) else None

    async def is_available(self) -> bool:
        """Verifie que ffprobe repond a -version (succes memorise)."""
        if self._ffprobe_available:
            return True

        result = await self._run([self._ffprobe, "-version"])
        self._ffprobe_available = result is not None and result[0] == 0
        return self._ffprobe_available

    async def extract(self, file_path: Path) -> Optional[VideoMetadata]:
        """
        Extrait les metadonnees techniques d'un fichier video.

        Args:
            file_path: Chemin complet vers le fichier video

        Returns:
            VideoMetadata, ou None si ffprobe est absent, echoue,
            ou si le fichier n'a pas de flux video
        """
        if not await self.is_available():
            logger.error(f"ffprobe inaccessible ({self._ffprobe}), fichier ignore: {file_path}")
            return None

        data = await self._probe_json(file_path, ["-show_format", "-show_streams"])
        if data is None:
            return None

        streams = data.get("streams") or []
        video_stream = next(
            (
                stream for stream in streams
                if isinstance(stream, dict) and stream.get("codec_type") == "video"
            ),
            None,
        )
        if video_stream is None:
            logger.debug(f"Aucun flux video: {file_path}")
            return None

        container = data.get("format") or {}
        metadata = VideoMetadata(
            duration=parse_duration(container.get("duration")),
            width=_positive_int(video_stream.get("width")),
            height=_positive_int(video_stream.get("height")),
            fps=parse_fps(video_stream.get("r_frame_rate")),
            codec=video_stream.get("codec_name") or None,
        )

        # La miniature est optionnelle: son echec n'invalide pas l'extraction
        return metadata.with_thumbnail(await self.generate_thumbnail(file_path))

    async def generate_thumbnail(self, file_path: Path) -> Optional[str]:
        """
        Genere une miniature JPEG via ffmpeg.

        Args:
            file_path: Chemin du fichier video

        Returns:
            Chemin de la miniature, ou None en cas d'echec
        """
        try:
            await asyncio.to_thread(self._thumbnails_dir.mkdir, parents=True, exist_ok=True)
        except OSError as e:
            logger.error(f"Creation du repertoire de miniatures impossible: {e}")
            return None

        thumbnail_path = self._thumbnails_dir / f"{thumbnail_base_name(str(file_path))}.jpg"
        cmd = [
            self._ffmpeg,
            "-i", str(file_path),
            "-ss", str(self._thumbnail_offset),
            "-vframes", "1",
            "-s", self._thumbnail_size,
            "-y",
            str(thumbnail_path),
        ]

        result = await self._run(cmd)
        if result is None:
            logger.warning(f"ffmpeg indisponible, pas de miniature pour {file_path}")
            return None

        returncode, _, stderr = result
        if returncode != 0:
            logger.warning(
                f"ffmpeg code {returncode} pour {file_path}: "
                f"{stderr.decode(errors='replace').strip()[-300:]}"
            )
            return None

        return str(thumbnail_path)

    async def probe_creation_time(self, file_path: Path) -> Optional[int]:
        """Lit format.tags.creation_time (secondes depuis epoch)."""
        data = await self._probe_json(
            file_path, ["-show_entries", "format_tags=creation_time"]
        )
        if data is None:
            return None
        tags = (data.get("format") or {}).get("tags") or {}
        return parse_creation_time(tags.get("creation_time"))

    async def probe_container_size(self, file_path: Path) -> Optional[int]:
        """Lit format.size (octets), None si absent ou nul."""
        data = await self._probe_json(file_path, ["-show_format"])
        if data is None:
            return None
        return _positive_int((data.get("format") or {}).get("size"))
