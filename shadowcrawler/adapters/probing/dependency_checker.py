"""
Verification des dependances externes (ffmpeg, ffprobe).

Utilise par la commande `check` et au demarrage d'une indexation pour
signaler a l'utilisateur les outils manquants.
"""

import asyncio
from dataclasses import dataclass

from loguru import logger

_CHECK_TIMEOUT_SECONDS = 10


@dataclass(frozen=True)
class DependencyCheck:
    """Resultat de la verification d'un outil externe."""

    name: str
    command: str
    install_instructions: str
    is_installed: bool = False


class DependencyChecker:
    """
    Verifie la presence des outils ffmpeg et ffprobe.

    Un outil est considere installe si `<outil> -version` se termine avec le code 0.
    """

    def __init__(self, ffmpeg_path: str = "ffmpeg", ffprobe_path: str = "ffprobe") -> None:
        self._dependencies = [
            DependencyCheck(
                name="FFmpeg",
                command=ffmpeg_path,
                install_instructions="Installer FFmpeg depuis https://ffmpeg.org/download.html",
            ),
            DependencyCheck(
                name="FFprobe",
                command=ffprobe_path,
                install_instructions="FFprobe est normalement fourni avec FFmpeg",
            ),
        ]

    async def check_command(self, command: str) -> bool:
        """Verifie qu'une commande repond a -version."""
        try:
            process = await asyncio.create_subprocess_exec(
                command,
                "-version",
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.DEVNULL,
            )
        except OSError as e:
            logger.warning(f"Verification de {command} impossible: {e}")
            return False

        try:
            await asyncio.wait_for(process.wait(), timeout=_CHECK_TIMEOUT_SECONDS)
        except asyncio.TimeoutError:
            logger.warning(f"Timeout de {command} -version apres {_CHECK_TIMEOUT_SECONDS}s")
            process.kill()
            await process.wait()
            return False
        return process.returncode == 0

    async def check_dependencies(self) -> list[DependencyCheck]:
        """Verifie toutes les dependances et retourne leur statut."""
        results = []
        for dep in self._dependencies:
            installed = await self.check_command(dep.command)
            results.append(
                DependencyCheck(
                    name=dep.name,
                    command=dep.command,
                    install_instructions=dep.install_instructions,
                    is_installed=installed,
                )
            )
        return results

    async def missing_dependencies(self) -> list[DependencyCheck]:
        """Retourne uniquement les dependances manquantes."""
        return [dep for dep in await self.check_dependencies() if not dep.is_installed]
