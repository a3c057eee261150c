"""
Configuration de l'application via pydantic-settings.

La configuration est chargée depuis les variables d'environnement avec le préfixe
SHADOWCRAWLER_, et peut optionnellement être fournie via un fichier .env.

Les chemins derives (base de donnees, miniatures, cache) sont calcules a partir
de data_dir s'ils ne sont pas fournis explicitement.
"""

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Trouver le fichier .env à la racine du projet (parent de shadowcrawler/)
_PROJECT_ROOT = Path(__file__).parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """Paramètres de l'application avec support des variables d'environnement.

    Tous les paramètres peuvent être surchargés via des variables d'environnement
    avec le préfixe SHADOWCRAWLER_.
    Exemple : SHADOWCRAWLER_LANE_COUNT=8

    Les chemins sont automatiquement étendus (~ -> répertoire home).
    """

    model_config = SettingsConfigDict(
        env_prefix="SHADOWCRAWLER_",
        env_file=_ENV_FILE if _ENV_FILE.exists() else ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Repertoire de donnees de l'application (base, miniatures, cache)
    data_dir: Path = Field(default=Path("~/.shadowcrawler"))

    # Base de données (defaut: <data_dir>/videos.db)
    database_url: Optional[str] = Field(default=None)

    # Miniatures et cache des statistiques de stockage
    thumbnails_dir: Optional[Path] = Field(default=None)
    cache_dir: Optional[Path] = Field(default=None)

    # Indexation
    lane_count: int = Field(default=4, ge=1)

    # Outils externes
    ffprobe_path: str = Field(default="ffprobe")
    ffmpeg_path: str = Field(default="ffmpeg")
    probe_timeout_seconds: float = Field(default=60.0, gt=0)
    thumbnail_offset_seconds: int = Field(default=10, ge=0)
    thumbnail_size: str = Field(default="320x180", pattern=r"^\d+x\d+$")

    # Analyse du stockage
    storage_cache_max_age_hours: int = Field(default=24, ge=1)
    storage_progress_interval: int = Field(default=100, ge=1)

    # Logging (fichier + stderr, rotation 10MB, 5 fichiers de rétention)
    log_level: str = Field(default="INFO")
    log_file: Path = Field(default=Path("logs/shadowcrawler.log"))
    log_rotation_size: str = Field(default="10 MB")
    log_retention_count: int = Field(default=5)

    @field_validator("data_dir", "thumbnails_dir", "cache_dir", "log_file", mode="before")
    @classmethod
    def expand_path(cls, v: Optional[str | Path]) -> Optional[Path]:
        """Étend ~ vers le répertoire home dans les chemins."""
        if v is None:
            return None
        return Path(v).expanduser()

    @property
    def resolved_database_url(self) -> str:
        """URL SQLAlchemy effective de la base de donnees."""
        if self.database_url:
            return self.database_url
        return f"sqlite:///{self.data_dir / 'videos.db'}"

    @property
    def resolved_thumbnails_dir(self) -> Path:
        """Repertoire effectif des miniatures."""
        return self.thumbnails_dir or self.data_dir / "thumbnails"

    @property
    def resolved_cache_dir(self) -> Path:
        """Repertoire effectif du cache des statistiques."""
        return self.cache_dir or self.data_dir / "cache"
