"""
Fixtures pytest partagees pour les tests ShadowCrawler.

Ce module contient les fixtures communes utilisees dans les tests:
- Settings de test avec chemins temporaires
- Base SQLite en memoire et repository
- Mocks des interfaces (IFileSystem, IMediaProbe)
"""

from pathlib import Path
from typing import Iterator
from unittest.mock import MagicMock

import pytest
from sqlalchemy import Engine
from sqlmodel import Session

from shadowcrawler.config import Settings
from shadowcrawler.core.entities.video import VideoRecord
from shadowcrawler.core.ports.file_system import IFileSystem
from shadowcrawler.core.ports.media_probe import IMediaProbe
from shadowcrawler.core.value_objects.media_info import VideoMetadata
from shadowcrawler.infrastructure.persistence.database import create_db_engine, init_db
from shadowcrawler.infrastructure.persistence.repositories import SQLModelVideoRepository


def make_record(
    file_name: str = "clip.mp4",
    folder_name: str = "Holidays",
    root: str = "/videos",
    **overrides,
) -> VideoRecord:
    """Construit un VideoRecord de test coherent (id, chemin, dossier)."""
    values = dict(
        id=f"{folder_name}_{file_name}".replace(".", "_").replace(" ", "_"),
        folder_name=folder_name,
        full_path=f"{root}/{folder_name}/{file_name}",
        file_name=file_name,
        file_size=1000,
        creation_date=1_700_000_000,
        modified_date=1_700_000_000,
        duration=12.5,
        width=1920,
        height=1080,
        fps=25.0,
        codec="h264",
        thumbnail_path=None,
        indexed_at=1_700_000_100,
    )
    values.update(overrides)
    return VideoRecord(**values)


@pytest.fixture
def record_factory():
    """Fabrique de VideoRecord de test (voir make_record)."""
    return make_record


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """
    Settings de test avec chemins temporaires.

    Utilise _env_file=None pour ignorer un eventuel fichier .env local.
    """
    return Settings(
        _env_file=None,
        data_dir=tmp_path / "data",
        database_url="sqlite://",
        lane_count=2,
        log_file=tmp_path / "test.log",
    )


@pytest.fixture
def engine() -> Iterator[Engine]:
    """Engine SQLite en memoire avec les tables creees."""
    db_engine = init_db(create_db_engine("sqlite://"))
    yield db_engine
    db_engine.dispose()


@pytest.fixture
def session(engine: Engine) -> Iterator[Session]:
    with Session(engine) as db_session:
        yield db_session


@pytest.fixture
def video_repository(session: Session) -> SQLModelVideoRepository:
    return SQLModelVideoRepository(session)


@pytest.fixture
def mock_file_system() -> MagicMock:
    """
    Mock de IFileSystem pour les tests.

    Les methodes async sont des AsyncMock (spec sur l'interface).
    Les valeurs de retour doivent etre configurees dans chaque test.
    """
    mock = MagicMock(spec=IFileSystem)
    mock.get_size.return_value = 500
    return mock


@pytest.fixture
def mock_media_probe() -> MagicMock:
    """
    Mock de IMediaProbe pour les tests.

    Retourne des metadonnees h264 1080p par defaut ; aucune date ni taille
    de conteneur.
    """
    mock = MagicMock(spec=IMediaProbe)
    mock.is_available.return_value = True
    mock.extract.return_value = VideoMetadata(
        duration=12.5, width=1920, height=1080, fps=25.0, codec="h264"
    )
    mock.generate_thumbnail.return_value = None
    mock.probe_creation_time.return_value = None
    mock.probe_container_size.return_value = None
    return mock
