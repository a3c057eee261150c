"""
Container d'injection de dependances via dependency-injector.

Fournit une gestion centralisee des dependances pour la CLI : engine de la
base, adaptateurs, repositories et services. Aucun etat global : chaque
Container possede ses propres instances.
"""

from dependency_injector import containers, providers
from sqlmodel import Session

from .adapters.file_system import FileSystemAdapter
from .adapters.probing.dependency_checker import DependencyChecker
from .adapters.probing.ffprobe_extractor import FFprobeExtractor
from .config import Settings
from .infrastructure.cache.storage_stats_cache import JsonStorageStatsCache
from .infrastructure.persistence.database import create_db_engine, init_db
from .infrastructure.persistence.repositories import SQLModelVideoRepository
from .services.catalog import CatalogService
from .services.crawler import CrawlerService
from .services.progress import ProgressChannel
from .services.storage_analyzer import StorageAnalyzerService


class Container(containers.DeclarativeContainer):
    """Container DI de l'application.

    Utilisation :
        container = Container()
        container.database.init()  # Initialise la DB une fois
        crawler = container.crawler_service()
        await crawler.crawl(Path("/videos"))
    """

    # Configuration - singleton charge une seule fois
    config = providers.Singleton(Settings)

    # Database - engine unique, Resource pour creation des tables et migrations
    engine = providers.Singleton(
        create_db_engine,
        database_url=config.provided.resolved_database_url,
    )
    database = providers.Resource(init_db, engine=engine)

    # Session factory - nouvelle session a chaque appel
    session = providers.Factory(Session, engine)

    # Adapters - implementations concretes des ports
    file_system = providers.Singleton(FileSystemAdapter)
    media_probe = providers.Singleton(
        FFprobeExtractor,
        thumbnails_dir=config.provided.resolved_thumbnails_dir,
        ffprobe_path=config.provided.ffprobe_path,
        ffmpeg_path=config.provided.ffmpeg_path,
        timeout_seconds=config.provided.probe_timeout_seconds,
        thumbnail_offset_seconds=config.provided.thumbnail_offset_seconds,
        thumbnail_size=config.provided.thumbnail_size,
    )
    dependency_checker = providers.Singleton(
        DependencyChecker,
        ffmpeg_path=config.provided.ffmpeg_path,
        ffprobe_path=config.provided.ffprobe_path,
    )

    # Progression - un seul canal partage par tous les services
    progress = providers.Singleton(ProgressChannel)

    # Repositories - Factory pour nouvelle instance avec session fraiche
    video_repository = providers.Factory(
        SQLModelVideoRepository,
        session=session,
    )
    storage_stats_cache = providers.Singleton(
        JsonStorageStatsCache,
        cache_dir=config.provided.resolved_cache_dir,
        max_age_hours=config.provided.storage_cache_max_age_hours,
    )

    # Services
    crawler_service = providers.Factory(
        CrawlerService,
        repository=video_repository,
        extractor=media_probe,
        file_system=file_system,
        progress=progress,
        settings=config,
    )
    storage_analyzer_service = providers.Factory(
        StorageAnalyzerService,
        extractor=media_probe,
        file_system=file_system,
        cache=storage_stats_cache,
        progress=progress,
        progress_interval=config.provided.storage_progress_interval,
    )
    catalog_service = providers.Factory(
        CatalogService,
        repository=video_repository,
    )
