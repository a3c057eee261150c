"""
Services applicatifs de ShadowCrawler.

- CrawlerService : indexation des arborescences (couloirs concurrents)
- StorageAnalyzerService : occupation disque et cache des statistiques
- CatalogService : consultation du catalogue
- ProgressChannel / CancellationToken : progression et annulation
"""

from shadowcrawler.services.catalog import CatalogService, to_presentation
from shadowcrawler.services.crawler import CrawlerService, create_lanes
from shadowcrawler.services.progress import (
    CancellationToken,
    IndexingProgress,
    ProgressChannel,
    StorageProgress,
)
from shadowcrawler.services.storage_analyzer import StorageAnalyzerService

__all__ = [
    "CatalogService",
    "to_presentation",
    "CrawlerService",
    "create_lanes",
    "StorageAnalyzerService",
    "ProgressChannel",
    "CancellationToken",
    "IndexingProgress",
    "StorageProgress",
]
