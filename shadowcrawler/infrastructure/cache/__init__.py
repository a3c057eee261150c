"""
Caches persistants de ShadowCrawler.

- JsonStorageStatsCache : statistiques de stockage par repertoire racine
"""

from shadowcrawler.infrastructure.cache.storage_stats_cache import JsonStorageStatsCache

__all__ = [
    "JsonStorageStatsCache",
]
