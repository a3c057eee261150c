"""
Utilitaires partages de ShadowCrawler.
"""

from shadowcrawler.utils.formatting import format_bytes, format_duration

__all__ = [
    "format_bytes",
    "format_duration",
]
