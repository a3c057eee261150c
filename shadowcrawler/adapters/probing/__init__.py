"""
Adaptateurs des outils externes de sondage et de rendu (ffprobe, ffmpeg).
"""

from shadowcrawler.adapters.probing.dependency_checker import (
    DependencyCheck,
    DependencyChecker,
)
from shadowcrawler.adapters.probing.ffprobe_extractor import FFprobeExtractor

__all__ = [
    "FFprobeExtractor",
    "DependencyChecker",
    "DependencyCheck",
]
