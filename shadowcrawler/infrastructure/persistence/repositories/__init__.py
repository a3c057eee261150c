"""
Implementations SQLModel des repositories.

Ce module contient les implementations concretes des interfaces repository
definies dans shadowcrawler/core/ports/repositories.py, utilisant SQLModel pour
la persistance SQLite.

Chaque repository :
- Herite de l'interface ABC correspondante du domaine
- Recoit une session SQLModel via injection de dependances
- Convertit entre entites de domaine (dataclass) et modeles DB (SQLModel)
"""

from shadowcrawler.infrastructure.persistence.repositories.video_repository import (
    SQLModelVideoRepository,
)

__all__ = [
    "SQLModelVideoRepository",
]
