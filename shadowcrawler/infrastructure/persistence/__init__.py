"""
Module de persistance SQLite du catalogue.

Ce module fournit l'infrastructure de stockage utilisant SQLModel (SQLAlchemy).
Il contient :

- database.py : Creation de l'engine SQLite, initialisation, migrations
- models.py : Modeles SQLModel representant les tables de la base de donnees

Les modeles ici sont des adapters de persistance, distincts des entites de domaine
(dataclass dans core/entities/). La conversion entre les deux se fait dans les
repositories.

Usage:
    from sqlmodel import Session
    from shadowcrawler.infrastructure.persistence import create_db_engine, init_db

    engine = init_db(create_db_engine("sqlite:///videos.db"))
    with Session(engine) as session:
        repo = SQLModelVideoRepository(session)
"""

from shadowcrawler.infrastructure.persistence.database import create_db_engine, init_db
from shadowcrawler.infrastructure.persistence.models import VideoModel

__all__ = [
    "create_db_engine",
    "init_db",
    "VideoModel",
]
