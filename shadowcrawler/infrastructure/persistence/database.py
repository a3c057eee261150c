"""
Configuration de la base de donnees SQLite du catalogue.

Ce module fournit :
- Creation de l'engine SQLite (aucun engine global : l'instance est construite
  et possedee par le container d'injection de dependances)
- Initialisation des tables et migrations de schema

La base de donnees est configuree via SHADOWCRAWLER_DATABASE_URL
(defaut: sqlite:///<data_dir>/videos.db).
"""

from pathlib import Path

from loguru import logger
from sqlalchemy import Engine, text
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine

_SQLITE_PREFIX = "sqlite:///"
_MEMORY_URLS = {"sqlite://", "sqlite:///:memory:"}


def create_db_engine(database_url: str, echo: bool = False) -> Engine:
    """
    Cree l'engine SQLAlchemy du catalogue.

    Pour une base fichier, le repertoire parent est cree si necessaire.
    Une base en memoire partage une connexion unique (StaticPool) pour que
    toutes les sessions voient les memes tables.
    """
    if database_url in _MEMORY_URLS:
        return create_engine(
            database_url,
            echo=echo,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )

    if database_url.startswith(_SQLITE_PREFIX):
        db_path = Path(database_url[len(_SQLITE_PREFIX):])
        db_path.parent.mkdir(exist_ok=True, parents=True)

    return create_engine(
        database_url,
        echo=echo,
        connect_args={"check_same_thread": False},
    )


def init_db(engine: Engine) -> Engine:
    """
    Initialise la base de donnees en creant toutes les tables.

    Cette fonction importe les modeles pour enregistrer leurs metadonnees
    dans SQLModel.metadata, puis cree les tables et index manquants.

    Doit etre appelee une fois au demarrage de l'application.
    """
    # Import des modeles pour enregistrer leurs metadonnees
    # L'import est fait ici pour eviter les imports circulaires
    from shadowcrawler.infrastructure.persistence import models  # noqa: F401

    SQLModel.metadata.create_all(engine)
    _run_migrations(engine)
    logger.debug(f"Base de donnees initialisee: {engine.url}")
    return engine


def _run_migrations(engine: Engine) -> None:
    """
    Execute les migrations de schema necessaires.

    SQLModel.metadata.create_all() ne modifie pas les tables existantes :
    une table videos creee par une version anterieure peut ne pas avoir les
    colonnes de la couche presentation.
    """
    migrations = {
        "blobUrl": "ALTER TABLE videos ADD COLUMN blobUrl TEXT",
        "isPreloaded": "ALTER TABLE videos ADD COLUMN isPreloaded INTEGER DEFAULT 0",
    }

    with engine.connect() as conn:
        result = conn.execute(text("PRAGMA table_info(videos)"))
        columns = {row[1] for row in result.fetchall()}

        for column, statement in migrations.items():
            if column not in columns:
                logger.info(f"Migration: ajout de la colonne videos.{column}")
                conn.execute(text(statement))
        conn.commit()
