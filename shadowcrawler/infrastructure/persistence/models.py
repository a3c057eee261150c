"""
Modeles SQLModel pour la base de donnees du catalogue.

Ces modeles representent les tables de la base de donnees SQLite.
Ils sont distincts des entites de domaine (dataclass dans core/entities/)
selon l'architecture hexagonale.

Tables:
- videos: Fichiers video indexes (cle primaire id, full_path unique)

Les colonnes blobUrl et isPreloaded appartiennent a la couche presentation :
elles sont stockees et relues telles quelles, sans interpretation.
"""

from typing import Optional

from sqlalchemy import Boolean, Column, String
from sqlmodel import Field, SQLModel


class VideoModel(SQLModel, table=True):
    """
    Modele representant un fichier video indexe.

    Index secondaires sur creation_date, folder_name et modified_date pour
    les requetes triees et paginees.
    """

    __tablename__ = "videos"

    id: str = Field(primary_key=True)
    folder_name: str = Field(index=True)
    full_path: str = Field(unique=True)
    file_name: str
    file_size: int = 0
    creation_date: int = Field(default=0, index=True)  # secondes depuis epoch
    modified_date: int = Field(default=0, index=True)  # secondes depuis epoch
    duration: Optional[float] = None
    width: Optional[int] = None
    height: Optional[int] = None
    fps: Optional[float] = None
    codec: Optional[str] = None
    thumbnail_path: Optional[str] = None
    indexed_at: int = 0
    blob_url: Optional[str] = Field(
        default=None, sa_column=Column("blobUrl", String, nullable=True)
    )
    is_preloaded: bool = Field(
        default=False,
        sa_column=Column("isPreloaded", Boolean, nullable=False, default=False, server_default="0"),
    )
