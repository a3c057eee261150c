"""
Implementation SQLModel du repository du catalogue video.

Implemente l'interface IVideoRepository pour la persistance des VideoRecord
dans la base de donnees SQLite via SQLModel.
"""

from dataclasses import asdict, fields
from typing import Any, Optional

from sqlalchemy import literal_column
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, col, func, or_, select

from shadowcrawler.core.entities.video import VideoRecord
from shadowcrawler.core.ports.repositories import IVideoRepository, SortKeyLike
from shadowcrawler.core.value_objects.catalog import (
    DEFAULT_PAGE_SIZE,
    Page,
    SortKey,
    page_offset,
)
from shadowcrawler.infrastructure.persistence.models import VideoModel

# Colonne et sens de tri pour chaque SortKey
_SORT_COLUMNS = {
    SortKey.CREATION_DATE_DESC: (VideoModel.creation_date, True),
    SortKey.CREATION_DATE_ASC: (VideoModel.creation_date, False),
    SortKey.MODIFIED_DATE_DESC: (VideoModel.modified_date, True),
    SortKey.MODIFIED_DATE_ASC: (VideoModel.modified_date, False),
    SortKey.NAME_ASC: (VideoModel.file_name, False),
    SortKey.NAME_DESC: (VideoModel.file_name, True),
    SortKey.SIZE_DESC: (VideoModel.file_size, True),
    SortKey.SIZE_ASC: (VideoModel.file_size, False),
}

# Ordre de stockage SQLite, utilise pour departager les egalites
_STORAGE_ORDER = literal_column("videos.rowid")

_UPDATABLE_FIELDS = frozenset(f.name for f in fields(VideoRecord)) - {"id"}


def _order_by(sort_key: SortKeyLike) -> tuple:
    """Clauses ORDER BY pour une cle de tri (cle inconnue -> date de creation desc)."""
    column, descending = _SORT_COLUMNS[SortKey.parse(sort_key)]
    primary = col(column).desc() if descending else col(column).asc()
    return primary, _STORAGE_ORDER.asc()


def _escape_like(query: str) -> str:
    """Echappe les jokers LIKE pour une recherche de sous-chaine litterale."""
    return query.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class SQLModelVideoRepository(IVideoRepository):
    """
    Repository SQLModel pour le catalogue video.

    Implemente IVideoRepository avec conversion bidirectionnelle
    entre l'entite VideoRecord (domaine) et VideoModel (persistance).
    Chaque ecriture est validee (commit) immediatement : une lecture voit
    toutes les ecritures terminees avant elle.
    """

    def __init__(self, session: Session) -> None:
        """
        Initialise le repository avec une session SQLModel.

        Args :
            session : Session SQLModel active pour les operations DB
        """
        self._session = session

    def _to_entity(self, model: VideoModel) -> VideoRecord:
        """Convertit un modele DB en entite domaine."""
        return VideoRecord(
            id=model.id,
            folder_name=model.folder_name,
            full_path=model.full_path,
            file_name=model.file_name,
            file_size=model.file_size,
            creation_date=model.creation_date,
            modified_date=model.modified_date,
            duration=model.duration,
            width=model.width,
            height=model.height,
            fps=model.fps,
            codec=model.codec,
            thumbnail_path=model.thumbnail_path,
            indexed_at=model.indexed_at,
            blob_url=model.blob_url,
            is_preloaded=bool(model.is_preloaded),
        )

    def _to_model(self, entity: VideoRecord) -> VideoModel:
        """Convertit une entite domaine en modele DB."""
        return VideoModel(**asdict(entity))

    def _commit(self) -> None:
        """Valide la transaction, en annulant en cas d'erreur de la base."""
        try:
            self._session.commit()
        except SQLAlchemyError:
            self._session.rollback()
            raise

    def _page(self, statement, count_statement, sort_key: SortKeyLike, page: int, page_size: int) -> Page:
        """Execute une requete paginee et calcule has_more."""
        offset = page_offset(page, page_size)
        total_count = self._session.exec(count_statement).one()
        models = self._session.exec(
            statement.order_by(*_order_by(sort_key)).offset(offset).limit(page_size)
        ).all()
        records = [self._to_entity(m) for m in models]
        return Page(
            records=records,
            total_count=total_count,
            has_more=offset + len(records) < total_count,
            page=page,
            page_size=page_size,
        )

    def upsert(self, record: VideoRecord) -> VideoRecord:
        """
        Insere ou remplace un enregistrement.

        Semantique INSERT OR REPLACE : toute ligne partageant l'id OU le
        full_path de l'enregistrement est remplacee. Deux fichiers de meme nom
        dans deux dossiers de meme nom produisent le meme id : le dernier
        indexe remplace l'autre.
        """
        statement = select(VideoModel).where(
            or_(VideoModel.id == record.id, VideoModel.full_path == record.full_path)
        )
        try:
            for existing in self._session.exec(statement).all():
                self._session.delete(existing)
            self._session.flush()
            self._session.add(self._to_model(record))
        except SQLAlchemyError:
            self._session.rollback()
            raise
        self._commit()
        return record

    def get_by_path(self, full_path: str) -> Optional[VideoRecord]:
        """Recupere un enregistrement par son chemin absolu."""
        statement = select(VideoModel).where(VideoModel.full_path == str(full_path))
        model = self._session.exec(statement).first()
        if model:
            return self._to_entity(model)
        return None

    def get_by_id(self, record_id: str) -> Optional[VideoRecord]:
        """Recupere un enregistrement par son identifiant."""
        model = self._session.get(VideoModel, record_id)
        if model:
            return self._to_entity(model)
        return None

    def list_sorted(self, sort_key: SortKeyLike = SortKey.CREATION_DATE_DESC) -> list[VideoRecord]:
        """Liste tous les enregistrements dans l'ordre demande."""
        statement = select(VideoModel).order_by(*_order_by(sort_key))
        return [self._to_entity(m) for m in self._session.exec(statement).all()]

    def list_paginated(
        self,
        sort_key: SortKeyLike = SortKey.CREATION_DATE_DESC,
        page: int = 1,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> Page:
        """Retourne une page du catalogue trie."""
        return self._page(
            select(VideoModel),
            select(func.count()).select_from(VideoModel),
            sort_key,
            page,
            page_size,
        )

    def list_by_folder(self, folder_name: str) -> list[VideoRecord]:
        """Liste les enregistrements d'un dossier, du plus recent au plus ancien."""
        statement = (
            select(VideoModel)
            .where(VideoModel.folder_name == folder_name)
            .order_by(*_order_by(SortKey.CREATION_DATE_DESC))
        )
        return [self._to_entity(m) for m in self._session.exec(statement).all()]

    def list_by_folder_paginated(
        self,
        folder_name: str,
        sort_key: SortKeyLike = SortKey.CREATION_DATE_DESC,
        page: int = 1,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> Page:
        """Retourne une page des enregistrements d'un dossier."""
        return self._page(
            select(VideoModel).where(VideoModel.folder_name == folder_name),
            select(func.count())
            .select_from(VideoModel)
            .where(VideoModel.folder_name == folder_name),
            sort_key,
            page,
            page_size,
        )

    def distinct_folders(self) -> list[str]:
        """Liste les noms de dossiers distincts, par ordre croissant."""
        statement = (
            select(VideoModel.folder_name).distinct().order_by(col(VideoModel.folder_name).asc())
        )
        return list(self._session.exec(statement).all())

    def search(self, query: str) -> list[VideoRecord]:
        """
        Recherche une sous-chaine dans le nom de fichier, le dossier ou le codec.

        La comparaison se fait en minuscules (lower() SQLite ne replie que l'ASCII).
        """
        term = f"%{_escape_like(query.lower())}%"
        statement = (
            select(VideoModel)
            .where(
                or_(
                    func.lower(VideoModel.file_name).like(term, escape="\\"),
                    func.lower(VideoModel.folder_name).like(term, escape="\\"),
                    func.lower(VideoModel.codec).like(term, escape="\\"),
                )
            )
            .order_by(*_order_by(SortKey.CREATION_DATE_DESC))
        )
        return [self._to_entity(m) for m in self._session.exec(statement).all()]

    def update(self, record_id: str, **changes: Any) -> bool:
        """
        Met a jour partiellement un enregistrement.

        Raises:
            ValueError: si un champ n'existe pas ou tente de modifier l'id
        """
        unknown = set(changes) - _UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Champs non modifiables: {', '.join(sorted(unknown))}")

        model = self._session.get(VideoModel, record_id)
        if model is None:
            return False

        for name, value in changes.items():
            setattr(model, name, value)
        self._session.add(model)
        self._commit()
        return True

    def delete(self, record_id: str) -> bool:
        """Supprime un enregistrement par ID. Retourne True si supprime."""
        model = self._session.get(VideoModel, record_id)
        if model:
            self._session.delete(model)
            self._commit()
            return True
        return False

    def count(self) -> int:
        """Nombre total d'enregistrements."""
        return self._session.exec(select(func.count()).select_from(VideoModel)).one()

    def clear_all(self) -> None:
        """Supprime tous les enregistrements."""
        for model in self._session.exec(select(VideoModel)).all():
            self._session.delete(model)
        self._commit()
