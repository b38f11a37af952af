import logging
from typing import Callable, Set
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from subextract.core.database.connection import SessionLocal
from subextract.core.errors import LinkError
from .sql_models import VideoMetadataSetMemberModel
from ..domain.interfaces import IMetadataStore

logger = logging.getLogger(__name__)

class SqlMetadataStore(IMetadataStore):
    """
    Metadata store backed by SQLAlchemy (SQLite by default, Postgres in production).
    """

    def __init__(self, session_factory: Callable[[], Session] = SessionLocal):
        self.session_factory = session_factory

    def add_to_set(self, video_cid: str, field: str, value: str) -> None:
        with self.session_factory() as db:
            try:
                # 1. Idempotence: existing member is a no-op
                existing = db.query(VideoMetadataSetMemberModel).filter_by(
                    video_cid=video_cid,
                    field=field,
                    value=value
                ).first()

                if existing:
                    return

                # 2. Insert
                db.add(VideoMetadataSetMemberModel(video_cid=video_cid, field=field, value=value))
                db.commit()
            except IntegrityError:
                # A concurrent writer added the same member between our check and insert
                db.rollback()
                logger.debug(f"{field} of {video_cid} already contains {value}")
            except SQLAlchemyError as e:
                db.rollback()
                raise LinkError(f"Failed to add {value} to {field} of {video_cid}: {e}") from e

    def members(self, video_cid: str, field: str) -> Set[str]:
        """Current members of one set field (for downstream readers and tests)."""
        with self.session_factory() as db:
            rows = db.query(VideoMetadataSetMemberModel.value).filter_by(
                video_cid=video_cid,
                field=field
            ).all()
            return {row[0] for row in rows}
