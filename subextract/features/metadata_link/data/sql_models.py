from datetime import datetime, timezone
from sqlalchemy import Column, Integer, String, DateTime, UniqueConstraint
from subextract.core.database.base import Base

def utc_now():
    return datetime.now(timezone.utc)

class VideoMetadataSetMemberModel(Base):
    """
    One member of a set-valued metadata field on a video.

    Structure: [Video CID] --(field)--> value
    The unique constraint makes concurrent additions of the same member collapse to one row.
    """
    __tablename__ = "video_metadata_set_members"
    __table_args__ = (
        UniqueConstraint("video_cid", "field", "value", name="uq_video_field_value"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)

    video_cid = Column(String, nullable=False, index=True)
    field = Column(String, nullable=False)
    value = Column(String, nullable=False)

    created_at = Column(DateTime(timezone=True), default=utc_now)
