from sqlalchemy import Column, Integer, String, Text, DateTime, UniqueConstraint, Index
from topic_fields.database import Base
from datetime import datetime, timezone


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TopicCustomField(Base):
    """One custom field value of one topic, stored as text."""

    __tablename__ = "topic_custom_fields"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    topic_id = Column(Integer, nullable=False, index=True)
    name = Column(String(256), nullable=False)
    value = Column(Text, nullable=True)
    created_at = Column(DateTime, default=_utcnow, nullable=False)
    updated_at = Column(DateTime, default=_utcnow, onupdate=_utcnow, nullable=False)

    __table_args__ = (
        UniqueConstraint("topic_id", "name", name="unique_topic_custom_field"),
        Index("idx_topic_custom_fields_name", "name"),
    )

    def __repr__(self) -> str:
        return f"<TopicCustomField topic_id={self.topic_id} name={self.name!r}>"
