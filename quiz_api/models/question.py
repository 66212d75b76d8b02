"""Question and answer models."""
from datetime import datetime, timezone
from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.types import TypeDecorator
from quiz_api.db.base import Base


def _utcnow():
    return datetime.now(timezone.utc)


class UTCDateTime(TypeDecorator):
    """Timezone-aware datetime stored as UTC; naive values are read back as UTC.

    SQLite drops the offset on storage, so it is re-attached on load.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is not None and value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value

    def process_result_value(self, value, dialect):
        if value is not None and value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value


class Question(Base):
    """A quiz question owning an ordered set of answers."""

    __tablename__ = "questions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    question_body = Column(Text, nullable=False)
    category = Column(String(100), nullable=False)
    difficulty_level = Column(Integer, nullable=False, default=0)
    qs_checked = Column(Boolean, nullable=False, default=False)
    created_by = Column(String(256))
    created = Column(UTCDateTime, default=_utcnow)

    # Relationships
    answers = relationship(
        "Answer",
        back_populates="question",
        cascade="all, delete-orphan",
        order_by="Answer.id",
    )


class Answer(Base):
    """One answer option; position is a label such as "a".."d"."""

    __tablename__ = "answers"

    id = Column(Integer, primary_key=True, autoincrement=True)
    question_id = Column(Integer, ForeignKey("questions.id", ondelete="CASCADE"), nullable=False, index=True)
    answer_body = Column(Text, nullable=False)
    answer_correct = Column(Boolean, nullable=False, default=False)
    answer_position = Column(String(10), nullable=False)

    # Relationships
    question = relationship("Question", back_populates="answers")
