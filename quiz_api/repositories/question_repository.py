"""Question repository backends."""
import itertools
import threading
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Iterator, List, Optional

from sqlalchemy.orm import Session, selectinload

from quiz_api.core.config import settings
from quiz_api.db.sessions import get_db
from quiz_api.models.question import Question


class QuestionRepository(ABC):
    """Storage for questions and their nested answers."""

    @abstractmethod
    def add(self, question: Question) -> Question:
        """Persist a new question, assigning ids to it and its answers."""

    @abstractmethod
    def list(self) -> List[Question]:
        """Return every question in storage order."""

    @abstractmethod
    def get(self, question_id: int) -> Optional[Question]:
        """Return the question with ``question_id`` or None."""

    @abstractmethod
    def count(self) -> int:
        """Return the number of stored questions."""


class InMemoryQuestionRepository(QuestionRepository):
    """Process-local store used for development and tests."""

    def __init__(self):
        self._questions: List[Question] = []
        self._question_ids = itertools.count(1)
        self._answer_ids = itertools.count(1)
        self._lock = threading.Lock()

    def add(self, question: Question) -> Question:
        with self._lock:
            question.id = next(self._question_ids)
            for answer in question.answers:
                answer.id = next(self._answer_ids)
                answer.question_id = question.id
            self._questions.append(question)
        return question

    def list(self) -> List[Question]:
        with self._lock:
            return list(self._questions)

    def get(self, question_id: int) -> Optional[Question]:
        with self._lock:
            for question in self._questions:
                if question.id == question_id:
                    return question
        return None

    def count(self) -> int:
        with self._lock:
            return len(self._questions)


class SqlAlchemyQuestionRepository(QuestionRepository):
    """Repository over a SQLAlchemy session."""

    def __init__(self, db: Session):
        self.db = db

    def add(self, question: Question) -> Question:
        self.db.add(question)
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(question)
        return question

    def list(self) -> List[Question]:
        return (
            self.db.query(Question)
            .options(selectinload(Question.answers))
            .order_by(Question.id)
            .all()
        )

    def get(self, question_id: int) -> Optional[Question]:
        return (
            self.db.query(Question)
            .options(selectinload(Question.answers))
            .filter(Question.id == question_id)
            .first()
        )

    def count(self) -> int:
        return self.db.query(Question).count()


_memory_repository = InMemoryQuestionRepository()


@contextmanager
def question_repository_scope() -> Iterator[QuestionRepository]:
    """Yield the repository selected by STORE_BACKEND; a session is opened only for sqlalchemy."""
    if settings.STORE_BACKEND == "memory":
        yield _memory_repository
        return
    if settings.STORE_BACKEND != "sqlalchemy":
        raise RuntimeError(f"Unknown STORE_BACKEND: {settings.STORE_BACKEND!r}")
    with contextmanager(get_db)() as db:
        yield SqlAlchemyQuestionRepository(db)


def get_question_repository() -> Iterator[QuestionRepository]:
    """Dependency wrapping question_repository_scope for the request lifetime."""
    with question_repository_scope() as repository:
        yield repository
