"""Database models."""
from quiz_api.models.question import Question, Answer

__all__ = [
    "Question",
    "Answer",
]
