"""Sample data loaded at startup."""
import logging
from datetime import datetime, timezone

from quiz_api.models.question import Answer, Question
from quiz_api.repositories.question_repository import QuestionRepository


logger = logging.getLogger(__name__)


def sample_questions():
    return [
        Question(
            question_body="What is the capital of France?",
            category="Geography",
            difficulty_level=20,
            qs_checked=True,
            answers=[
                Answer(answer_body="Paris", answer_correct=True, answer_position="a"),
                Answer(answer_body="London", answer_correct=False, answer_position="b"),
                Answer(answer_body="Rome", answer_correct=False, answer_position="c"),
                Answer(answer_body="Berlin", answer_correct=False, answer_position="d"),
            ],
            created_by="System",
            created=datetime.now(timezone.utc),
        )
    ]


def seed_sample_questions(repository: QuestionRepository) -> int:
    """Insert the sample questions into an empty store; return how many were added."""
    if repository.count():
        logger.info("Question store already populated, skipping seed")
        return 0

    questions = sample_questions()
    for question in questions:
        repository.add(question)
    logger.info("Seeded %d sample question(s)", len(questions))
    return len(questions)
