"""Question routes."""
import logging
from datetime import datetime, timezone
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Response, status
from pydantic import BaseModel
from pydantic.alias_generators import to_camel

from quiz_api.core.security import get_current_principal, require_contributor
from quiz_api.models.question import Answer, Question
from quiz_api.repositories.question_repository import (
    QuestionRepository,
    get_question_repository,
)


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/questions", tags=["Questions"])


# Request/Response schemas
class CamelModel(BaseModel):
    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class AnswerCreateRequest(CamelModel):
    answer_body: str
    answer_correct: bool = False
    answer_position: str


class QuestionCreateRequest(CamelModel):
    question_body: str
    category: str
    difficulty_level: int = 0
    qs_checked: bool = False
    answers: List[AnswerCreateRequest] = []


class AnswerResponse(CamelModel):
    id: int
    answer_body: str
    answer_correct: bool
    answer_position: str
    question_id: int


class QuestionResponse(CamelModel):
    id: int
    question_body: str
    category: str
    difficulty_level: int
    qs_checked: bool
    answers: List[AnswerResponse]
    created_by: Optional[str]
    created: Optional[datetime]


@router.post(
    "",
    response_model=QuestionResponse,
    status_code=status.HTTP_201_CREATED,
    name="CreateQuestion",
)
def create_question(
    request: QuestionCreateRequest,
    response: Response,
    principal: str = Depends(require_contributor),
    repository: QuestionRepository = Depends(get_question_repository),
):
    """
    Create a question with its answers.

    - Requires membership of the contributor group
    - Author and creation time are set by the server
    """
    question = Question(
        question_body=request.question_body,
        category=request.category,
        difficulty_level=request.difficulty_level,
        qs_checked=request.qs_checked,
        answers=[
            Answer(
                answer_body=answer.answer_body,
                answer_correct=answer.answer_correct,
                answer_position=answer.answer_position,
            )
            for answer in request.answers
        ],
        created_by=principal,
        created=datetime.now(timezone.utc),
    )
    question = repository.add(question)
    logger.info("Question %s created by %s", question.id, principal)

    response.headers["Location"] = f"{router.prefix}/{question.id}"
    return QuestionResponse.model_validate(question)


@router.get("", response_model=List[QuestionResponse], name="GetQuestions")
def list_questions(
    principal: str = Depends(get_current_principal),
    repository: QuestionRepository = Depends(get_question_repository),
):
    """List all questions with their answers, oldest first."""
    return [QuestionResponse.model_validate(question) for question in repository.list()]


@router.get("/{question_id}", response_model=QuestionResponse, name="GetQuestionById")
def get_question(
    question_id: int,
    principal: str = Depends(get_current_principal),
    repository: QuestionRepository = Depends(get_question_repository),
):
    question = repository.get(question_id)
    if question is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Question not found"
        )
    return QuestionResponse.model_validate(question)
