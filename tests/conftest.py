import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from quiz_api.core.security import HeaderPrincipalResolver, get_principal_resolver
from quiz_api.db.base import Base
from quiz_api.main import app
from quiz_api.repositories.question_repository import (
    InMemoryQuestionRepository,
    SqlAlchemyQuestionRepository,
    get_question_repository,
)
from quiz_api.services.membership import (
    GroupMembershipProvider,
    StaticGroupMembershipProvider,
    get_membership_provider,
)
from quiz_api.services.seed import seed_sample_questions


USER_HEADER = "X-Remote-User"
CONTRIBUTOR = "CONTOSO\\alice"
READER = "CONTOSO\\bob"


class FailingGroupMembershipProvider(GroupMembershipProvider):
    """Simulates an unreachable directory."""

    def __init__(self):
        self.calls = 0

    def get_groups(self, principal_name):
        self.calls += 1
        raise OSError("directory unreachable")


@pytest.fixture
def memberships():
    return StaticGroupMembershipProvider({
        CONTRIBUTOR: ["Users", "quizcontributers"],
        READER: ["Users", "Readers"],
    })


@pytest.fixture
def repository():
    repo = InMemoryQuestionRepository()
    seed_sample_questions(repo)
    return repo


@pytest.fixture
def db_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def sql_repository(db_session):
    repo = SqlAlchemyQuestionRepository(db_session)
    seed_sample_questions(repo)
    return repo


def _client(repo, provider):
    app.dependency_overrides[get_question_repository] = lambda: repo
    app.dependency_overrides[get_membership_provider] = lambda: provider
    app.dependency_overrides[get_principal_resolver] = lambda: HeaderPrincipalResolver(USER_HEADER)
    return TestClient(app)


@pytest.fixture
def client(repository, memberships):
    yield _client(repository, memberships)
    app.dependency_overrides.clear()


@pytest.fixture
def sql_client(sql_repository, memberships):
    yield _client(sql_repository, memberships)
    app.dependency_overrides.clear()


def auth(principal):
    return {USER_HEADER: principal}


@pytest.fixture
def question_payload():
    return {
        "questionBody": "Which planet is known as the Red Planet?",
        "category": "Astronomy",
        "difficultyLevel": 10,
        "qsChecked": False,
        "answers": [
            {"answerBody": "Mars", "answerCorrect": True, "answerPosition": "a"},
            {"answerBody": "Venus", "answerCorrect": False, "answerPosition": "b"},
            {"answerBody": "Jupiter", "answerCorrect": False, "answerPosition": "c"},
            {"answerBody": "Mercury", "answerCorrect": False, "answerPosition": "d"},
        ],
    }
