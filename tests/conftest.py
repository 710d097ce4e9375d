"""Gemeinsame Fixtures: frische In-Memory-Datenbank pro Test."""
import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app import models  # noqa: F401  registriert die Tabellen
from app.database import Base, enable_sqlite_savepoints
from app.schemas import OptionCreate, QuestionCreate
from app.services import (
    AccessTokenManager,
    QuestionEditor,
    ResponseCollector,
    SurveyLifecycleManager,
)


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool
    )
    enable_sqlite_savepoints(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def session(engine):
    session_maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_maker() as session:
        yield session


@pytest.fixture
def lifecycle(session):
    return SurveyLifecycleManager(session)


@pytest.fixture
def editor(session):
    return QuestionEditor(session)


@pytest.fixture
def tokens(session):
    return AccessTokenManager(session)


@pytest.fixture
def collector(session, tokens):
    return ResponseCollector(session, tokens)


def coffee_question(**overrides):
    data = dict(
        question_text="Do you drink coffee?",
        type="SINGLE_CHOICE",
        options=[OptionCreate(option_text="Yes"), OptionCreate(option_text="No")],
    )
    data.update(overrides)
    return QuestionCreate(**data)


@pytest.fixture
async def coffee_survey(lifecycle, editor):
    """Umfrage von alice mit einer Single-Choice-Frage, veröffentlicht."""
    survey = await lifecycle.create("Coffee Survey", "Morning habits", "alice")
    question = await editor.add_question(survey.id, coffee_question(), "alice")
    survey = await lifecycle.publish(survey.id, "alice")
    return survey, question
