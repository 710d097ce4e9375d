import enum

from sqlalchemy import (
    Column,
    Integer,
    String,
    Text,
    DateTime,
    Boolean,
    ForeignKey,
    Index,
    UniqueConstraint,
)

from .database import Base, utcnow


class SurveyStatus(str, enum.Enum):
    DRAFT = "draft"
    PUBLISHED = "published"
    ARCHIVED = "archived"


# Erlaubte Übergänge: (von, nach). Alles andere lehnt _transition mit InvalidState ab.
SURVEY_TRANSITIONS = {
    (SurveyStatus.DRAFT, SurveyStatus.PUBLISHED),
    (SurveyStatus.DRAFT, SurveyStatus.ARCHIVED),
    (SurveyStatus.PUBLISHED, SurveyStatus.PUBLISHED),
    (SurveyStatus.PUBLISHED, SurveyStatus.DRAFT),
    (SurveyStatus.PUBLISHED, SurveyStatus.ARCHIVED),
    (SurveyStatus.ARCHIVED, SurveyStatus.PUBLISHED),
    (SurveyStatus.ARCHIVED, SurveyStatus.ARCHIVED),
}


class Survey(Base):
    __tablename__ = "surveys"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    created_by = Column(String(255), nullable=False, index=True)  # Principal-Name
    status = Column(String(16), nullable=False, default=SurveyStatus.PUBLISHED.value)
    created_at = Column(DateTime, nullable=False, default=utcnow)

    @property
    def is_active(self) -> bool:
        return self.status == SurveyStatus.PUBLISHED.value

    def __repr__(self):
        return f"<Survey(id={self.id}, status={self.status})>"


class Question(Base):
    __tablename__ = "questions"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    survey_id = Column(Integer, ForeignKey("surveys.id"), nullable=False, index=True)
    question_text = Column(Text, nullable=False)
    type = Column(String(50), nullable=False)  # TEXT, SINGLE_CHOICE, MULTIPLE_CHOICE, ...
    question_order = Column(Integer, nullable=False)

    def __repr__(self):
        return f"<Question(id={self.id}, survey_id={self.survey_id}, order={self.question_order})>"


class QuestionOption(Base):
    __tablename__ = "question_options"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    question_id = Column(
        Integer, ForeignKey("questions.id", ondelete="CASCADE"), nullable=False, index=True
    )
    option_text = Column(String(255), nullable=False)


class SurveyToken(Base):
    __tablename__ = "survey_tokens"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    token = Column(String(64), nullable=False, unique=True, index=True)
    survey_id = Column(Integer, ForeignKey("surveys.id"), nullable=False, index=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    expires_at = Column(DateTime, nullable=False)


class SurveyResponse(Base):
    __tablename__ = "survey_responses"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    survey_id = Column(Integer, ForeignKey("surveys.id"), nullable=False, index=True)
    respondent_email = Column(String(255), nullable=False)
    submitted_at = Column(DateTime, nullable=False, default=utcnow)

    __table_args__ = (
        UniqueConstraint(
            "survey_id", "respondent_email", name="uq_survey_responses_survey_email"
        ),
    )


class Answer(Base):
    __tablename__ = "answers"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    survey_response_id = Column(
        Integer,
        ForeignKey("survey_responses.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    # NULL, sobald die Frage gelöscht wurde; die Antwort bleibt erhalten
    question_id = Column(
        Integer, ForeignKey("questions.id", ondelete="SET NULL"), nullable=True
    )
    answer_text = Column(Text, nullable=True)
    selected_options = Column(String(1024), nullable=True)  # "3,7,9"

    __table_args__ = (Index("idx_answers_question", "question_id"),)
