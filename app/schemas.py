from pydantic import BaseModel, Field, ConfigDict, field_validator
from typing import List, Optional
from datetime import datetime


# --- Optionen ---


class OptionCreate(BaseModel):
    option_text: str = Field(..., min_length=1)


class OptionRead(BaseModel):
    id: int
    option_text: str

    model_config = ConfigDict(from_attributes=True)


# --- Fragen ---


class QuestionCreate(BaseModel):
    question_text: str = Field(..., min_length=1)
    type: str = Field(..., min_length=1)  # offener Tag, z.B. "SINGLE_CHOICE"
    question_order: Optional[int] = None
    options: List[OptionCreate] = Field(default_factory=list)


class QuestionUpdate(BaseModel):
    question_text: str = Field(..., min_length=1)
    type: str = Field(..., min_length=1)
    question_order: Optional[int] = None
    # None = Optionen bleiben unverändert, Liste (auch leer) = ersetzen
    options: Optional[List[OptionCreate]] = None


class QuestionRead(BaseModel):
    id: int
    survey_id: int
    question_text: str
    type: str
    question_order: int
    options: List[OptionRead] = []

    model_config = ConfigDict(from_attributes=True)


# --- Umfragen ---


class SurveyCreate(BaseModel):
    title: str = Field(..., min_length=1)
    description: Optional[str] = None


class SurveyUpdate(BaseModel):
    """Partielles Update: fehlende oder null-Felder bleiben unverändert."""

    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    is_active: Optional[bool] = None


class SurveyRead(BaseModel):
    id: int
    title: str
    description: Optional[str] = None
    status: str
    is_active: bool
    created_by: str
    created_at: datetime
    questions: List[QuestionRead] = []

    model_config = ConfigDict(from_attributes=True)


class SurveyStats(BaseModel):
    survey_id: int
    survey_title: str
    total_responses: int
    total_questions: int
    is_active: bool


# --- Zugangstokens ---


class TokenRead(BaseModel):
    token: str
    survey_id: int
    is_active: bool
    created_at: datetime
    expires_at: datetime

    model_config = ConfigDict(from_attributes=True)


# --- Antworten ---


class AnswerCreate(BaseModel):
    question_id: int
    answer_text: Optional[str] = None
    selected_option_ids: Optional[List[int]] = None


class AnswerRead(BaseModel):
    id: int
    question_id: Optional[int] = None
    answer_text: Optional[str] = None
    selected_option_ids: List[int] = []


class ResponseSubmit(BaseModel):
    respondent_email: str = Field(..., min_length=1)
    answers: List[AnswerCreate] = Field(default_factory=list)

    @field_validator("respondent_email")
    @classmethod
    def strip_email(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("respondent_email must not be blank")
        return v


class SurveyResponseSubmit(ResponseSubmit):
    survey_id: int


class ResponseRead(BaseModel):
    id: int
    survey_id: int
    respondent_email: str
    submitted_at: datetime
    answers: List[AnswerRead] = []


class CountResponse(BaseModel):
    count: int
