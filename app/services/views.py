"""Umwandlung der gespeicherten Datensätze in die API-Schemas."""
from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from app import schemas
from app.answer_encoding import decode_selected_options
from app.crud import crud_question, crud_response
from app.models import Answer, Question, Survey, SurveyResponse


async def questions_view(db: AsyncSession, questions: List[Question]) -> List[schemas.QuestionRead]:
    options = await crud_question.list_options_for_questions(db, [q.id for q in questions])
    return [
        schemas.QuestionRead(
            id=q.id,
            survey_id=q.survey_id,
            question_text=q.question_text,
            type=q.type,
            question_order=q.question_order,
            options=[schemas.OptionRead.model_validate(o) for o in options[q.id]],
        )
        for q in questions
    ]


async def question_view(db: AsyncSession, question: Question) -> schemas.QuestionRead:
    return (await questions_view(db, [question]))[0]


async def survey_view(db: AsyncSession, survey: Survey) -> schemas.SurveyRead:
    questions = await crud_question.list_questions_by_survey(db, survey.id)
    return schemas.SurveyRead(
        id=survey.id,
        title=survey.title,
        description=survey.description,
        status=survey.status,
        is_active=survey.is_active,
        created_by=survey.created_by,
        created_at=survey.created_at,
        questions=await questions_view(db, questions),
    )


async def surveys_view(db: AsyncSession, surveys: List[Survey]) -> List[schemas.SurveyRead]:
    return [await survey_view(db, survey) for survey in surveys]


def answer_view(answer: Answer) -> schemas.AnswerRead:
    return schemas.AnswerRead(
        id=answer.id,
        question_id=answer.question_id,
        answer_text=answer.answer_text,
        selected_option_ids=decode_selected_options(answer.selected_options),
    )


async def responses_view(
    db: AsyncSession, responses: List[SurveyResponse]
) -> List[schemas.ResponseRead]:
    answers = await crud_response.list_answers_for_responses(db, [r.id for r in responses])
    return [
        schemas.ResponseRead(
            id=r.id,
            survey_id=r.survey_id,
            respondent_email=r.respondent_email,
            submitted_at=r.submitted_at,
            answers=[answer_view(a) for a in answers[r.id]],
        )
        for r in responses
    ]


async def response_view(db: AsyncSession, response: SurveyResponse) -> schemas.ResponseRead:
    return (await responses_view(db, [response]))[0]
