from typing import Dict, List, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import utcnow
from app.models import Answer, SurveyResponse


async def response_exists(db: AsyncSession, survey_id: int, respondent_email: str) -> bool:
    result = await db.execute(
        select(SurveyResponse.id).where(
            SurveyResponse.survey_id == survey_id,
            SurveyResponse.respondent_email == respondent_email,
        )
    )
    return result.first() is not None


async def create_response(
    db: AsyncSession, survey_id: int, respondent_email: str
) -> SurveyResponse:
    """Flush löst bei doppeltem (survey_id, respondent_email) einen IntegrityError aus."""
    db_response = SurveyResponse(
        survey_id=survey_id,
        respondent_email=respondent_email,
        submitted_at=utcnow(),
    )
    db.add(db_response)
    await db.flush()
    return db_response


async def create_answer(
    db: AsyncSession,
    response_id: int,
    question_id: int,
    answer_text: Optional[str],
    selected_options: Optional[str],
) -> Answer:
    db_answer = Answer(
        survey_response_id=response_id,
        question_id=question_id,
        answer_text=answer_text,
        selected_options=selected_options,
    )
    db.add(db_answer)
    await db.flush()
    return db_answer


async def get_response(db: AsyncSession, response_id: int) -> Optional[SurveyResponse]:
    return await db.get(SurveyResponse, response_id)


async def list_responses_by_survey(db: AsyncSession, survey_id: int) -> List[SurveyResponse]:
    result = await db.execute(
        select(SurveyResponse)
        .where(SurveyResponse.survey_id == survey_id)
        .order_by(SurveyResponse.submitted_at.desc(), SurveyResponse.id.desc())
    )
    return list(result.scalars().all())


async def count_responses(db: AsyncSession, survey_id: int) -> int:
    result = await db.execute(
        select(func.count(SurveyResponse.id)).where(SurveyResponse.survey_id == survey_id)
    )
    return result.scalar_one()


async def list_answers_for_responses(
    db: AsyncSession, response_ids: List[int]
) -> Dict[int, List[Answer]]:
    answers_by_response: Dict[int, List[Answer]] = {rid: [] for rid in response_ids}
    if not response_ids:
        return answers_by_response
    result = await db.execute(
        select(Answer)
        .where(Answer.survey_response_id.in_(response_ids))
        .order_by(Answer.id.asc())
    )
    for answer in result.scalars().all():
        answers_by_response[answer.survey_response_id].append(answer)
    return answers_by_response


async def list_answers_by_question(db: AsyncSession, question_id: int) -> List[Answer]:
    result = await db.execute(
        select(Answer).where(Answer.question_id == question_id).order_by(Answer.id.asc())
    )
    return list(result.scalars().all())
