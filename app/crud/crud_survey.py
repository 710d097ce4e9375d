from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import utcnow
from app.models import Survey, SurveyStatus


async def create_survey(
    db: AsyncSession, title: str, description: Optional[str], created_by: str
) -> Survey:
    db_survey = Survey(
        title=title,
        description=description,
        created_by=created_by,
        status=SurveyStatus.PUBLISHED.value,
        created_at=utcnow(),
    )
    db.add(db_survey)
    await db.flush()  # ID vergeben
    return db_survey


async def get_survey(db: AsyncSession, survey_id: int) -> Optional[Survey]:
    return await db.get(Survey, survey_id)


async def get_published_survey(db: AsyncSession, survey_id: int) -> Optional[Survey]:
    result = await db.execute(
        select(Survey).where(
            Survey.id == survey_id, Survey.status == SurveyStatus.PUBLISHED.value
        )
    )
    return result.scalar_one_or_none()


async def list_published_surveys(db: AsyncSession) -> List[Survey]:
    result = await db.execute(
        select(Survey)
        .where(Survey.status == SurveyStatus.PUBLISHED.value)
        .order_by(Survey.created_at.desc(), Survey.id.desc())
    )
    return list(result.scalars().all())


async def list_surveys_by_owner(db: AsyncSession, owner: str) -> List[Survey]:
    result = await db.execute(
        select(Survey)
        .where(Survey.created_by == owner)
        .order_by(Survey.created_at.desc(), Survey.id.desc())
    )
    return list(result.scalars().all())


async def count_surveys_by_owner(db: AsyncSession, owner: str) -> int:
    result = await db.execute(
        select(func.count(Survey.id)).where(Survey.created_by == owner)
    )
    return result.scalar_one()
