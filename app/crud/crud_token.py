from datetime import datetime
from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import utcnow
from app.models import SurveyToken


async def token_exists(db: AsyncSession, token: str) -> bool:
    result = await db.execute(select(SurveyToken.id).where(SurveyToken.token == token))
    return result.first() is not None


async def get_token(db: AsyncSession, token: str) -> Optional[SurveyToken]:
    result = await db.execute(select(SurveyToken).where(SurveyToken.token == token))
    return result.scalar_one_or_none()


async def find_valid_token(
    db: AsyncSession, token: str, now: datetime
) -> Optional[SurveyToken]:
    result = await db.execute(
        select(SurveyToken).where(
            SurveyToken.token == token,
            SurveyToken.is_active.is_(True),
            SurveyToken.expires_at > now,
        )
    )
    return result.scalar_one_or_none()


async def find_reusable_token(
    db: AsyncSession, survey_id: int, now: datetime
) -> Optional[SurveyToken]:
    result = await db.execute(
        select(SurveyToken)
        .where(
            SurveyToken.survey_id == survey_id,
            SurveyToken.is_active.is_(True),
            SurveyToken.expires_at > now,
        )
        .order_by(SurveyToken.created_at.desc(), SurveyToken.id.desc())
        .limit(1)
    )
    return result.scalar_one_or_none()


async def create_token(
    db: AsyncSession,
    survey_id: int,
    token: str,
    expires_at: datetime,
    created_at: Optional[datetime] = None,
) -> SurveyToken:
    db_token = SurveyToken(
        token=token,
        survey_id=survey_id,
        is_active=True,
        created_at=created_at or utcnow(),
        expires_at=expires_at,
    )
    db.add(db_token)
    await db.flush()
    return db_token


async def deactivate_tokens_for_survey(db: AsyncSession, survey_id: int) -> None:
    await db.execute(
        update(SurveyToken)
        .where(SurveyToken.survey_id == survey_id, SurveyToken.is_active.is_(True))
        .values(is_active=False)
        .execution_options(synchronize_session="fetch")
    )
