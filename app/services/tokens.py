import logging
import secrets
from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app import schemas
from app.core.config import TOKEN_MAX_ATTEMPTS, TOKEN_TTL_DAYS
from app.crud import crud_survey, crud_token
from app.database import utcnow
from app.exceptions import Conflict, InvalidOrExpired, InvalidState, NotFound
from app.models import Survey
from app.services import views
from app.services.ownership import require_owner

logger = logging.getLogger(__name__)


def generate_token_string() -> str:
    return secrets.token_hex(16)


class AccessTokenManager:
    """Öffentliche Zugangstokens: ausgeben, rotieren, prüfen, widerrufen."""

    def __init__(self, db: AsyncSession, ttl_days: int = TOKEN_TTL_DAYS):
        self.db = db
        self.ttl = timedelta(days=ttl_days)

    async def _owned_active_survey(self, survey_id: int, principal: Optional[str]) -> Survey:
        survey = await crud_survey.get_survey(self.db, survey_id)
        if survey is None:
            raise NotFound("Survey not found")
        require_owner(survey, principal, "generate a token for")
        if not survey.is_active:
            raise InvalidState("Cannot generate token for inactive survey")
        return survey

    async def _create_unique(
        self, survey_id: int, now: datetime, expires_at: Optional[datetime]
    ) -> schemas.TokenRead:
        for attempt in range(1, TOKEN_MAX_ATTEMPTS + 1):
            token = generate_token_string()
            if await crud_token.token_exists(self.db, token):
                continue
            try:
                # Savepoint: eine Kollision verwirft nur diesen Insert
                async with self.db.begin_nested():
                    db_token = await crud_token.create_token(
                        self.db, survey_id, token, expires_at or now + self.ttl, created_at=now
                    )
            except IntegrityError:
                logger.warning(
                    "Token collision for survey %s on attempt %s, drawing a new one",
                    survey_id,
                    attempt,
                )
                continue
            logger.info("Issued token for survey %s, expires %s", survey_id, db_token.expires_at)
            return schemas.TokenRead.model_validate(db_token)

        raise Conflict("Could not generate a unique survey token")

    async def issue(
        self,
        survey_id: int,
        principal: Optional[str],
        expires_at: Optional[datetime] = None,
        now: Optional[datetime] = None,
    ) -> schemas.TokenRead:
        now = now or utcnow()
        survey = await self._owned_active_survey(survey_id, principal)

        existing = await crud_token.find_reusable_token(self.db, survey.id, now)
        if existing is not None:
            return schemas.TokenRead.model_validate(existing)

        return await self._create_unique(survey.id, now, expires_at)

    async def rotate(
        self,
        survey_id: int,
        principal: Optional[str],
        expires_at: Optional[datetime] = None,
        now: Optional[datetime] = None,
    ) -> schemas.TokenRead:
        now = now or utcnow()
        survey = await self._owned_active_survey(survey_id, principal)
        await crud_token.deactivate_tokens_for_survey(self.db, survey.id)
        logger.info("Active tokens of survey %s deactivated for rotation", survey.id)
        return await self._create_unique(survey.id, now, expires_at)

    async def validate(self, token: str, now: Optional[datetime] = None) -> Survey:
        """Liefert die Umfrage zum Token. Ob sie noch aktiv ist, prüft der Aufrufer."""
        db_token = await crud_token.find_valid_token(self.db, token, now or utcnow())
        if db_token is None:
            raise InvalidOrExpired()
        survey = await crud_survey.get_survey(self.db, db_token.survey_id)
        if survey is None:
            raise InvalidOrExpired()
        return survey

    async def public_survey(self, token: str, now: Optional[datetime] = None) -> schemas.SurveyRead:
        survey = await self.validate(token, now)
        if not survey.is_active:
            raise NotFound("Survey not found or inactive")
        return await views.survey_view(self.db, survey)

    async def revoke(self, token: str, principal: Optional[str]) -> None:
        db_token = await crud_token.get_token(self.db, token)
        if db_token is None:
            raise NotFound("Token not found")
        survey = await crud_survey.get_survey(self.db, db_token.survey_id)
        require_owner(survey, principal, "deactivate a token of")
        if db_token.is_active:
            db_token.is_active = False
            await self.db.flush()
            logger.info("Token for survey %s revoked", survey.id)
