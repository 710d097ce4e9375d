import logging
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app import schemas
from app.crud import crud_question, crud_response, crud_survey
from app.exceptions import InvalidState, NotFound
from app.models import SURVEY_TRANSITIONS, Survey, SurveyStatus
from app.services import views
from app.services.ownership import require_owner

logger = logging.getLogger(__name__)


class SurveyLifecycleManager:
    """Anlegen, Ändern, Veröffentlichen und (weiches) Löschen von Umfragen."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _load(self, survey_id: int) -> Survey:
        survey = await crud_survey.get_survey(self.db, survey_id)
        if survey is None:
            raise NotFound("Survey not found")
        return survey

    async def load_owned(self, survey_id: int, principal: Optional[str], action: str) -> Survey:
        survey = await self._load(survey_id)
        require_owner(survey, principal, action)
        return survey

    @staticmethod
    def _transition(survey: Survey, target: SurveyStatus) -> None:
        current = SurveyStatus(survey.status)
        if (current, target) not in SURVEY_TRANSITIONS:
            raise InvalidState(
                f"Cannot move survey from {current.value} to {target.value}"
            )
        survey.status = target.value

    async def create(
        self, title: str, description: Optional[str], principal: str
    ) -> schemas.SurveyRead:
        survey = await crud_survey.create_survey(self.db, title, description, principal)
        logger.info("Survey %s created by %s", survey.id, principal)
        return await views.survey_view(self.db, survey)

    async def update(
        self, survey_id: int, fields: schemas.SurveyUpdate, principal: Optional[str]
    ) -> schemas.SurveyRead:
        survey = await self.load_owned(survey_id, principal, "update")

        if fields.title is not None:
            survey.title = fields.title
        if fields.description is not None:
            survey.description = fields.description
        if fields.is_active is True:
            self._transition(survey, SurveyStatus.PUBLISHED)
        elif fields.is_active is False and survey.status == SurveyStatus.PUBLISHED.value:
            self._transition(survey, SurveyStatus.DRAFT)

        await self.db.flush()
        logger.info("Survey %s updated by %s", survey.id, principal)
        return await views.survey_view(self.db, survey)

    async def soft_delete(self, survey_id: int, principal: Optional[str]) -> None:
        survey = await self.load_owned(survey_id, principal, "delete")
        self._transition(survey, SurveyStatus.ARCHIVED)
        await self.db.flush()
        logger.info("Survey %s archived by %s", survey.id, principal)

    async def publish(self, survey_id: int, principal: Optional[str]) -> schemas.SurveyRead:
        survey = await self.load_owned(survey_id, principal, "publish")
        if await crud_question.count_questions(self.db, survey.id) == 0:
            raise InvalidState("Cannot publish survey without questions")
        self._transition(survey, SurveyStatus.PUBLISHED)
        await self.db.flush()
        logger.info("Survey %s published by %s", survey.id, principal)
        return await views.survey_view(self.db, survey)

    async def unpublish(self, survey_id: int, principal: Optional[str]) -> schemas.SurveyRead:
        survey = await self.load_owned(survey_id, principal, "unpublish")
        self._transition(survey, SurveyStatus.DRAFT)
        await self.db.flush()
        logger.info("Survey %s unpublished by %s", survey.id, principal)
        return await views.survey_view(self.db, survey)

    async def get(self, survey_id: int) -> schemas.SurveyRead:
        return await views.survey_view(self.db, await self._load(survey_id))

    async def get_active(self, survey_id: int) -> schemas.SurveyRead:
        survey = await crud_survey.get_published_survey(self.db, survey_id)
        if survey is None:
            raise NotFound("Survey not found")
        return await views.survey_view(self.db, survey)

    async def list_public(self) -> List[schemas.SurveyRead]:
        surveys = await crud_survey.list_published_surveys(self.db)
        return await views.surveys_view(self.db, surveys)

    async def list_owned_by(self, principal: str) -> List[schemas.SurveyRead]:
        surveys = await crud_survey.list_surveys_by_owner(self.db, principal)
        return await views.surveys_view(self.db, surveys)

    async def count_owned_by(self, principal: str) -> int:
        return await crud_survey.count_surveys_by_owner(self.db, principal)

    async def stats(self, survey_id: int, principal: Optional[str]) -> schemas.SurveyStats:
        survey = await self.load_owned(survey_id, principal, "view statistics for")
        return schemas.SurveyStats(
            survey_id=survey.id,
            survey_title=survey.title,
            total_responses=await crud_response.count_responses(self.db, survey.id),
            total_questions=await crud_question.count_questions(self.db, survey.id),
            is_active=survey.is_active,
        )
