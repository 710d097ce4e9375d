import logging
from datetime import datetime
from typing import Iterable, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app import schemas
from app.answer_encoding import encode_selected_options
from app.crud import crud_question, crud_response, crud_survey
from app.exceptions import Conflict, NotFound
from app.services import views
from app.services.ownership import require_owner
from app.services.tokens import AccessTokenManager

logger = logging.getLogger(__name__)


class ResponseCollector:
    """Einziger Schreiber von Antworten. Pro (Umfrage, E-Mail) genau eine Teilnahme."""

    def __init__(self, db: AsyncSession, tokens: Optional[AccessTokenManager] = None):
        self.db = db
        self.tokens = tokens or AccessTokenManager(db)

    async def submit(
        self,
        survey_id: int,
        respondent_email: str,
        answers: Optional[Iterable[schemas.AnswerCreate]] = None,
    ) -> schemas.ResponseRead:
        # inaktiv und nicht vorhanden sind für den Aufrufer nicht unterscheidbar
        survey = await crud_survey.get_published_survey(self.db, survey_id)
        if survey is None:
            raise NotFound("Survey not found or inactive")

        respondent_email = respondent_email.strip()
        if await crud_response.response_exists(self.db, survey.id, respondent_email):
            logger.warning("Duplicate submission for survey %s", survey.id)
            raise Conflict("Response already submitted for this email")

        try:
            response = await crud_response.create_response(self.db, survey.id, respondent_email)
        except IntegrityError as e:
            raise Conflict("Response already submitted for this email") from e

        question_ids = {
            q.id for q in await crud_question.list_questions_by_survey(self.db, survey.id)
        }
        stored = 0
        for answer in answers or []:
            if answer.question_id not in question_ids:
                continue
            await crud_response.create_answer(
                self.db,
                response.id,
                answer.question_id,
                answer.answer_text,
                encode_selected_options(answer.selected_option_ids),
            )
            stored += 1

        logger.info(
            "Response %s submitted for survey %s with %d answers", response.id, survey.id, stored
        )
        return await views.response_view(self.db, response)

    async def submit_via_token(
        self,
        token: str,
        respondent_email: str,
        answers: Optional[Iterable[schemas.AnswerCreate]] = None,
        now: Optional[datetime] = None,
    ) -> schemas.ResponseRead:
        survey = await self.tokens.validate(token, now)
        return await self.submit(survey.id, respondent_email, answers)

    async def list_by_survey(
        self, survey_id: int, principal: Optional[str]
    ) -> List[schemas.ResponseRead]:
        survey = await crud_survey.get_survey(self.db, survey_id)
        if survey is None:
            raise NotFound("Survey not found")
        require_owner(survey, principal, "view responses for")
        responses = await crud_response.list_responses_by_survey(self.db, survey.id)
        return await views.responses_view(self.db, responses)

    async def get_by_id(
        self, response_id: int, principal: Optional[str]
    ) -> Optional[schemas.ResponseRead]:
        response = await crud_response.get_response(self.db, response_id)
        if response is None:
            return None
        survey = await crud_survey.get_survey(self.db, response.survey_id)
        require_owner(survey, principal, "view responses for")
        return await views.response_view(self.db, response)

    async def count(self, survey_id: int) -> int:
        return await crud_response.count_responses(self.db, survey_id)

    async def answers_for_question(
        self, question_id: int, principal: Optional[str]
    ) -> List[schemas.AnswerRead]:
        question = await crud_question.get_question(self.db, question_id)
        if question is None:
            raise NotFound("Question not found")
        survey = await crud_survey.get_survey(self.db, question.survey_id)
        require_owner(survey, principal, "view answers for")
        answers = await crud_response.list_answers_by_question(self.db, question.id)
        return [views.answer_view(a) for a in answers]
