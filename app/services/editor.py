import logging
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app import schemas
from app.crud import crud_question, crud_survey
from app.exceptions import NotFound
from app.models import Question, Survey
from app.services import views
from app.services.ownership import require_owner

logger = logging.getLogger(__name__)


class QuestionEditor:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def _owned_question(
        self, question_id: int, principal: Optional[str], action: str
    ) -> Question:
        question = await crud_question.get_question(self.db, question_id)
        if question is None:
            raise NotFound("Question not found")
        survey: Survey = await crud_survey.get_survey(self.db, question.survey_id)
        require_owner(survey, principal, action)
        return question

    async def add_question(
        self, survey_id: int, data: schemas.QuestionCreate, principal: Optional[str]
    ) -> schemas.QuestionRead:
        survey = await crud_survey.get_survey(self.db, survey_id)
        if survey is None:
            raise NotFound("Survey not found")
        require_owner(survey, principal, "add questions to")

        order = data.question_order
        if order is None:
            # Lücken nach Löschungen bleiben bestehen
            order = await crud_question.count_questions(self.db, survey_id) + 1

        question = await crud_question.create_question(
            self.db, survey_id, data.question_text, data.type, order
        )
        await crud_question.create_options(
            self.db, question.id, [o.option_text for o in data.options]
        )
        logger.info("Question %s added to survey %s (order %s)", question.id, survey_id, order)
        return await views.question_view(self.db, question)

    async def update_question(
        self, question_id: int, data: schemas.QuestionUpdate, principal: Optional[str]
    ) -> schemas.QuestionRead:
        question = await self._owned_question(question_id, principal, "update questions of")

        question.question_text = data.question_text
        question.type = data.type
        if data.question_order is not None:
            question.question_order = data.question_order

        if data.options is not None:
            await crud_question.delete_options(self.db, question.id)
            await crud_question.create_options(
                self.db, question.id, [o.option_text for o in data.options]
            )

        await self.db.flush()
        logger.info("Question %s updated", question.id)
        return await views.question_view(self.db, question)

    async def delete_question(self, question_id: int, principal: Optional[str]) -> None:
        question = await self._owned_question(question_id, principal, "delete questions of")
        await crud_question.delete_question(self.db, question)
        logger.info("Question %s deleted", question_id)

    async def add_option(
        self, question_id: int, data: schemas.OptionCreate, principal: Optional[str]
    ) -> schemas.OptionRead:
        question = await self._owned_question(question_id, principal, "add options to")
        (option,) = await crud_question.create_options(self.db, question.id, [data.option_text])
        return schemas.OptionRead.model_validate(option)

    async def get_question(self, question_id: int) -> schemas.QuestionRead:
        question = await crud_question.get_question(self.db, question_id)
        if question is None:
            raise NotFound("Question not found")
        return await views.question_view(self.db, question)

    async def list_by_survey(self, survey_id: int) -> List[schemas.QuestionRead]:
        questions = await crud_question.list_questions_by_survey(self.db, survey_id)
        return await views.questions_view(self.db, questions)
