from typing import Dict, Iterable, List, Optional

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.models import Answer, Question, QuestionOption


async def create_question(
    db: AsyncSession, survey_id: int, question_text: str, type_: str, order: int
) -> Question:
    db_question = Question(
        survey_id=survey_id,
        question_text=question_text,
        type=type_,
        question_order=order,
    )
    db.add(db_question)
    await db.flush()
    return db_question


async def get_question(db: AsyncSession, question_id: int) -> Optional[Question]:
    return await db.get(Question, question_id)


async def count_questions(db: AsyncSession, survey_id: int) -> int:
    result = await db.execute(
        select(func.count(Question.id)).where(Question.survey_id == survey_id)
    )
    return result.scalar_one()


async def list_questions_by_survey(db: AsyncSession, survey_id: int) -> List[Question]:
    result = await db.execute(
        select(Question)
        .where(Question.survey_id == survey_id)
        .order_by(Question.question_order.asc(), Question.id.asc())
    )
    return list(result.scalars().all())


async def create_options(
    db: AsyncSession, question_id: int, option_texts: Iterable[str]
) -> List[QuestionOption]:
    # Reihenfolge der Eingabe bleibt über die IDs erhalten
    created = []
    for text in option_texts:
        db_option = QuestionOption(question_id=question_id, option_text=text)
        db.add(db_option)
        await db.flush()
        created.append(db_option)
    return created


async def delete_options(db: AsyncSession, question_id: int) -> None:
    await db.execute(
        delete(QuestionOption).where(QuestionOption.question_id == question_id)
    )


async def list_options_for_questions(
    db: AsyncSession, question_ids: List[int]
) -> Dict[int, List[QuestionOption]]:
    options_by_question: Dict[int, List[QuestionOption]] = {qid: [] for qid in question_ids}
    if not question_ids:
        return options_by_question
    result = await db.execute(
        select(QuestionOption)
        .where(QuestionOption.question_id.in_(question_ids))
        .order_by(QuestionOption.id.asc())
    )
    for option in result.scalars().all():
        options_by_question[option.question_id].append(option)
    return options_by_question


async def delete_question(db: AsyncSession, db_question: Question) -> None:
    """Löscht Optionen und Frage; bereits abgegebene Antworten werden nur entkoppelt."""
    await delete_options(db, db_question.id)
    await db.execute(
        update(Answer)
        .where(Answer.question_id == db_question.id)
        .values(question_id=None)
    )
    await db.delete(db_question)
    await db.flush()
