from typing import List

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, status

from app import schemas
from app.api.deps import get_collector, get_current_principal
from app.core import config
from app.crud import crud_survey
from app.notifier import Notifier, deliver_in_background, get_notifier, render_response_receipt
from app.services import ResponseCollector

router = APIRouter()
public_router = APIRouter()


async def schedule_receipt(
    background_tasks: BackgroundTasks,
    collector: ResponseCollector,
    notifier: Notifier,
    response: schemas.ResponseRead,
) -> None:
    """Eingangsbestätigung an den Teilnehmer, nur wenn NOTIFY_RESPONDENTS gesetzt ist."""
    if not config.NOTIFY_RESPONDENTS:
        return
    survey = await crud_survey.get_survey(collector.db, response.survey_id)
    background_tasks.add_task(
        deliver_in_background,
        notifier,
        response.respondent_email,
        render_response_receipt(survey.title, response.submitted_at),
    )


# --- Öffentliche Endpunkte (ohne Anmeldung, Zugriff nur über Token) ---


@public_router.get("/surveys/{token}", response_model=schemas.SurveyRead)
async def get_public_survey(token: str, collector: ResponseCollector = Depends(get_collector)):
    return await collector.tokens.public_survey(token)


@public_router.post(
    "/surveys/{token}/responses",
    response_model=schemas.ResponseRead,
    status_code=status.HTTP_201_CREATED,
)
async def submit_public_response(
    token: str,
    response_in: schemas.ResponseSubmit,
    background_tasks: BackgroundTasks,
    collector: ResponseCollector = Depends(get_collector),
    notifier: Notifier = Depends(get_notifier),
):
    response = await collector.submit_via_token(
        token, response_in.respondent_email, response_in.answers
    )
    await schedule_receipt(background_tasks, collector, notifier, response)
    return response


# --- Antworten (angemeldete Aufrufer) ---


@router.post("/submit", response_model=schemas.ResponseRead, status_code=status.HTTP_201_CREATED)
async def submit_response(
    response_in: schemas.SurveyResponseSubmit,
    background_tasks: BackgroundTasks,
    principal: str = Depends(get_current_principal),
    collector: ResponseCollector = Depends(get_collector),
    notifier: Notifier = Depends(get_notifier),
):
    response = await collector.submit(
        response_in.survey_id, response_in.respondent_email, response_in.answers
    )
    await schedule_receipt(background_tasks, collector, notifier, response)
    return response


@router.get("/survey/{survey_id}", response_model=List[schemas.ResponseRead])
async def list_responses(
    survey_id: int,
    principal: str = Depends(get_current_principal),
    collector: ResponseCollector = Depends(get_collector),
):
    return await collector.list_by_survey(survey_id, principal)


@router.get("/survey/{survey_id}/count", response_model=schemas.CountResponse)
async def count_responses(survey_id: int, collector: ResponseCollector = Depends(get_collector)):
    return schemas.CountResponse(count=await collector.count(survey_id))


@router.get("/question/{question_id}/answers", response_model=List[schemas.AnswerRead])
async def answers_for_question(
    question_id: int,
    principal: str = Depends(get_current_principal),
    collector: ResponseCollector = Depends(get_collector),
):
    return await collector.answers_for_question(question_id, principal)


@router.get("/{response_id}", response_model=schemas.ResponseRead)
async def get_response(
    response_id: int,
    principal: str = Depends(get_current_principal),
    collector: ResponseCollector = Depends(get_collector),
):
    response = await collector.get_by_id(response_id, principal)
    if response is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Response not found")
    return response
