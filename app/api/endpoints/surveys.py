from typing import List

from fastapi import APIRouter, Depends, Response, status

from app import schemas
from app.api.deps import get_current_principal, get_lifecycle
from app.services import SurveyLifecycleManager

router = APIRouter()


@router.get("/", response_model=List[schemas.SurveyRead])
async def list_public_surveys(lifecycle: SurveyLifecycleManager = Depends(get_lifecycle)):
    """Alle veröffentlichten Umfragen, neueste zuerst."""
    return await lifecycle.list_public()


@router.get("/my", response_model=List[schemas.SurveyRead])
async def list_my_surveys(
    principal: str = Depends(get_current_principal),
    lifecycle: SurveyLifecycleManager = Depends(get_lifecycle),
):
    return await lifecycle.list_owned_by(principal)


@router.get("/count", response_model=schemas.CountResponse)
async def count_my_surveys(
    principal: str = Depends(get_current_principal),
    lifecycle: SurveyLifecycleManager = Depends(get_lifecycle),
):
    return schemas.CountResponse(count=await lifecycle.count_owned_by(principal))


@router.get("/{survey_id}", response_model=schemas.SurveyRead)
async def get_survey(survey_id: int, lifecycle: SurveyLifecycleManager = Depends(get_lifecycle)):
    return await lifecycle.get(survey_id)


@router.get("/{survey_id}/public", response_model=schemas.SurveyRead)
async def get_active_survey(
    survey_id: int, lifecycle: SurveyLifecycleManager = Depends(get_lifecycle)
):
    return await lifecycle.get_active(survey_id)


@router.post("/", response_model=schemas.SurveyRead, status_code=status.HTTP_201_CREATED)
async def create_survey(
    survey_in: schemas.SurveyCreate,
    principal: str = Depends(get_current_principal),
    lifecycle: SurveyLifecycleManager = Depends(get_lifecycle),
):
    return await lifecycle.create(survey_in.title, survey_in.description, principal)


@router.put("/{survey_id}", response_model=schemas.SurveyRead)
async def update_survey(
    survey_id: int,
    survey_in: schemas.SurveyUpdate,
    principal: str = Depends(get_current_principal),
    lifecycle: SurveyLifecycleManager = Depends(get_lifecycle),
):
    return await lifecycle.update(survey_id, survey_in, principal)


@router.delete("/{survey_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_survey(
    survey_id: int,
    principal: str = Depends(get_current_principal),
    lifecycle: SurveyLifecycleManager = Depends(get_lifecycle),
):
    await lifecycle.soft_delete(survey_id, principal)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{survey_id}/publish", response_model=schemas.SurveyRead)
async def publish_survey(
    survey_id: int,
    principal: str = Depends(get_current_principal),
    lifecycle: SurveyLifecycleManager = Depends(get_lifecycle),
):
    return await lifecycle.publish(survey_id, principal)


@router.post("/{survey_id}/unpublish", response_model=schemas.SurveyRead)
async def unpublish_survey(
    survey_id: int,
    principal: str = Depends(get_current_principal),
    lifecycle: SurveyLifecycleManager = Depends(get_lifecycle),
):
    return await lifecycle.unpublish(survey_id, principal)


@router.get("/{survey_id}/stats", response_model=schemas.SurveyStats)
async def survey_stats(
    survey_id: int,
    principal: str = Depends(get_current_principal),
    lifecycle: SurveyLifecycleManager = Depends(get_lifecycle),
):
    return await lifecycle.stats(survey_id, principal)
