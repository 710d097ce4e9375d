from typing import List

from fastapi import APIRouter, Depends, Response, status

from app import schemas
from app.api.deps import get_current_principal, get_editor
from app.services import QuestionEditor

router = APIRouter()


@router.post(
    "/survey/{survey_id}",
    response_model=schemas.QuestionRead,
    status_code=status.HTTP_201_CREATED,
)
async def add_question(
    survey_id: int,
    question_in: schemas.QuestionCreate,
    principal: str = Depends(get_current_principal),
    editor: QuestionEditor = Depends(get_editor),
):
    return await editor.add_question(survey_id, question_in, principal)


@router.get("/survey/{survey_id}", response_model=List[schemas.QuestionRead])
async def list_questions(survey_id: int, editor: QuestionEditor = Depends(get_editor)):
    return await editor.list_by_survey(survey_id)


@router.get("/{question_id}", response_model=schemas.QuestionRead)
async def get_question(question_id: int, editor: QuestionEditor = Depends(get_editor)):
    return await editor.get_question(question_id)


@router.put("/{question_id}", response_model=schemas.QuestionRead)
async def update_question(
    question_id: int,
    question_in: schemas.QuestionUpdate,
    principal: str = Depends(get_current_principal),
    editor: QuestionEditor = Depends(get_editor),
):
    return await editor.update_question(question_id, question_in, principal)


@router.delete("/{question_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_question(
    question_id: int,
    principal: str = Depends(get_current_principal),
    editor: QuestionEditor = Depends(get_editor),
):
    await editor.delete_question(question_id, principal)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{question_id}/options",
    response_model=schemas.OptionRead,
    status_code=status.HTTP_201_CREATED,
)
async def add_option(
    question_id: int,
    option_in: schemas.OptionCreate,
    principal: str = Depends(get_current_principal),
    editor: QuestionEditor = Depends(get_editor),
):
    return await editor.add_option(question_id, option_in, principal)
