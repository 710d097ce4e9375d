from fastapi import APIRouter, Depends, Response, status

from app import schemas
from app.api.deps import get_current_principal, get_token_manager
from app.services import AccessTokenManager

router = APIRouter()


@router.post("/surveys/{survey_id}/token", response_model=schemas.TokenRead)
async def issue_token(
    survey_id: int,
    principal: str = Depends(get_current_principal),
    tokens: AccessTokenManager = Depends(get_token_manager),
):
    """Gibt den aktiven Token zurück oder erzeugt einen neuen."""
    return await tokens.issue(survey_id, principal)


@router.post("/surveys/{survey_id}/token/rotate", response_model=schemas.TokenRead)
async def rotate_token(
    survey_id: int,
    principal: str = Depends(get_current_principal),
    tokens: AccessTokenManager = Depends(get_token_manager),
):
    return await tokens.rotate(survey_id, principal)


@router.delete("/tokens/{token}", status_code=status.HTTP_204_NO_CONTENT)
async def revoke_token(
    token: str,
    principal: str = Depends(get_current_principal),
    tokens: AccessTokenManager = Depends(get_token_manager),
):
    await tokens.revoke(token, principal)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
