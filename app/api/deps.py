import logging

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import PRINCIPAL_HEADER
from app.database import get_db_session
from app.services import (
    AccessTokenManager,
    QuestionEditor,
    ResponseCollector,
    SurveyLifecycleManager,
)

logger = logging.getLogger(__name__)


async def get_current_principal(request: Request) -> str:
    """
    Der vorgeschaltete Identity Provider setzt den Principal-Namen als Header.
    Fehlt er, wird die Anfrage vor jeder Kernlogik abgewiesen.
    """
    principal = (request.headers.get(PRINCIPAL_HEADER) or "").strip()
    if not principal:
        logger.warning("Request to %s without principal", request.url.path)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
        )
    return principal


def get_lifecycle(db: AsyncSession = Depends(get_db_session)) -> SurveyLifecycleManager:
    return SurveyLifecycleManager(db)


def get_editor(db: AsyncSession = Depends(get_db_session)) -> QuestionEditor:
    return QuestionEditor(db)


def get_token_manager(db: AsyncSession = Depends(get_db_session)) -> AccessTokenManager:
    return AccessTokenManager(db)


def get_collector(db: AsyncSession = Depends(get_db_session)) -> ResponseCollector:
    return ResponseCollector(db)
