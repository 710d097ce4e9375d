import logging
from typing import Optional

from app.exceptions import Unauthorized
from app.models import Survey

logger = logging.getLogger(__name__)


def require_owner(survey: Survey, principal: Optional[str], action: str) -> None:
    """Exakter Vergleich des Principal-Namens mit dem Besitzer der Umfrage."""
    if not principal or survey.created_by != principal:
        logger.warning(
            "Principal %r is not allowed to %s survey %s", principal, action, survey.id
        )
        raise Unauthorized(f"Unauthorized to {action} this survey")
