from .lifecycle import SurveyLifecycleManager
from .editor import QuestionEditor
from .tokens import AccessTokenManager
from .collector import ResponseCollector

__all__ = [
    "SurveyLifecycleManager",
    "QuestionEditor",
    "AccessTokenManager",
    "ResponseCollector",
]
