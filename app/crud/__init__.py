from . import crud_survey, crud_question, crud_token, crud_response

__all__ = ["crud_survey", "crud_question", "crud_token", "crud_response"]
