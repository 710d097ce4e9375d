"""Fehlerarten des Survey-Kerns. Die HTTP-Schicht übersetzt sie in Statuscodes."""


class SurveyEngineError(Exception):
    default_message = "Survey engine error"

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFound(SurveyEngineError):
    default_message = "Not found"


class Unauthorized(SurveyEngineError):
    default_message = "Not authorized to access this resource"


class InvalidState(SurveyEngineError):
    default_message = "Operation not allowed in the current state"


class Conflict(SurveyEngineError):
    default_message = "Conflict"


class InvalidOrExpired(SurveyEngineError):
    default_message = "Invalid or expired survey token"
