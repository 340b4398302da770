"""Domain errors raised by services and rendered as JSON by the app."""


class SurveyError(Exception):
    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class BadRequestError(SurveyError):
    """Missing or invalid input."""

    status_code = 400


class InvalidInputError(BadRequestError):
    """Input that parsed but is out of range."""


class NotFoundError(SurveyError):
    status_code = 404


class ConflictError(SurveyError):
    status_code = 409
