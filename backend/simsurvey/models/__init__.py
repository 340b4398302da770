from .schemas import (
    AskRequest,
    CatalogEntry,
    DeleteQuestionRequest,
    GroupConfig,
    GroupConfigResponse,
    GroupQuestion,
    Phase,
    RateRequest,
    RatingRow,
    ResearcherCreate,
    SurveyQuestionIn,
    SurveyQuestionsCreate,
    SurveyStatusUpdate,
)

__all__ = [
    "AskRequest",
    "CatalogEntry",
    "DeleteQuestionRequest",
    "GroupConfig",
    "GroupConfigResponse",
    "GroupQuestion",
    "Phase",
    "RateRequest",
    "RatingRow",
    "ResearcherCreate",
    "SurveyQuestionIn",
    "SurveyQuestionsCreate",
    "SurveyStatusUpdate",
]
