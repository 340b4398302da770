from .group_service import group_service, resolve_style
from .catalog_service import catalog_service
from .answer_service import answer_service
from .rating_service import rating_service
from .status_service import status_service
from .counter_service import counter_service
from .project_service import project_service
from .question_service import question_service

__all__ = [
    "group_service",
    "resolve_style",
    "catalog_service",
    "answer_service",
    "rating_service",
    "status_service",
    "counter_service",
    "project_service",
    "question_service",
]
