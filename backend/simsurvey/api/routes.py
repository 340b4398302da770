"""API routes for simsurvey."""
from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Body, HTTPException, Query

from simsurvey.models import (
    AskRequest,
    CatalogEntry,
    DeleteQuestionRequest,
    GroupConfig,
    GroupConfigResponse,
    RateRequest,
    RatingRow,
    ResearcherCreate,
    SurveyQuestionIn,
    SurveyQuestionsCreate,
    SurveyStatusUpdate,
)
from simsurvey.services import (
    answer_service,
    catalog_service,
    counter_service,
    group_service,
    project_service,
    question_service,
    rating_service,
    status_service,
)
from simsurvey.services.group_service import parse_group_id

router = APIRouter(tags=["simsurvey"])
logger = logging.getLogger("simsurvey")


def _audit(event: str, payload: dict[str, Any] | None = None) -> None:
    logger.info("audit %s %s", event, payload or {})


@router.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok", "app": "simsurvey"}


# ============== RESEARCH GROUPS ==============

@router.get("/research-groups/all")
def list_groups() -> list[dict[str, Any]]:
    """Raw group rows, allocator row included."""
    return group_service.list_all()


@router.get("/research-groups/{group_id}/config")
def get_group(group_id: str) -> GroupConfigResponse:
    group = group_service.get(group_id)
    if not group:
        raise HTTPException(status_code=404, detail=f"Group {group_id} not found.")
    return GroupConfigResponse(**group)


@router.put("/research-groups/{group_id}/config")
@router.post("/research-groups/{group_id}/config")
def save_group(group_id: str, req: GroupConfig) -> dict[str, str]:
    """Create or fully replace a group. Use 'undefined' as the id to allocate a new one."""
    result = group_service.save(parse_group_id(group_id), req)
    _audit("group_save", {"group_id": result["groupId"], "questions": len(req.questions)})
    return result


@router.delete("/research-groups/{group_id}/config")
def delete_group_question(group_id: str, req: DeleteQuestionRequest) -> dict[str, str]:
    """Remove a question by text (case-insensitive). The last question takes the group with it."""
    result = group_service.delete_question(group_id, req.question_text)
    _audit("group_question_delete", {"group_id": group_id})
    return result


# ============== PARTICIPANT FLOW ==============

@router.get("/fixed-questions")
def fixed_questions() -> list[CatalogEntry]:
    """Rebuild the catalog and list its questions."""
    snapshot = catalog_service.rebuild()
    return [CatalogEntry(**entry) for entry in snapshot.projection()]


@router.post("/ask")
def ask(req: AskRequest) -> dict[str, Any]:
    """Pre-answer immediately, or the final answer after the question's delay."""
    snapshot = catalog_service.current()
    return answer_service.ask(snapshot, req.question_id, req.phase)


@router.post("/rate")
def rate(req: RateRequest) -> dict[str, Any]:
    result = rating_service.submit(req.question_id, req.rating, snapshot=catalog_service.snapshot)
    _audit("rate", {"question_id": req.question_id, "rating": req.rating})
    return result


@router.get("/ratings")
def ratings() -> list[RatingRow]:
    """Per-question rating counts for export."""
    return [RatingRow(**row) for row in rating_service.aggregate()]


# ============== SURVEY ADMIN ==============

@router.get("/survey-status")
def get_survey_status() -> dict[str, bool]:
    return {"isOpen": status_service.get()}


@router.post("/survey-status")
def set_survey_status(req: SurveyStatusUpdate) -> dict[str, Any]:
    is_open = status_service.set(req.is_open)
    _audit("survey_status", {"is_open": is_open})
    return {"message": "Updated", "isOpen": is_open}


@router.post("/incrementSurveyCounter")
def increment_survey_counter() -> dict[str, int]:
    """Called once per completed participant session."""
    return {"count": counter_service.increment()}


@router.get("/getSurveyCounter")
def get_survey_counter() -> dict[str, int]:
    return {"count": counter_service.read()}


# ============== PROJECT RESEARCHERS ==============

@router.get("/projects/{project_id}/researchers")
def list_researchers(project_id: str) -> list[dict[str, Any]]:
    return project_service.list_researchers(project_id)


@router.post("/projects")
def create_project(req: ResearcherCreate) -> dict[str, Any]:
    """New project (allocated id) with its first researcher."""
    result = project_service.add_researcher(None, req.email, req.name)
    _audit("project_create", {"project_id": result["projectId"]})
    return result


@router.post("/projects/{project_id}/researchers")
def add_researcher(project_id: str, req: ResearcherCreate) -> dict[str, Any]:
    return project_service.add_researcher(project_id, req.email, req.name)


@router.delete("/projects/{project_id}/researchers/{researcher_id}")
def remove_researcher(project_id: str, researcher_id: str) -> dict[str, str]:
    return project_service.remove_researcher(project_id, researcher_id)


# ============== SURVEY QUESTIONS ==============

def _require_survey_id(survey_id: str | None) -> str:
    if not survey_id:
        raise HTTPException(status_code=400, detail="Missing surveyId as query param")
    return survey_id


@router.get("/questions")
def list_questions() -> list[dict[str, Any]]:
    return question_service.list_all()


@router.post("/questions")
def create_questions(req: SurveyQuestionsCreate) -> dict[str, Any]:
    return question_service.create_many(req.survey_id, req.questions)


@router.get("/questions/{question_id}")
def get_question(question_id: str, survey_id: str | None = Query(default=None, alias="surveyId")) -> dict[str, Any]:
    survey_id = _require_survey_id(survey_id)
    question = question_service.get(survey_id, question_id)
    if not question:
        raise HTTPException(
            status_code=404,
            detail=f"No question found for surveyId={survey_id}, questionId={question_id}",
        )
    return question


@router.put("/questions/{question_id}")
def update_question(
    question_id: str,
    req: SurveyQuestionIn = Body(...),
    survey_id: str | None = Query(default=None, alias="surveyId"),
) -> dict[str, Any]:
    return question_service.update(_require_survey_id(survey_id), question_id, req)


@router.delete("/questions/{question_id}")
def delete_question(question_id: str, survey_id: str | None = Query(default=None, alias="surveyId")) -> dict[str, str]:
    return question_service.delete(_require_survey_id(survey_id), question_id)
