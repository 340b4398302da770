"""Standalone survey questions keyed by (surveyId, questionId)."""
from __future__ import annotations

import logging
import uuid
from typing import Any

from simsurvey import db
from simsurvey.config import settings
from simsurvey.models import SurveyQuestionIn

logger = logging.getLogger(__name__)


def _to_item(survey_id: str, question_id: str, q: SurveyQuestionIn) -> dict[str, Any]:
    item: dict[str, Any] = {
        "surveyId": survey_id,
        "questionId": question_id,
        "text": q.text or "",
        "type": q.type or "short-answer",
        "required": q.required,
    }
    if q.options:
        item["options"] = list(q.options)
    return item


def _from_item(item: dict[str, Any]) -> dict[str, Any]:
    return {
        "surveyId": item["surveyId"],
        "questionId": item["questionId"],
        "text": item.get("text", ""),
        "type": item.get("type", "short-answer"),
        "required": bool(item.get("required", False)),
        "options": list(item.get("options") or []),
    }


class SurveyQuestionService:
    @property
    def table(self):
        return db.table(settings.questions_table)

    def list_all(self) -> list[dict[str, Any]]:
        items = []
        kwargs: dict[str, Any] = {}
        while True:
            resp = self.table.scan(**kwargs)
            items.extend(_from_item(i) for i in resp.get("Items", []))
            if "LastEvaluatedKey" not in resp:
                break
            kwargs["ExclusiveStartKey"] = resp["LastEvaluatedKey"]
        return items

    def create_many(self, survey_id: str | None, questions: list[SurveyQuestionIn]) -> dict[str, Any]:
        """Store each question under a fresh questionId; a new surveyId when none is given."""
        survey_id = survey_id or str(uuid.uuid4())
        with self.table.batch_writer() as batch:
            for q in questions:
                batch.put_item(Item=_to_item(survey_id, str(uuid.uuid4()), q))
        logger.info("stored %d questions for survey %s", len(questions), survey_id)
        return {"message": "Questions stored", "surveyId": survey_id, "count": len(questions)}

    def get(self, survey_id: str, question_id: str) -> dict[str, Any] | None:
        item = self.table.get_item(Key={"surveyId": survey_id, "questionId": question_id}).get("Item")
        return _from_item(item) if item else None

    def update(self, survey_id: str, question_id: str, q: SurveyQuestionIn) -> dict[str, Any]:
        """Full replace of the item."""
        item = _to_item(survey_id, question_id, q)
        self.table.put_item(Item=item)
        return _from_item(item)

    def delete(self, survey_id: str, question_id: str) -> dict[str, str]:
        self.table.delete_item(Key={"surveyId": survey_id, "questionId": question_id})
        logger.info("deleted question %s from survey %s", question_id, survey_id)
        return {"message": f"Question {question_id} deleted"}


question_service = SurveyQuestionService()
