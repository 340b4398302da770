"""Survey open/closed flag (single row)."""
from __future__ import annotations

import logging

from simsurvey import db
from simsurvey.config import settings

logger = logging.getLogger(__name__)


class SurveyStatusService:
    @property
    def table(self):
        return db.table(settings.survey_status_table)

    def get(self) -> bool:
        """Closed until someone opens it."""
        item = self.table.get_item(Key={"surveyId": settings.survey_id}).get("Item")
        return bool(item.get("isOpen", False)) if item else False

    def set(self, is_open: bool) -> bool:
        # Callers are responsible for any admin check
        self.table.update_item(
            Key={"surveyId": settings.survey_id},
            UpdateExpression="SET isOpen = :s",
            ExpressionAttributeValues={":s": is_open},
        )
        logger.info("survey %s is now %s", settings.survey_id, "open" if is_open else "closed")
        return is_open


status_service = SurveyStatusService()
