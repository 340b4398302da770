"""Completed-survey counter with optional SNS notification."""
from __future__ import annotations

import logging

from simsurvey import db
from simsurvey.config import settings

logger = logging.getLogger(__name__)


class CompletionCounterService:
    @property
    def table(self):
        return db.table(settings.survey_counter_table)

    @property
    def _key(self) -> dict[str, str]:
        return {"totalSurveys": settings.counter_key}

    def increment(self) -> int:
        """Add one completed survey and return the new total."""
        resp = self.table.update_item(
            Key=self._key,
            UpdateExpression="SET #count = if_not_exists(#count, :start) + :inc",
            ExpressionAttributeNames={"#count": "count"},
            ExpressionAttributeValues={":start": 0, ":inc": 1},
            ReturnValues="UPDATED_NEW",
        )
        count = db.to_int(resp["Attributes"]["count"])
        logger.info("survey completions: %d", count)
        self._notify(count)
        return count

    def read(self) -> int:
        item = self.table.get_item(Key=self._key).get("Item")
        return db.to_int(item.get("count")) if item else 0

    def _notify(self, count: int) -> None:
        if not settings.sns_topic_arn:
            logger.debug("no SNS topic configured, skipping completion notification")
            return
        db.get_sns().publish(
            TopicArn=settings.sns_topic_arn,
            Subject="Survey Completed!",
            Message=f"A survey was just completed. New total count: {count}",
        )
        logger.info("completion notification published to %s", settings.sns_topic_arn)


counter_service = CompletionCounterService()
