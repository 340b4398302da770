"""Per-question rating counters (1-5) and their aggregate export."""
from __future__ import annotations

import logging
from typing import Any

from simsurvey import db
from simsurvey.config import settings
from simsurvey.errors import InvalidInputError
from simsurvey.services.catalog_service import CatalogSnapshot

logger = logging.getLogger(__name__)

RATING_VALUES = (1, 2, 3, 4, 5)


def parse_rating(raw: Any) -> int | None:
    """Integer 1-5 from an int or numeric string; None when invalid."""
    if raw is None or isinstance(raw, bool):
        return None
    try:
        value = float(raw.strip()) if isinstance(raw, str) else float(raw)
    except (TypeError, ValueError):
        return None
    if not value.is_integer() or int(value) not in RATING_VALUES:
        return None
    return int(value)


class RatingService:
    """Atomic counters in the responses table, one row per questionId."""

    @property
    def table(self):
        return db.table(settings.responses_table)

    def submit(
        self,
        question_id: int | str | None,
        rating: Any,
        snapshot: CatalogSnapshot | None = None,
    ) -> dict[str, Any]:
        """Count one rating. The question text is recorded from ``snapshot`` on first sight."""
        value = parse_rating(rating)
        if question_id is None or str(question_id).strip() == "" or value is None:
            raise InvalidInputError("Invalid input")

        key = {"questionId": str(question_id).strip()}
        resp = self.table.update_item(
            Key=key,
            UpdateExpression="ADD #c :one",
            ExpressionAttributeNames={"#c": f"rating{value}"},
            ExpressionAttributeValues={":one": 1},
            ReturnValues="ALL_NEW",
        )
        updated = db.plain(resp.get("Attributes", {}))

        if not updated.get("question") and snapshot is not None:
            q = snapshot.lookup(key["questionId"])
            if q is not None and q.question:
                resp = self.table.update_item(
                    Key=key,
                    UpdateExpression="SET #q = if_not_exists(#q, :t)",
                    ExpressionAttributeNames={"#q": "question"},
                    ExpressionAttributeValues={":t": q.question},
                    ReturnValues="ALL_NEW",
                )
                updated = db.plain(resp.get("Attributes", {}))

        logger.info("rating%d stored for question %s", value, key["questionId"])
        return {"message": "Rating stored", "updated": updated}

    def aggregate(self) -> list[dict[str, Any]]:
        """Every rated question with all five counters (absent counters are 0)."""
        rows = []
        kwargs: dict[str, Any] = {}
        while True:
            resp = self.table.scan(**kwargs)
            for item in resp.get("Items", []):
                row = {"questionId": item["questionId"], "question": item.get("question")}
                for n in RATING_VALUES:
                    row[f"rating{n}"] = db.to_int(item.get(f"rating{n}"))
                rows.append(row)
            if "LastEvaluatedKey" not in resp:
                break
            kwargs["ExclusiveStartKey"] = resp["LastEvaluatedKey"]
        return rows


rating_service = RatingService()
