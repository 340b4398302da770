"""Research group storage: styled question sets keyed by groupId."""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any

from simsurvey import db
from simsurvey.config import settings
from simsurvey.errors import BadRequestError, NotFoundError
from simsurvey.models import GroupConfig

logger = logging.getLogger(__name__)

# Reserved row holding the group-id allocator
COUNTER_ID = "COUNTER"
_UNSET_GROUP_IDS = {"", "undefined"}


@dataclass(frozen=True)
class Style:
    """Resolved display style for an answer."""

    font_face: str
    color_scheme: str


def resolve_style(question: dict[str, Any] | None, group: dict[str, Any] | None) -> Style:
    """question override -> group value -> configured default."""
    question = question or {}
    group = group or {}
    return Style(
        font_face=question.get("fontFace") or group.get("fontFace") or settings.default_font_face,
        color_scheme=question.get("colorScheme") or group.get("colorScheme") or settings.default_color_scheme,
    )


def parse_group_id(raw: str | None) -> str | None:
    """Path value -> group id, or None when the client has none yet."""
    if raw is None:
        return None
    raw = raw.strip()
    if raw in _UNSET_GROUP_IDS:
        return None
    return raw


def load_questions(raw: str | None) -> list[dict[str, Any]]:
    """Deserialize a questionsJson blob. Raises ValueError on malformed JSON."""
    if not raw:
        return []
    questions = json.loads(raw)
    if not isinstance(questions, list):
        raise ValueError("questionsJson is not a list")
    return questions


def _normalize(text: Any) -> str:
    return text.strip().lower() if isinstance(text, str) else ""


def _check_writable(group_id: str) -> None:
    if group_id == COUNTER_ID:
        raise BadRequestError(f"groupId {COUNTER_ID} is reserved")


class GroupService:
    """Save, read, list and prune research groups."""

    @property
    def table(self):
        return db.table(settings.groups_table)

    def next_group_id(self) -> str:
        """Atomically bump the counter row and return the new id."""
        resp = self.table.update_item(
            Key={"groupId": COUNTER_ID},
            UpdateExpression="SET currentId = if_not_exists(currentId, :start) + :inc",
            ExpressionAttributeValues={":start": 0, ":inc": 1},
            ReturnValues="UPDATED_NEW",
        )
        return str(db.to_int(resp["Attributes"]["currentId"]))

    def save(self, group_id: str | None, config: GroupConfig) -> dict[str, str]:
        """Full replace of the group row. Allocates an id when none is given."""
        if group_id is None:
            group_id = self.next_group_id()
        else:
            _check_writable(group_id)
        item = {
            "groupId": group_id,
            "fontFace": config.font_face or settings.default_font_face,
            "colorScheme": config.color_scheme or settings.default_color_scheme,
            "questionsJson": json.dumps([q.to_stored() for q in config.questions]),
        }
        self.table.put_item(Item=item)
        logger.info("saved group %s (%d questions)", group_id, len(config.questions))
        return {"message": f"Saved group {group_id}", "groupId": group_id}

    def get(self, group_id: str) -> dict[str, Any] | None:
        item = self.table.get_item(Key={"groupId": group_id}).get("Item")
        if not item:
            return None
        return {
            "fontFace": item.get("fontFace"),
            "colorScheme": item.get("colorScheme"),
            "questions": load_questions(item.get("questionsJson")),
        }

    def list_all(self) -> list[dict[str, Any]]:
        """Every row, the allocator row included."""
        items: list[dict[str, Any]] = []
        kwargs: dict[str, Any] = {}
        while True:
            resp = self.table.scan(**kwargs)
            items.extend(db.plain(i) for i in resp.get("Items", []))
            if "LastEvaluatedKey" not in resp:
                break
            kwargs["ExclusiveStartKey"] = resp["LastEvaluatedKey"]
        return items

    def delete_question(self, group_id: str, question_text: str) -> dict[str, str]:
        """Drop matching questions; an emptied group is deleted outright."""
        _check_writable(group_id)
        item = self.table.get_item(Key={"groupId": group_id}).get("Item")
        if not item or not item.get("questionsJson"):
            raise NotFoundError(f"No questions found for group {group_id}")

        target = _normalize(question_text)
        remaining = [
            q for q in load_questions(item["questionsJson"])
            if not isinstance(q, dict) or _normalize(q.get("question")) != target
        ]

        if not remaining:
            self.table.delete_item(Key={"groupId": group_id})
            logger.info("deleted group %s (last question removed)", group_id)
            return {"message": f"Deleted entire group row for groupId {group_id}"}

        self.table.put_item(Item={
            "groupId": group_id,
            "fontFace": item.get("fontFace") or settings.default_font_face,
            "colorScheme": item.get("colorScheme") or settings.default_color_scheme,
            "questionsJson": json.dumps(remaining),
        })
        logger.info("removed question from group %s", group_id)
        return {"message": f"Removed question from group {group_id}"}


group_service = GroupService()
