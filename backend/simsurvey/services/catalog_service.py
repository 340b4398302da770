"""Question catalog: every group question flattened and numbered 1..N.

A catalog is an immutable ``CatalogSnapshot``. Numbering follows group scan
order, then question order inside each group, so ids are only meaningful for
the snapshot that produced them; a rebuild after groups change may renumber.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Iterable

from simsurvey.config import settings
from simsurvey.services.group_service import Style, group_service, load_questions, resolve_style

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CatalogQuestion:
    assigned_id: int
    question: str
    pre_answer: str
    answer: str
    delay: float
    group_id: str
    style: Style


@dataclass(frozen=True)
class CatalogSnapshot:
    questions: tuple[CatalogQuestion, ...] = ()

    def __len__(self) -> int:
        return len(self.questions)

    def lookup(self, assigned_id: int | str | None) -> CatalogQuestion | None:
        try:
            wanted = int(assigned_id)
        except (TypeError, ValueError):
            return None
        for q in self.questions:
            if q.assigned_id == wanted:
                return q
        return None

    def projection(self) -> list[dict[str, Any]]:
        """What participants see when listing questions."""
        return [{"id": q.assigned_id, "question": q.question} for q in self.questions]


def parse_delay(raw: Any) -> float:
    """Seconds to wait before the final answer; default when absent or invalid."""
    if raw is None or isinstance(raw, bool):
        return settings.default_delay_seconds
    try:
        seconds = float(raw)
    except (TypeError, ValueError):
        return settings.default_delay_seconds
    if not math.isfinite(seconds) or seconds < 0:
        return settings.default_delay_seconds
    return seconds


def flatten(groups: Iterable[dict[str, Any]]) -> CatalogSnapshot:
    """Build a snapshot from raw group rows. Malformed question JSON counts as no questions."""
    flat: list[CatalogQuestion] = []
    next_id = 1
    for group in groups:
        group_id = str(group.get("groupId", ""))
        try:
            questions = load_questions(group.get("questionsJson"))
        except ValueError as e:
            logger.error("group %s has malformed questionsJson: %s", group_id, e)
            questions = []

        for q in questions:
            if not isinstance(q, dict):
                logger.warning("group %s: skipping non-object question %r", group_id, q)
                continue
            pre_answer = q.get("preAnswer")
            flat.append(CatalogQuestion(
                assigned_id=next_id,
                question=q.get("question") or "",
                pre_answer=settings.default_pre_answer if pre_answer is None else pre_answer,
                answer=q.get("answer") or "",
                delay=parse_delay(q.get("delay")),
                group_id=group_id,
                # a question's own fontFace/colorScheme wins over the group's
                style=resolve_style(q, group),
            ))
            next_id += 1
    return CatalogSnapshot(questions=tuple(flat))


class CatalogService:
    """Holds the most recently built snapshot for the process."""

    def __init__(self) -> None:
        self._snapshot: CatalogSnapshot | None = None

    @property
    def snapshot(self) -> CatalogSnapshot | None:
        """Last built snapshot, without triggering a rebuild."""
        return self._snapshot

    def rebuild(self) -> CatalogSnapshot:
        snapshot = flatten(group_service.list_all())
        self._snapshot = snapshot
        logger.info("catalog rebuilt: %d questions", len(snapshot))
        return snapshot

    def current(self) -> CatalogSnapshot:
        """Held snapshot, or a fresh one when nothing (or nothing non-empty) is held."""
        if not self._snapshot:
            return self.rebuild()
        return self._snapshot

    def clear(self) -> None:
        self._snapshot = None


catalog_service = CatalogService()
