"""Simulated AI answers: instant placeholder, then the delayed final answer."""
from __future__ import annotations

import logging
import time
from typing import Any

from simsurvey.errors import NotFoundError
from simsurvey.services.catalog_service import CatalogSnapshot

logger = logging.getLogger(__name__)


class AnswerService:
    def ask(self, snapshot: CatalogSnapshot, question_id: int, phase: str = "pre") -> dict[str, Any]:
        """Answer one phase for a catalog question. ``final`` blocks for the question's delay."""
        q = snapshot.lookup(question_id)
        if q is None:
            raise NotFoundError(f"No DB question for id {question_id}")

        if phase == "pre":
            return {"preAnswerMessage": q.pre_answer}

        if q.delay > 0:
            logger.debug("question %s: waiting %.2fs before final answer", question_id, q.delay)
            time.sleep(q.delay)
        return {
            "finalAnswer": q.answer,
            "colorScheme": q.style.color_scheme,
            "fontFace": q.style.font_face,
        }


answer_service = AnswerService()
