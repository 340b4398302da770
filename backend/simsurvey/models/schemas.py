"""Pydantic schemas for the simsurvey API."""
import math
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


Phase = Literal["pre", "final"]
# pre: placeholder text shown instantly
# final: simulated answer shown after the question's delay


class _CamelModel(BaseModel):
    """Wire format is camelCase; accept snake_case field names too."""

    model_config = ConfigDict(populate_by_name=True)


# ============== RESEARCH GROUPS ==============

class GroupQuestion(_CamelModel):
    """One question inside a research group."""

    question: str
    pre_answer: str | None = Field(default=None, alias="preAnswer")
    answer: str = ""
    delay: float | None = Field(default=None, description="Seconds before the final answer; blank = default")
    font_face: str | None = Field(default=None, alias="fontFace")
    color_scheme: str | None = Field(default=None, alias="colorScheme")

    @field_validator("delay", mode="before")
    @classmethod
    def _parse_delay(cls, v: Any) -> float | None:
        if v is None or (isinstance(v, str) and not v.strip()):
            return None
        if isinstance(v, bool):
            raise ValueError("delay must be a number of seconds")
        try:
            seconds = float(v)
        except (TypeError, ValueError):
            raise ValueError("delay must be a number of seconds")
        if not math.isfinite(seconds):
            raise ValueError("delay must be a number of seconds")
        if seconds < 0:
            raise ValueError("delay must not be negative")
        return seconds

    @field_validator("font_face", "color_scheme", mode="before")
    @classmethod
    def _blank_style_is_unset(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    def to_stored(self) -> dict[str, Any]:
        """Shape persisted inside questionsJson."""
        return self.model_dump(by_alias=True, exclude_none=True)


class GroupConfig(_CamelModel):
    """Body of PUT /research-groups/{groupId}/config."""

    font_face: str | None = Field(default=None, alias="fontFace")
    color_scheme: str | None = Field(default=None, alias="colorScheme")
    questions: list[GroupQuestion] = Field(default_factory=list)


class GroupConfigResponse(_CamelModel):
    font_face: str | None = Field(default=None, alias="fontFace")
    color_scheme: str | None = Field(default=None, alias="colorScheme")
    questions: list[dict[str, Any]] = Field(default_factory=list)


class DeleteQuestionRequest(_CamelModel):
    question_text: str = Field(..., min_length=1, alias="questionText")


# ============== PARTICIPANT FLOW ==============

class CatalogEntry(BaseModel):
    id: int
    question: str


class AskRequest(_CamelModel):
    question_id: int = Field(..., alias="questionId")
    phase: Phase = "pre"


class RateRequest(_CamelModel):
    # Validated by the rating service so direct callers get the same checks
    question_id: int | str | None = Field(default=None, alias="questionId")
    rating: Any = None


class RatingRow(_CamelModel):
    """Aggregated counts for one question."""

    question_id: str = Field(alias="questionId")
    question: str | None = None
    rating1: int = 0
    rating2: int = 0
    rating3: int = 0
    rating4: int = 0
    rating5: int = 0


# ============== ADMIN ==============

class SurveyStatusUpdate(_CamelModel):
    is_open: bool = Field(..., alias="isOpen")


class ResearcherCreate(BaseModel):
    email: str | None = None
    name: str | None = None


class SurveyQuestionIn(BaseModel):
    text: str = ""
    type: str = "short-answer"
    required: bool = False
    options: list[str] = Field(default_factory=list)


class SurveyQuestionsCreate(_CamelModel):
    survey_id: str | None = Field(default=None, alias="surveyId")
    questions: list[SurveyQuestionIn] = Field(default_factory=list)
