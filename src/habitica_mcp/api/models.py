"""Data models for Habitica API requests and responses.

Habitica owns every entity; the models below only describe the fields this
server reads or sends. Response models allow unknown fields so that new
server-side attributes never break parsing.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any, TypeVar

from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic.config import ConfigDict

from habitica_mcp.api.exceptions import HabiticaResponseError

# Difficulty ("priority" in Habitica's own vocabulary) multipliers accepted by the API
TASK_WEIGHTS = (0.1, 1.0, 1.5, 2.0)


class TaskType(StrEnum):
    """Task types accepted by task creation."""

    HABIT = "habit"
    DAILY = "daily"
    TODO = "todo"
    REWARD = "reward"


class TaskListType(StrEnum):
    """Task collections accepted by the task list filter."""

    HABITS = "habits"
    DAILYS = "dailys"
    TODOS = "todos"
    REWARDS = "rewards"


class ScoreDirection(StrEnum):
    """Scoring direction for habits."""

    UP = "up"
    DOWN = "down"


class _HabiticaResponse(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)


class ChecklistItem(_HabiticaResponse):
    """A checklist entry nested under a task."""

    id: str
    text: str = ""
    completed: bool = False


class HabiticaTask(_HabiticaResponse):
    """Subset of the Habitica task object used for formatting responses."""

    id: str
    text: str = ""
    type: str | None = None
    notes: str | None = None
    priority: float | None = None
    completed: bool | None = None
    checklist: list[ChecklistItem] = Field(default_factory=list)

    def find_checklist_item(
        self, item_id: str | None = None, text: str | None = None
    ) -> ChecklistItem | None:
        """Locate a checklist item by ID, or the newest item carrying ``text``."""
        if item_id is not None:
            for item in self.checklist:
                if item.id == item_id:
                    return item
            return None
        if text is not None:
            for item in reversed(self.checklist):
                if item.text == text:
                    return item
        return None


class Tag(_HabiticaResponse):
    """A user tag."""

    id: str
    name: str = ""


class ScoreResult(_HabiticaResponse):
    """Stat changes returned after scoring a task."""

    delta: float | None = None
    exp: float | None = None
    gp: float | None = None
    lvl: int | None = None


class PurchaseResult(_HabiticaResponse):
    """Account state returned after a purchase."""

    gp: float | None = None
    stats: dict[str, Any] | None = None

    @property
    def remaining_gold(self) -> float | None:
        """Gold left after the purchase, wherever Habitica reported it."""
        if self.gp is not None:
            return self.gp
        if self.stats is not None:
            return self.stats.get("gp")
        return None


class ChecklistItemInput(BaseModel):
    """Checklist entry supplied when creating a task."""

    model_config = ConfigDict(extra="forbid")

    text: str = Field(..., min_length=1)
    completed: bool = False


class _TaskPayload(BaseModel):
    model_config = ConfigDict(use_enum_values=True, extra="forbid")

    def to_payload(self) -> dict[str, Any]:
        """Serialize to a request body without unset fields."""
        return self.model_dump(exclude_none=True)


class TaskCreate(_TaskPayload):
    """Request payload for ``POST /tasks/user``."""

    type: TaskType
    text: str = Field(..., min_length=1)
    notes: str | None = None
    difficulty: float | None = None
    priority: float | None = None
    checklist: list[ChecklistItemInput] | None = None

    @field_validator("difficulty", "priority")
    @classmethod
    def validate_weight(cls, v: float | None) -> float | None:
        """Restrict difficulty and priority to Habitica's multipliers."""
        if v is not None and v not in TASK_WEIGHTS:
            msg = f"must be one of {', '.join(str(w) for w in TASK_WEIGHTS)}"
            raise ValueError(msg)
        return v


class TaskUpdate(_TaskPayload):
    """Request payload for ``PUT /tasks/{id}``."""

    text: str | None = None
    notes: str | None = None
    completed: bool | None = None


class ChecklistItemUpdate(_TaskPayload):
    """Request payload for ``PUT /tasks/{id}/checklist/{itemId}``."""

    text: str | None = None
    completed: bool | None = None


ModelT = TypeVar("ModelT", bound=BaseModel)


def parse_response(model: type[ModelT], payload: Any, endpoint: str) -> ModelT:  # noqa: ANN401
    """Validate a response ``data`` payload against a response model.

    Raises:
        HabiticaResponseError: If the payload does not match the model
    """
    try:
        return model.model_validate(payload)
    except ValidationError as error:
        raise HabiticaResponseError.create_parse_error(
            endpoint, model=model.__name__, errors=error.error_count()
        ) from error
