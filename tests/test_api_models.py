"""Tests for Habitica request and response models."""

import pytest
from pydantic import ValidationError

from habitica_mcp.api.exceptions import HabiticaResponseError
from habitica_mcp.api.models import (
    ChecklistItemInput,
    HabiticaTask,
    PurchaseResult,
    TaskCreate,
    TaskUpdate,
    parse_response,
)
from tests.factories import checklist_item, task_payload


class TestTaskCreate:
    """Task creation payload validation."""

    def test_minimal_payload(self) -> None:
        payload = TaskCreate(type="habit", text="Drink water")
        assert payload.to_payload() == {"type": "habit", "text": "Drink water"}

    def test_full_payload(self) -> None:
        payload = TaskCreate(
            type="daily",
            text="Stretch",
            notes="Morning",
            difficulty=2,
            priority=0.1,
            checklist=[ChecklistItemInput(text="Neck"), ChecklistItemInput(text="Back")],
        )

        assert payload.to_payload() == {
            "type": "daily",
            "text": "Stretch",
            "notes": "Morning",
            "difficulty": 2.0,
            "priority": 0.1,
            "checklist": [
                {"text": "Neck", "completed": False},
                {"text": "Back", "completed": False},
            ],
        }

    def test_unknown_type_rejected(self) -> None:
        with pytest.raises(ValidationError):
            TaskCreate(type="chore", text="Dishes")

    def test_empty_text_rejected(self) -> None:
        with pytest.raises(ValidationError):
            TaskCreate(type="todo", text="")

    @pytest.mark.parametrize("weight", [0, 0.5, 3])
    def test_weight_outside_multipliers_rejected(self, weight: float) -> None:
        with pytest.raises(ValidationError, match="must be one of"):
            TaskCreate(type="todo", text="Dishes", priority=weight)


def test_task_update_drops_unset_fields() -> None:
    assert TaskUpdate(completed=False).to_payload() == {"completed": False}


class TestHabiticaTask:
    """Response parsing and checklist lookup."""

    def test_unknown_fields_allowed(self) -> None:
        task = HabiticaTask.model_validate(task_payload(streak=4))
        assert task.id == "task-1"

    def test_find_checklist_item_by_id(self) -> None:
        task = HabiticaTask.model_validate(
            task_payload(checklist=[checklist_item("a", "One"), checklist_item("b", "Two")])
        )

        assert task.find_checklist_item(item_id="b").text == "Two"  # type: ignore[union-attr]
        assert task.find_checklist_item(item_id="zzz") is None

    def test_find_checklist_item_by_text_prefers_newest(self) -> None:
        task = HabiticaTask.model_validate(
            task_payload(checklist=[checklist_item("old", "Same"), checklist_item("new", "Same")])
        )

        assert task.find_checklist_item(text="Same").id == "new"  # type: ignore[union-attr]


class TestPurchaseResult:
    """Remaining gold lookup."""

    def test_top_level_gold(self) -> None:
        assert PurchaseResult(gp=5.0).remaining_gold == 5.0

    def test_gold_in_stats(self) -> None:
        assert PurchaseResult.model_validate({"stats": {"gp": 7}}).remaining_gold == 7

    def test_no_gold(self) -> None:
        assert PurchaseResult().remaining_gold is None


def test_parse_response_wraps_validation_errors() -> None:
    with pytest.raises(HabiticaResponseError, match="endpoint=tasks/x"):
        parse_response(HabiticaTask, {"text": "no id"}, "tasks/x")
