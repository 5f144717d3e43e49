"""Tasks functionality mixin for Habitica API client.

This module provides the TasksClientMixin class that handles task listing,
creation, scoring, update and deletion, designed to be composed with the
base client.
"""

import logging
from typing import TYPE_CHECKING, Any

from habitica_mcp.api.client_base import path_segment
from habitica_mcp.api.models import (
    HabiticaTask,
    ScoreDirection,
    ScoreResult,
    TaskCreate,
    TaskListType,
    TaskUpdate,
    parse_response,
)

if TYPE_CHECKING:
    from habitica_mcp.api.protocols import BaseClientProtocol

logger = logging.getLogger(__name__)


class TasksClientMixin:
    """Mixin providing task operations for the Habitica API client."""

    async def get_tasks(
        self: "BaseClientProtocol", task_type: TaskListType | str | None = None
    ) -> dict[str, Any]:
        """Fetch the user's tasks, optionally restricted to one collection.

        Args:
            task_type: Collection filter (habits, dailys, todos, rewards)

        Returns:
            Dict[str, Any]: The full response envelope
        """
        params = {"type": str(task_type)} if task_type else None
        envelope = await self.make_request("GET", "tasks/user", params=params)
        logger.debug("Retrieved tasks (type=%s)", task_type or "all")
        return envelope

    async def get_task(self: "BaseClientProtocol", task_id: str) -> HabiticaTask:
        """Fetch a single task by ID."""
        endpoint = f"tasks/{path_segment(task_id)}"
        data = await self.request_data("GET", endpoint)
        return parse_response(HabiticaTask, data, endpoint)

    async def create_task(self: "BaseClientProtocol", payload: TaskCreate) -> HabiticaTask:
        """Create a task for the user.

        Args:
            payload: Validated task creation payload

        Returns:
            HabiticaTask: The created task as returned by Habitica
        """
        endpoint = "tasks/user"
        data = await self.request_data("POST", endpoint, data=payload.to_payload())
        task = parse_response(HabiticaTask, data, endpoint)
        logger.debug("Created task: %s", task.id)
        return task

    async def score_task(
        self: "BaseClientProtocol",
        task_id: str,
        direction: ScoreDirection | str = ScoreDirection.UP,
    ) -> ScoreResult:
        """Score a task up or down.

        Args:
            task_id: ID of the task to score
            direction: "up" (default) or "down"

        Returns:
            ScoreResult: Stat changes reported by Habitica
        """
        endpoint = f"tasks/{path_segment(task_id)}/score/{path_segment(direction)}"
        data = await self.request_data("POST", endpoint)
        return parse_response(ScoreResult, data, endpoint)

    async def update_task(
        self: "BaseClientProtocol", task_id: str, payload: TaskUpdate
    ) -> HabiticaTask:
        """Update the given fields of a task."""
        endpoint = f"tasks/{path_segment(task_id)}"
        data = await self.request_data("PUT", endpoint, data=payload.to_payload())
        return parse_response(HabiticaTask, data, endpoint)

    async def delete_task(self: "BaseClientProtocol", task_id: str) -> None:
        """Delete a task permanently."""
        await self.make_request("DELETE", f"tasks/{path_segment(task_id)}")
        logger.debug("Deleted task: %s", task_id)
