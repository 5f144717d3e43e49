"""Checklist functionality mixin for Habitica API client.

Habitica answers every checklist mutation with the parent task, so these
methods return the task and leave locating the affected item to the caller.
"""

import logging
from typing import TYPE_CHECKING

from habitica_mcp.api.client_base import path_segment
from habitica_mcp.api.models import ChecklistItemUpdate, HabiticaTask, parse_response

if TYPE_CHECKING:
    from habitica_mcp.api.protocols import BaseClientProtocol

logger = logging.getLogger(__name__)


class ChecklistClientMixin:
    """Mixin providing checklist operations for the Habitica API client."""

    async def add_checklist_item(
        self: "BaseClientProtocol", task_id: str, text: str
    ) -> HabiticaTask:
        """Append a checklist item to a task."""
        endpoint = f"tasks/{path_segment(task_id)}/checklist"
        data = await self.request_data("POST", endpoint, data={"text": text})
        logger.debug("Added checklist item to task %s", task_id)
        return parse_response(HabiticaTask, data, endpoint)

    async def update_checklist_item(
        self: "BaseClientProtocol",
        task_id: str,
        item_id: str,
        payload: ChecklistItemUpdate,
    ) -> HabiticaTask:
        """Change the text or completion status of a checklist item."""
        endpoint = f"tasks/{path_segment(task_id)}/checklist/{path_segment(item_id)}"
        data = await self.request_data("PUT", endpoint, data=payload.to_payload())
        return parse_response(HabiticaTask, data, endpoint)

    async def delete_checklist_item(
        self: "BaseClientProtocol", task_id: str, item_id: str
    ) -> None:
        """Remove a checklist item from a task."""
        endpoint = f"tasks/{path_segment(task_id)}/checklist/{path_segment(item_id)}"
        await self.make_request("DELETE", endpoint)
        logger.debug("Deleted checklist item %s from task %s", item_id, task_id)

    async def score_checklist_item(
        self: "BaseClientProtocol", task_id: str, item_id: str
    ) -> HabiticaTask:
        """Toggle the completion status of a checklist item."""
        endpoint = f"tasks/{path_segment(task_id)}/checklist/{path_segment(item_id)}/score"
        data = await self.request_data("POST", endpoint)
        return parse_response(HabiticaTask, data, endpoint)
