"""Formatting helpers shared by the Habitica tool groups."""

import json
from typing import Any

from habitica_mcp.api.models import ChecklistItem


def to_json_text(payload: Any) -> str:  # noqa: ANN401
    """Pretty-print a JSON payload for a text content block."""
    return json.dumps(payload, indent=2, ensure_ascii=False)


def format_number(value: float) -> str:
    """Render a stat value with at most two decimals."""
    return f"{value:.2f}".rstrip("0").rstrip(".")


def checklist_line(item: ChecklistItem) -> str:
    """One line per checklist item: completion mark, text and ID."""
    mark = "✓" if item.completed else "○"
    return f"{mark} {item.text} (ID: {item.id})"
