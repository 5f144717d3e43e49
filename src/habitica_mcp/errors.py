"""Protocol-level errors and the classifier that produces them.

Handlers and the HTTP layer raise whatever they raise; the dispatch boundary
hands every exception to ``classify_error`` exactly once and re-raises the
result.

Each ``ToolError`` subclass carries the JSON-RPC error code of the condition
it represents. The code is for classification and logging only: FastMCP
reports every ``ToolError`` to the client as an ``isError`` text result.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from fastmcp.exceptions import ToolError
from mcp.types import INTERNAL_ERROR, INVALID_PARAMS, INVALID_REQUEST
from pydantic import ValidationError

from habitica_mcp.api.exceptions import (
    HabiticaAPIError,
    HabiticaAuthenticationError,
    HabiticaBadRequestError,
    HabiticaForbiddenError,
    HabiticaNetworkError,
    HabiticaNotFoundError,
    HabiticaPathError,
    HabiticaRateLimitError,
    HabiticaResponseError,
    HabiticaServerError,
    HabiticaTimeoutError,
)
from habitica_mcp.config import ErrorDetail
from habitica_mcp.i18n import Translator


class HabiticaToolError(ToolError):
    """Base class for errors reported back to the MCP caller."""

    code: int = INTERNAL_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidParamsError(HabiticaToolError):
    """The arguments reference something that does not exist or is malformed."""

    code = INVALID_PARAMS


class InvalidRequestError(HabiticaToolError):
    """The request is well-formed but Habitica will not carry it out."""

    code = INVALID_REQUEST


class InternalToolError(HabiticaToolError):
    """Network, server, parsing or unexpected failure."""

    code = INTERNAL_ERROR


@dataclass(frozen=True, slots=True)
class _Rule:
    kind: type[HabiticaToolError]
    en: str
    zh: str


# Vendor error codes, looked up in the body's "error" field and then in "message"
_VENDOR_RULES: dict[str, _Rule] = {
    "TaskNotFound": _Rule(
        InvalidParamsError,
        "Task not found: {taskId}. Use get_tasks to list your tasks and their IDs.",
        "未找到任务：{taskId}。请使用 get_tasks 查看任务及其 ID。",
    ),
    "ChecklistNotFound": _Rule(
        InvalidParamsError,
        "Checklist item {itemId} not found on task {taskId}. "
        "Use get_task_checklist to list the task's checklist items.",
        "任务 {taskId} 中未找到清单项 {itemId}。请使用 get_task_checklist 查看清单项。",
    ),
    "TagNotFound": _Rule(
        InvalidParamsError,
        "Tag not found. Use get_tags to list your tags.",
        "未找到标签。请使用 get_tags 查看标签。",
    ),
    "NotificationNotFound": _Rule(
        InvalidParamsError,
        "Notification not found: {notificationId}. "
        "Use get_notifications to list pending notifications.",
        "未找到通知：{notificationId}。请使用 get_notifications 查看待处理通知。",
    ),
    "messageNotEnoughGold": _Rule(
        InvalidRequestError,
        "Not enough gold to buy {item}. Complete tasks to earn more gold.",
        "金币不足，无法购买 {item}。完成任务可获得更多金币。",
    ),
    "messageNotEnoughGems": _Rule(
        InvalidRequestError,
        "Not enough gems to buy {item}.",
        "宝石不足，无法购买 {item}。",
    ),
    "NotEnoughMana": _Rule(
        InvalidRequestError,
        "Not enough mana to cast {spellId}. Mana regenerates as you complete tasks.",
        "魔法值不足，无法施放 {spellId}。完成任务可恢复魔法值。",
    ),
    "messagePetNotFound": _Rule(
        InvalidParamsError,
        "You don't own the pet {pet}. Use get_pets to see the pets you own.",
        "你没有宠物 {pet}。请使用 get_pets 查看已拥有的宠物。",
    ),
    "messageFoodNotFound": _Rule(
        InvalidParamsError,
        "You don't have any {food}. Use get_inventory to see your food.",
        "你没有食物 {food}。请使用 get_inventory 查看食物。",
    ),
    "messageMissingEggPotion": _Rule(
        InvalidParamsError,
        "Missing egg {egg} or hatching potion {hatchingPotion}. "
        "Use get_inventory to see your eggs and potions.",
        "缺少宠物蛋 {egg} 或孵化药水 {hatchingPotion}。请使用 get_inventory 查看。",
    ),
    "messageAlreadyPet": _Rule(
        InvalidRequestError,
        "You already own the pet {egg}-{hatchingPotion}.",
        "你已经拥有宠物 {egg}-{hatchingPotion}。",
    ),
    "messageAlreadyMount": _Rule(
        InvalidRequestError,
        "{pet} has already grown into a mount and cannot be fed.",
        "{pet} 已经成长为坐骑，无法继续喂食。",
    ),
}
_VENDOR_ALIASES = {
    "ChecklistItemNotFound": "ChecklistNotFound",
    "checklistItemNotFound": "ChecklistNotFound",
    "notEnoughGold": "messageNotEnoughGold",
    "notEnoughGems": "messageNotEnoughGems",
    "notEnoughMana": "NotEnoughMana",
    "petNotOwned": "messagePetNotFound",
}


class _FormatArguments(dict[str, Any]):
    def __missing__(self, key: str) -> str:
        return "?"


def _format_context(tool: str, arguments: Mapping[str, Any]) -> _FormatArguments:
    context = _FormatArguments(
        {key: value for key, value in arguments.items() if isinstance(value, str | int | float)}
    )
    context["tool"] = tool
    context["item"] = arguments.get("key") or arguments.get("itemKey") or "?"
    return context


def _vendor_rule(error: HabiticaAPIError) -> _Rule | None:
    for candidate in (error.error_code, error.message):
        if not candidate:
            continue
        key = _VENDOR_ALIASES.get(candidate, candidate)
        if key in _VENDOR_RULES:
            return _VENDOR_RULES[key]
    return None


def _server_text(error: HabiticaAPIError) -> str:
    return error.message or error.error_code or type(error).__name__


def _classify_detailed(
    error: HabiticaAPIError, context: _FormatArguments, translator: Translator
) -> HabiticaToolError:
    t = translator.t
    rule = _vendor_rule(error)
    if rule is not None:
        return rule.kind(t(rule.en, rule.zh).format_map(context))

    text = _server_text(error)
    if isinstance(error, HabiticaAuthenticationError):
        return InvalidRequestError(
            t(
                "Habitica rejected the credentials. "
                "Check HABITICA_USER_ID and HABITICA_API_TOKEN.",
                "Habitica 拒绝了凭据。请检查 HABITICA_USER_ID 和 HABITICA_API_TOKEN。",
            )
        )
    if isinstance(error, HabiticaForbiddenError):
        refused = t("Habitica refused the action: ", "Habitica 拒绝了该操作：")
        return InvalidRequestError(refused + text)
    if isinstance(error, HabiticaNotFoundError):
        return InvalidParamsError(
            t("Not found on Habitica: ", "Habitica 上未找到：")
            + text.rstrip(".")
            + t(". Check the IDs passed to {tool}.", "。请检查传给 {tool} 的 ID。").format_map(
                context
            )
        )
    if isinstance(error, HabiticaBadRequestError):
        return InvalidRequestError(t("Invalid request: ", "无效请求：") + text)
    if isinstance(error, HabiticaRateLimitError):
        return InvalidRequestError(
            t(
                "Habitica rate limit reached. Wait a minute and try again.",
                "已达到 Habitica 请求频率上限，请稍后再试。",
            )
        )
    if isinstance(error, HabiticaServerError):
        return InternalToolError(
            t("Habitica server error ({status}): ", "Habitica 服务器错误（{status}）：").format(
                status=error.status_code
            )
            + text
        )
    return InternalToolError(t("Habitica API error: ", "Habitica API 错误：") + text)


def _validation_summary(error: ValidationError) -> str:
    parts = []
    for detail in error.errors():
        location = ".".join(str(part) for part in detail.get("loc", ())) or "value"
        parts.append(f"{location}: {detail.get('msg', 'invalid')}")
    return "; ".join(parts)


def classify_error(
    error: BaseException,
    tool: str,
    arguments: Mapping[str, Any],
    translator: Translator,
    detail: ErrorDetail = ErrorDetail.DETAILED,
) -> ToolError:
    """Map any exception raised while serving a tool call to a protocol error.

    Args:
        error: The exception raised by the handler or the HTTP layer
        tool: Name of the tool being called
        arguments: Call arguments, used to fill in actionable messages
        translator: Message language selector
        detail: Whether remote errors get specific or generic messages

    Returns:
        ToolError: The error to report to the caller
    """
    if isinstance(error, ToolError):
        return error

    t = translator.t
    context = _format_context(tool, arguments)

    if isinstance(error, HabiticaTimeoutError):
        return InternalToolError(
            t(
                "Network error: the request to Habitica timed out. Try again later.",
                "网络错误：请求 Habitica 超时，请稍后再试。",
            )
        )
    if isinstance(error, HabiticaNetworkError):
        return InternalToolError(
            t(
                "Network error: could not connect to Habitica. Check your connection. ",
                "网络错误：无法连接到 Habitica，请检查网络连接。",
            )
            + error.message
        )
    if isinstance(error, HabiticaResponseError):
        return InternalToolError(
            t(
                "Failed to parse Habitica response for {tool}: ",
                "解析 {tool} 的 Habitica 响应失败：",
            ).format_map(context)
            + error.message
        )
    if isinstance(error, HabiticaAPIError):
        if detail is ErrorDetail.SIMPLE:
            generic = t("Habitica API error: ", "Habitica API 错误：")
            return InternalToolError(generic + _server_text(error))
        return _classify_detailed(error, context, translator)
    if isinstance(error, HabiticaPathError):
        return InvalidParamsError(
            t(
                "Invalid ID for {tool}: {value!r}. "
                "IDs may not be empty, '.', '..' or contain '/'.",
                "{tool} 的 ID 无效：{value!r}。ID 不能为空、'.'、'..'，也不能包含 '/'。",
            ).format(tool=tool, value=error.value)
        )
    if isinstance(error, ValidationError):
        return InvalidParamsError(
            t("Invalid arguments for {tool}: ", "{tool} 的参数无效：").format_map(context)
            + _validation_summary(error)
        )
    return InternalToolError(
        t("Error executing {tool}: ", "执行 {tool} 时出错：").format_map(context) + str(error)
    )
