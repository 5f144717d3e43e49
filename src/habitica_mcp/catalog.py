"""Tool catalog and enablement map for the Habitica MCP server.

The catalog is the closed, ordered set of tools this server knows how to
serve. The enablement map selects which of them are advertised and callable.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum

from habitica_mcp.i18n import Translator


class ToolName(StrEnum):
    """Identifiers of every tool in the catalog, in catalog order."""

    GET_USER_PROFILE = "get_user_profile"
    GET_TASKS = "get_tasks"
    CREATE_TASK = "create_task"
    SCORE_TASK = "score_task"
    UPDATE_TASK = "update_task"
    DELETE_TASK = "delete_task"
    GET_STATS = "get_stats"
    BUY_REWARD = "buy_reward"
    GET_INVENTORY = "get_inventory"
    CAST_SPELL = "cast_spell"
    GET_TAGS = "get_tags"
    CREATE_TAG = "create_tag"
    GET_PETS = "get_pets"
    FEED_PET = "feed_pet"
    HATCH_PET = "hatch_pet"
    GET_MOUNTS = "get_mounts"
    EQUIP_ITEM = "equip_item"
    GET_NOTIFICATIONS = "get_notifications"
    READ_NOTIFICATION = "read_notification"
    GET_SHOP = "get_shop"
    BUY_ITEM = "buy_item"
    ADD_CHECKLIST_ITEM = "add_checklist_item"
    UPDATE_CHECKLIST_ITEM = "update_checklist_item"
    DELETE_CHECKLIST_ITEM = "delete_checklist_item"
    GET_TASK_CHECKLIST = "get_task_checklist"
    SCORE_CHECKLIST_ITEM = "score_checklist_item"


@dataclass(frozen=True, slots=True)
class ToolSpec:
    """Static descriptor of one catalog entry."""

    name: ToolName
    description_en: str
    description_zh: str

    def description(self, translator: Translator) -> str:
        """Return the tool description in the configured language."""
        return translator.t(self.description_en, self.description_zh)


TOOL_CATALOG: tuple[ToolSpec, ...] = (
    ToolSpec(
        ToolName.GET_USER_PROFILE,
        "Retrieve complete user profile information including stats, preferences, "
        "and account details from Habitica",
        "获取 Habitica 用户的完整资料，包括属性、偏好设置和账户信息",
    ),
    ToolSpec(
        ToolName.GET_TASKS,
        "Fetch user's tasks from Habitica. Optionally filter by task type (habits, "
        "dailys, todos, rewards). Returns all tasks if no type specified",
        "获取 Habitica 用户任务。可按类型筛选（habits、dailys、todos、rewards），"
        "未指定类型时返回全部任务",
    ),
    ToolSpec(
        ToolName.CREATE_TASK,
        "Create a new task in Habitica. Supports all task types: habits "
        "(positive/negative behaviors), dailies (recurring tasks), todos (one-time "
        "tasks), and rewards (custom purchases)",
        "在 Habitica 中创建新任务。支持所有任务类型：习惯（正向/负向行为）、"
        "每日任务（重复任务）、待办事项（一次性任务）和奖励（自定义购买项）",
    ),
    ToolSpec(
        ToolName.SCORE_TASK,
        "Mark a task as completed or score a habit. For todos/dailies, this marks "
        "completion and grants rewards. For habits, specify direction for "
        "positive/negative scoring",
        "完成任务或为习惯计分。待办和每日任务会被标记为完成并获得奖励；"
        "习惯需要指定正向或负向计分方向",
    ),
    ToolSpec(
        ToolName.UPDATE_TASK,
        "Modify an existing task's properties such as title, notes, or completion "
        "status. Only provide the fields you want to change",
        "修改已有任务的属性，例如标题、备注或完成状态。只需提供要修改的字段",
    ),
    ToolSpec(
        ToolName.DELETE_TASK,
        "Permanently remove a task from Habitica. This action cannot be undone",
        "从 Habitica 永久删除任务。此操作无法撤销",
    ),
    ToolSpec(
        ToolName.GET_STATS,
        "Retrieve user's character statistics including health, experience, mana, "
        "gold, level, and class information",
        "获取角色属性，包括生命值、经验值、魔法值、金币、等级和职业信息",
    ),
    ToolSpec(
        ToolName.BUY_REWARD,
        "Purchase a custom reward using gold. This will deduct the reward's cost "
        "from your gold balance",
        "使用金币购买自定义奖励，奖励价格将从金币余额中扣除",
    ),
    ToolSpec(
        ToolName.GET_INVENTORY,
        "Retrieve user's complete inventory including items, equipment, pets, "
        "mounts, food, eggs, hatching potions, and quest items",
        "获取完整物品栏，包括物品、装备、宠物、坐骑、食物、宠物蛋、孵化药水和任务道具",
    ),
    ToolSpec(
        ToolName.CAST_SPELL,
        "Use a class-specific spell or skill. Requires sufficient mana and "
        "appropriate class. Optionally target another user or specific entity",
        "使用职业技能。需要足够的魔法值和对应职业，可选择指定其他用户或目标",
    ),
    ToolSpec(
        ToolName.GET_TAGS,
        "Retrieve all user-created tags for organizing and categorizing tasks. Tags "
        "can be applied to any task type",
        "获取用户创建的所有标签，标签可用于整理和分类任何类型的任务",
    ),
    ToolSpec(
        ToolName.CREATE_TAG,
        "Create a new tag for organizing tasks. Tags help categorize and filter "
        "tasks by context, project, or any custom criteria",
        "创建用于整理任务的新标签，可按场景、项目或任意自定义条件分类和筛选任务",
    ),
    ToolSpec(
        ToolName.GET_PETS,
        "Retrieve all pets owned by the user, including their current state and "
        "feed status. Pets are obtained by hatching eggs with potions",
        "获取用户拥有的所有宠物及其喂养状态。宠物通过用药水孵化宠物蛋获得",
    ),
    ToolSpec(
        ToolName.FEED_PET,
        "Feed food to a pet to increase its growth or transform it into a mount. "
        "Different foods have different effects on pets",
        "给宠物喂食以促进成长或使其变为坐骑。不同食物对宠物效果不同",
    ),
    ToolSpec(
        ToolName.HATCH_PET,
        "Hatch a new pet by combining an egg with a hatching potion. This consumes "
        "both items and creates a new pet",
        "将宠物蛋与孵化药水组合孵化新宠物，会消耗这两件物品",
    ),
    ToolSpec(
        ToolName.GET_MOUNTS,
        "Retrieve all mounts owned by the user. Mounts are obtained by feeding pets "
        "until they transform",
        "获取用户拥有的所有坐骑。坐骑通过持续喂养宠物直到其转变获得",
    ),
    ToolSpec(
        ToolName.EQUIP_ITEM,
        "Equip or unequip items such as armor, pets, mounts, or costume pieces to "
        "change your character's appearance and stats",
        "装备或卸下盔甲、宠物、坐骑或服装，以改变角色外观和属性",
    ),
    ToolSpec(
        ToolName.GET_NOTIFICATIONS,
        "Retrieve all pending notifications including party invites, quest updates, "
        "achievement notifications, and system messages",
        "获取所有待处理通知，包括队伍邀请、副本进度、成就通知和系统消息",
    ),
    ToolSpec(
        ToolName.READ_NOTIFICATION,
        "Mark a specific notification as read to remove it from the notifications list",
        "将指定通知标记为已读，并从通知列表中移除",
    ),
    ToolSpec(
        ToolName.GET_SHOP,
        "Browse available items in various Habitica shops including seasonal items, "
        "quest scrolls, and special equipment",
        "浏览 Habitica 各商店中的商品，包括季节限定物品、副本卷轴和特殊装备",
    ),
    ToolSpec(
        ToolName.BUY_ITEM,
        "Purchase items from shops using gold or gems. Check shop availability first "
        "with get_shop",
        "使用金币或宝石从商店购买物品。请先用 get_shop 查看商品",
    ),
    ToolSpec(
        ToolName.ADD_CHECKLIST_ITEM,
        "Add a new checklist item (sub-task) to an existing task. Useful for breaking "
        "down complex tasks into smaller steps",
        "为已有任务添加清单项（子任务），便于把复杂任务拆分为小步骤",
    ),
    ToolSpec(
        ToolName.UPDATE_CHECKLIST_ITEM,
        "Modify an existing checklist item's text or completion status. Only provide "
        "the fields you want to change",
        "修改已有清单项的文本或完成状态。只需提供要修改的字段",
    ),
    ToolSpec(
        ToolName.DELETE_CHECKLIST_ITEM,
        "Permanently remove a checklist item from a task. This action cannot be undone",
        "从任务中永久删除清单项。此操作无法撤销",
    ),
    ToolSpec(
        ToolName.GET_TASK_CHECKLIST,
        "Retrieve all checklist items for a specific task, showing their completion "
        "status and unique identifiers",
        "获取指定任务的所有清单项，显示完成状态和唯一 ID",
    ),
    ToolSpec(
        ToolName.SCORE_CHECKLIST_ITEM,
        "Toggle completion status of a checklist item. If incomplete, marks as "
        "complete; if complete, marks as incomplete",
        "切换清单项的完成状态：未完成则标记为完成，已完成则标记为未完成",
    ),
)

DEFAULT_TOOL_ENABLEMENT: Mapping[ToolName, bool] = {
    ToolName.GET_USER_PROFILE: False,
    ToolName.GET_TASKS: True,
    ToolName.CREATE_TASK: True,
    ToolName.SCORE_TASK: True,
    ToolName.UPDATE_TASK: True,
    ToolName.DELETE_TASK: True,
    ToolName.GET_STATS: False,
    ToolName.BUY_REWARD: False,
    ToolName.GET_INVENTORY: False,
    ToolName.CAST_SPELL: False,
    ToolName.GET_TAGS: True,
    ToolName.CREATE_TAG: True,
    ToolName.GET_PETS: False,
    ToolName.FEED_PET: False,
    ToolName.HATCH_PET: False,
    ToolName.GET_MOUNTS: False,
    ToolName.EQUIP_ITEM: False,
    ToolName.GET_NOTIFICATIONS: False,
    ToolName.READ_NOTIFICATION: False,
    ToolName.GET_SHOP: False,
    ToolName.BUY_ITEM: False,
    ToolName.ADD_CHECKLIST_ITEM: True,
    ToolName.UPDATE_CHECKLIST_ITEM: True,
    ToolName.DELETE_CHECKLIST_ITEM: True,
    ToolName.GET_TASK_CHECKLIST: True,
    ToolName.SCORE_CHECKLIST_ITEM: True,
}


def enabled_specs(enablement: Mapping[str, bool]) -> list[ToolSpec]:
    """Project the catalog down to the tools mapped to ``True``.

    Catalog order is preserved. A catalog entry missing from the map is
    disabled; a map entry without a catalog entry has no effect.

    Args:
        enablement: Mapping of tool name to enabled flag

    Returns:
        list[ToolSpec]: Enabled catalog entries in catalog order
    """
    return [spec for spec in TOOL_CATALOG if enablement.get(spec.name, False) is True]
