from enum import Enum

from unistore import ActionError, create_action


class TodoActionType(str, Enum):
    """todo 應用中所有合法的 action 類型。"""

    ADDED_TODO = "ADDED_TODO"
    TOGGLE_TODO = "TOGGLE_TODO"
    DELETED_TODO = "DELETED_TODO"
    CHANGE_VISIBILITY_FILTER = "CHANGE_VISIBILITY_FILTER"


class VisibilityFilter(str, Enum):
    ALL = "ALL"
    ACTIVE = "ACTIVE"
    COMPLETED = "COMPLETED"


def _prepare_filter(new_filter) -> VisibilityFilter:
    try:
        return VisibilityFilter(str(getattr(new_filter, "value", new_filter)).upper())
    except ValueError as err:
        raise ActionError(
            f"unknown visibility filter {new_filter!r}",
            action_type=TodoActionType.CHANGE_VISIBILITY_FILTER.value,
            payload=new_filter,
        ) from err


def _prepare_id(todo_id) -> int:
    return int(todo_id)


add_todo = create_action(TodoActionType.ADDED_TODO.value, lambda text: str(text))
toggle_todo = create_action(TodoActionType.TOGGLE_TODO.value, _prepare_id)
delete_todo = create_action(TodoActionType.DELETED_TODO.value, _prepare_id)
change_visibility_filter = create_action(TodoActionType.CHANGE_VISIBILITY_FILTER.value, _prepare_filter)
