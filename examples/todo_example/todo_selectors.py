from typing import Tuple

from unistore import create_selector

from .todo_actions import VisibilityFilter
from .todo_reducers import Todo, TodoState


def filter_todos(todos: Tuple[Todo, ...], visibility_filter: VisibilityFilter) -> Tuple[Todo, ...]:
    """依可見性過濾 todo；純函數，不改變輸入。"""
    if visibility_filter is VisibilityFilter.ACTIVE:
        return tuple(t for t in todos if not t.completed)
    if visibility_filter is VisibilityFilter.COMPLETED:
        return tuple(t for t in todos if t.completed)
    return tuple(todos)


def select_todos(state: TodoState) -> Tuple[Todo, ...]:
    return state.todos


def select_visibility_filter(state: TodoState) -> VisibilityFilter:
    return state.visibility_filter


select_visible_todos = create_selector(
    select_todos, select_visibility_filter, result_fn=filter_todos
)
