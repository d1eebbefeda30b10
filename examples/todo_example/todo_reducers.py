from typing import Tuple

from pydantic import BaseModel, ConfigDict

from unistore import create_reducer, on

from .todo_actions import (
    TodoActionType,
    VisibilityFilter,
    add_todo,
    change_visibility_filter,
    delete_todo,
    toggle_todo,
)


class Todo(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    text: str
    completed: bool = False


class TodoState(BaseModel):
    model_config = ConfigDict(frozen=True)

    todos: Tuple[Todo, ...] = ()
    global_id: int = 0
    visibility_filter: VisibilityFilter = VisibilityFilter.ALL


initial_state = TodoState()


def handle_add_todo(state: TodoState, action) -> TodoState:
    new_todo = Todo(id=state.global_id, text=action.payload)
    return state.model_copy(
        update={"todos": state.todos + (new_todo,), "global_id": state.global_id + 1}
    )


def handle_toggle_todo(state: TodoState, action) -> TodoState:
    if not any(t.id == action.payload for t in state.todos):
        return state
    todos = tuple(
        t.model_copy(update={"completed": not t.completed}) if t.id == action.payload else t
        for t in state.todos
    )
    return state.model_copy(update={"todos": todos})


def handle_delete_todo(state: TodoState, action) -> TodoState:
    todos = tuple(t for t in state.todos if t.id != action.payload)
    if len(todos) == len(state.todos):
        return state
    return state.model_copy(update={"todos": todos})


def handle_change_visibility_filter(state: TodoState, action) -> TodoState:
    if state.visibility_filter is action.payload:
        return state
    return state.model_copy(update={"visibility_filter": action.payload})


# 每種 TodoActionType 都必須有處理函式，缺少時在匯入時就會失敗
todo_reducer = create_reducer(
    initial_state,
    on(add_todo, handle_add_todo),
    on(toggle_todo, handle_toggle_todo),
    on(delete_todo, handle_delete_todo),
    on(change_visibility_filter, handle_change_visibility_filter),
    exhaustive=TodoActionType,
)
