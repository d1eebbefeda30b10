from __future__ import annotations

import io

import pytest

from examples.todo_example.todo_actions import (
    TodoActionType,
    VisibilityFilter,
    add_todo,
    change_visibility_filter,
    delete_todo,
    toggle_todo,
)
from examples.todo_example.todo_reducers import Todo, TodoState, initial_state, todo_reducer
from examples.todo_example.todo_selectors import filter_todos, select_visible_todos
from examples.todo_example.todo_store import create_todo_store
from examples.todo_example.todo_view import TodoApp, render_todos
from unistore import ActionError, create_action


def _state_with(*texts: str) -> TodoState:
    state = todo_reducer(None, None)
    for text in texts:
        state = todo_reducer(state, add_todo(text))
    return state


def test_every_action_type_has_a_handler() -> None:
    assert set(todo_reducer.handlers) == {t.value for t in TodoActionType}


def test_add_assigns_incrementing_ids() -> None:
    state = _state_with("milk", "eggs")

    assert state.todos == (Todo(id=0, text="milk"), Todo(id=1, text="eggs"))
    assert state.global_id == 2


def test_toggle_flips_only_the_matching_todo() -> None:
    state = todo_reducer(_state_with("milk", "eggs"), toggle_todo(1))

    assert [t.completed for t in state.todos] == [False, True]
    state = todo_reducer(state, toggle_todo(1))
    assert [t.completed for t in state.todos] == [False, False]


def test_delete_removes_by_id_and_keeps_global_id() -> None:
    state = todo_reducer(_state_with("milk", "eggs"), delete_todo(0))

    assert state.todos == (Todo(id=1, text="eggs"),)
    assert state.global_id == 2
    assert todo_reducer(state, add_todo("jam")).todos[-1].id == 2


def test_missing_ids_leave_state_untouched() -> None:
    state = _state_with("milk")
    assert todo_reducer(state, toggle_todo(42)) is state
    assert todo_reducer(state, delete_todo(42)) is state


def test_unknown_action_returns_state_unchanged() -> None:
    state = _state_with("milk")
    assert todo_reducer(state, create_action("SOMETHING_ELSE")()) is state


def test_reducer_never_mutates_previous_state() -> None:
    before = _state_with("milk")
    snapshot = before.model_dump()

    todo_reducer(before, toggle_todo(0))
    todo_reducer(before, add_todo("eggs"))

    assert before.model_dump() == snapshot


def test_change_visibility_filter_accepts_names_case_insensitively() -> None:
    state = todo_reducer(initial_state, change_visibility_filter("active"))
    assert state.visibility_filter is VisibilityFilter.ACTIVE
    assert change_visibility_filter(VisibilityFilter.COMPLETED).payload is VisibilityFilter.COMPLETED


def test_invalid_filter_raises_action_error() -> None:
    with pytest.raises(ActionError):
        change_visibility_filter("someday")


def test_filter_todos() -> None:
    todos = (Todo(id=0, text="a"), Todo(id=1, text="b", completed=True))

    assert filter_todos(todos, VisibilityFilter.ALL) == todos
    assert filter_todos(todos, VisibilityFilter.ACTIVE) == (todos[0],)
    assert filter_todos(todos, VisibilityFilter.COMPLETED) == (todos[1],)


def test_visible_todos_selector_is_memoized_across_filter_independent_changes() -> None:
    state = todo_reducer(_state_with("milk"), change_visibility_filter("completed"))
    first = select_visible_todos(state)

    assert first == ()
    assert select_visible_todos(state) is first


def test_render_todos() -> None:
    todos = (Todo(id=0, text="milk"), Todo(id=3, text="eggs", completed=True))
    assert render_todos(todos) == ["[ ] 0: milk", "[x] 3: eggs"]


def test_stores_are_independent() -> None:
    first = create_todo_store()
    second = create_todo_store()
    first.dispatch(add_todo("milk"))

    assert len(first.get_state().todos) == 1
    assert second.get_state().todos == ()
    assert first.config.name == "todos"


def test_app_renders_after_each_command() -> None:
    output = io.StringIO()
    app = TodoApp(output=output)

    assert app.handle("add buy milk")
    assert app.handle("add   call mom  ")
    assert app.handle("toggle 0")
    assert app.handle("filter active")

    lines = output.getvalue().splitlines()
    assert lines[-2:] == ["-- active (1) --", "[ ] 1: call mom"]
    assert app.store.get_state().todos[0].completed is True


def test_app_ignores_blank_input() -> None:
    output = io.StringIO()
    app = TodoApp(output=output)

    assert not app.handle("   ")
    assert not app.handle("add    ")

    assert output.getvalue() == ""
    assert app.store.get_state().todos == ()


def test_app_reports_bad_commands() -> None:
    output = io.StringIO()
    app = TodoApp(output=output)

    assert not app.handle("jump 3")
    assert not app.handle("toggle abc")
    assert not app.handle("filter someday")

    lines = output.getvalue().splitlines()
    assert lines[0] == "unknown command: jump"
    assert lines[1].startswith("error: cannot build payload")
    assert lines[2] == "error: unknown visibility filter 'someday'"


def test_app_close_stops_rendering() -> None:
    output = io.StringIO()
    app = TodoApp(output=output)
    app.close()
    app.close()

    app.handle("add milk")

    assert output.getvalue() == ""
    assert app.store.listener_count == 0
