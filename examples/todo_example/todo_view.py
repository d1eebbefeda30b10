"""
todo 範例的文字介面。

render_todos 負責把狀態轉成文字行；TodoApp 把使用者指令轉成 dispatch，
並以訂閱者的身分在每次狀態變化後重新繪製清單。
"""
import logging
import sys
from typing import Callable, Dict, Iterable, List, Optional, TextIO

from unistore import ActionError, Store, Subscription

from .todo_actions import add_todo, change_visibility_filter, delete_todo, toggle_todo
from .todo_reducers import Todo, TodoState
from .todo_selectors import select_visible_todos
from .todo_store import create_todo_store

_logger = logging.getLogger(__name__)


def render_todos(todos: Iterable[Todo]) -> List[str]:
    """把 todo 轉成 `[x] 3: text` 格式的文字行。"""
    return [f"[{'x' if todo.completed else ' '}] {todo.id}: {todo.text}" for todo in todos]


class TodoApp:
    """
    連接 Store 與文字輸入輸出的薄層。

    Args:
        store: 可選的 todo Store，預設建立一個新的。
        output: 繪製輸出的串流，預設為 sys.stdout。
    """

    def __init__(self, store: Optional[Store[TodoState]] = None, output: Optional[TextIO] = None):
        self.store = store or create_todo_store()
        self.output = output or sys.stdout
        self._commands: Dict[str, Callable[[str], bool]] = {
            "add": self._add,
            "toggle": self._toggle,
            "delete": self._delete,
            "filter": self._filter,
        }
        self._subscription: Optional[Subscription] = self.store.subscribe(self.render)

    def render(self) -> None:
        state = self.store.get_state()
        lines = render_todos(select_visible_todos(state))
        print(f"-- {state.visibility_filter.value.lower()} ({len(lines)}) --", file=self.output)
        for line in lines:
            print(line, file=self.output)

    def handle(self, command_line: str) -> bool:
        """
        執行一行指令。

        Args:
            command_line: 例如 `add buy milk`、`toggle 0`、`filter active`。

        Returns:
            有 action 被 dispatch 時為 True；空白、被忽略或無效的指令為 False。
        """
        command, _, argument = command_line.strip().partition(" ")
        if not command:
            return False
        handler = self._commands.get(command.lower())
        if handler is None:
            print(f"unknown command: {command}", file=self.output)
            return False
        try:
            return handler(argument.strip())
        except ActionError as err:
            _logger.debug("rejected %r: %s", command_line, err)
            print(f"error: {err.message}", file=self.output)
            return False

    def _add(self, text: str) -> bool:
        # 空白內容直接忽略
        if not text:
            return False
        self.store.dispatch(add_todo(text))
        return True

    def _toggle(self, argument: str) -> bool:
        self.store.dispatch(toggle_todo(argument))
        return True

    def _delete(self, argument: str) -> bool:
        self.store.dispatch(delete_todo(argument))
        return True

    def _filter(self, argument: str) -> bool:
        self.store.dispatch(change_visibility_filter(argument))
        return True

    def close(self) -> None:
        if self._subscription is not None:
            self._subscription.dispose()
            self._subscription = None
