from typing import Any, Callable, Dict, Iterable, Mapping, Optional, TypeVar

from immutables import Map

from .actions import Action
from .errors import ConfigurationError

S = TypeVar("S")
Reducer = Callable[[Optional[S], Action[Any]], S]


def _action_type_of(key: Any) -> str:
    # Enum 成員以其值作為 action 類型
    return str(getattr(key, "value", key))


def create_reducer(initial_state: S, *handlers, exhaustive: Optional[Iterable[Any]] = None) -> Reducer[S]:
    """
    創建一個 reducer 函式，用於處理狀態變更。

    Args:
        initial_state: 初始狀態，當 reducer 收到 None 狀態時使用。
        *handlers: 一系列 (action_type, handler_fn) 元組或使用 on 函式創建的處理器。
        exhaustive: 可選的 action 類型集合（例如 Enum 類別），
            每個類型都必須有對應的處理函式。

    Returns:
        一個 reducer 函式，根據 action 的類型執行對應的處理邏輯，
        未知的 action 類型會原樣返回狀態。

    Raises:
        ConfigurationError: 指定 exhaustive 但缺少某些類型的處理函式。
    """
    action_handlers = {}  # 儲存 action 類型與處理函式的對應關係

    for handler in handlers:
        if isinstance(handler, tuple) and len(handler) == 2:
            action_type, handler_fn = handler
            action_handlers[_action_type_of(action_type)] = handler_fn
        elif isinstance(handler, Mapping):
            action_handlers.update({_action_type_of(k): v for k, v in handler.items()})
        else:
            raise ConfigurationError(
                f"unsupported handler {handler!r}", component="create_reducer"
            )

    if exhaustive is not None:
        missing = sorted(
            _action_type_of(t) for t in exhaustive if _action_type_of(t) not in action_handlers
        )
        if missing:
            raise ConfigurationError(
                f"no handler registered for action types: {', '.join(missing)}",
                component="create_reducer",
                missing=missing,
            )

    def reducer(state: Optional[S] = None, action: Optional[Action[Any]] = None) -> S:
        """
        Reducer 函式，根據 action 處理狀態變更。

        Args:
            state: 當前狀態，None 表示尚未初始化。
            action: 要處理的 action。

        Returns:
            新的狀態，如果沒有對應的處理器則返回原狀態。
        """
        if state is None:
            state = initial_state
        if action is None:
            return state

        handler = action_handlers.get(action.type)
        if handler:
            return handler(state, action)
        return state

    reducer.initial_state = initial_state  # type: ignore[attr-defined]
    reducer.handlers = action_handlers  # type: ignore[attr-defined]

    return reducer


def on(action_creator_or_type, handler) -> Dict[str, Callable[[Any, Action[Any]], Any]]:
    """
    創建一個 action 類型與處理函式的映射。

    Args:
        action_creator_or_type: Action 創建器函式、Enum 成員或 Action 類型字串。
        handler: 處理該 Action 的函式，接收 (state, action) 並返回新狀態。

    Returns:
        一個包含 {action_type: handler} 的字典。
    """
    if callable(action_creator_or_type) and hasattr(action_creator_or_type, 'type'):
        action_type = action_creator_or_type.type
    else:
        action_type = _action_type_of(action_creator_or_type)

    return {action_type: handler}


def combine_reducers(reducers: Mapping[str, Reducer[Any]]) -> Reducer[Map]:
    """
    將多個切片 reducer 組合為一個作用於 immutables.Map 的 reducer。

    每個鍵對應一個切片狀態；若沒有任何切片改變，返回原本的 Map 物件。

    Args:
        reducers: 切片鍵名到 reducer 的映射。

    Returns:
        組合後的 reducer。
    """
    if not reducers:
        raise ConfigurationError("combine_reducers needs at least one reducer", component="combine_reducers")
    slice_reducers = dict(reducers)

    def combined(state: Optional[Map] = None, action: Optional[Action[Any]] = None) -> Map:
        if state is None:
            state = Map()

        with state.mutate() as draft:
            changed = False
            for key, slice_reducer in slice_reducers.items():
                prev_slice = state.get(key)
                next_slice = slice_reducer(prev_slice, action)
                if next_slice is not prev_slice or key not in state:
                    draft[key] = next_slice
                    changed = True
            next_state = draft.finish()

        return next_state if changed else state

    combined.reducers = slice_reducers  # type: ignore[attr-defined]
    return combined
