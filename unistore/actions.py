"""
基於 UniStore 的 Action 定義模組。

此模組提供 Action 類別以及創建 Action 的功能。
Actions 是描述狀態變更意圖的不可變對象，只在一次 dispatch 中存在。
"""
from typing import Any, Callable, Dict, Generic, Optional, Union, overload

from .errors import ActionError
from .immutable_utils import to_immutable
from .types import P, ActionCreator, ActionCreatorWithoutPayload, ActionCreatorWithPayload


class Action(Generic[P]):
    """
    表示一個有類型和可選負載的動作。

    泛型參數:
        P: 負載的類型

    屬性:
        type: 動作的類型字符串，作為 reducer 分派的判別值
        payload: 動作的負載數據（可選）
    """
    __slots__ = ('type', 'payload')

    def __init__(self, type: str, payload: Optional[P] = None):
        super().__setattr__('type', type)
        super().__setattr__('payload', payload)

    def __setattr__(self, name, value):
        if name not in self.__slots__:
            raise AttributeError(f"'{type(self).__name__}' object has no attribute '{name}'")
        raise AttributeError(f"Cannot modify immutable instance attribute '{name}'")

    def __delattr__(self, name):
        raise AttributeError(f"Cannot delete immutable instance attribute '{name}'")

    def __eq__(self, other):
        if not isinstance(other, Action):
            return NotImplemented
        return self.type == other.type and self.payload == other.payload

    def __hash__(self):
        return hash((self.type, self.payload))

    def __repr__(self):
        return f"Action(type='{self.type}', payload={self.payload!r})"


def _process_payload(payload: Any) -> Any:
    """
    處理 payload，將字典遞迴轉換為 immutables.Map。

    Args:
        payload: 原始 payload

    Returns:
        處理後的 payload
    """
    if isinstance(payload, dict):
        return to_immutable(payload)
    return payload


@overload
def create_action(action_type: str) -> ActionCreatorWithoutPayload: ...


@overload
def create_action(action_type: str, prepare_fn: Callable[..., P]) -> ActionCreatorWithPayload[P]: ...


def create_action(action_type: str, prepare_fn: Optional[Callable[..., Any]] = None) -> ActionCreator:
    """
    創建一個 Action 生成器函數。

    Args:
        action_type: Action 的類型標識符，不可為空
        prepare_fn: 可選的預處理函數，用於在創建 Action 前處理輸入參數

    Returns:
        一個可調用的函數，用於生成指定類型的 Action

    Raises:
        ActionError: action_type 為空，或 prepare_fn 拒絕了輸入參數

    範例:
        >>> increment = create_action("[Counter] Increment")
        >>> increment()
        Action(type='[Counter] Increment', payload=None)
        >>> add = create_action("[Counter] Add", lambda amount: amount)
        >>> add(5)
        Action(type='[Counter] Add', payload=5)
    """
    if not isinstance(action_type, str) or not action_type:
        raise ActionError("action type must be a non-empty string", action_type=action_type)

    def action_creator(*args: Any, **kwargs: Any) -> Action[Any]:
        if prepare_fn:
            try:
                payload = prepare_fn(*args, **kwargs)
            except (TypeError, ValueError) as err:
                raise ActionError(f"cannot build payload: {err}", action_type=action_type,
                                  payload=args or kwargs) from err
            return Action(action_type, _process_payload(payload))
        if len(args) == 1 and not kwargs:
            return Action(action_type, _process_payload(args[0]))
        if args or kwargs:
            packed: Dict[Union[int, str], Any] = dict(zip(range(len(args)), args))
            packed.update(kwargs)
            return Action(action_type, _process_payload(packed))

        # 無參數，無負載
        return Action(action_type)

    # 添加 type 屬性以便於識別
    action_creator.type = action_type  # type: ignore[attr-defined]
    action_creator.__name__ = f"create_{action_type}"
    action_creator.__qualname__ = action_creator.__name__

    return action_creator  # type: ignore[return-value]


# 根 Actions
INIT_STORE = "[Root] Init Store"
init_store: ActionCreatorWithoutPayload = create_action(INIT_STORE)


def is_action(obj: Any) -> bool:
    """判斷物件是否可以作為 Action 被 dispatch。"""
    return isinstance(obj, Action) or (
        isinstance(getattr(obj, "type", None), str) and hasattr(obj, "payload")
    )


__all__ = ["Action", "create_action", "init_store", "INIT_STORE", "is_action"]
