"""
UniStore 共用類型定義模組。

集中定義 Action、Reducer、Listener 與 Selector 相關的類型變數與協議，
供其他模組與類型存根文件引用。
"""
from typing import Any, Callable, Dict, Protocol, TypeVar, runtime_checkable

# 狀態類型
S = TypeVar("S")
# 負載類型
P = TypeVar("P")
P_contra = TypeVar("P_contra", contravariant=True)
# 選擇器輸入 / 輸出類型
Input = TypeVar("Input")
Output = TypeVar("Output")
R = TypeVar("R")


@runtime_checkable
class ActionLike(Protocol):
    """任何帶有 type 與 payload 屬性的物件都可以被 dispatch。"""

    @property
    def type(self) -> str: ...

    @property
    def payload(self) -> Any: ...


class ActionCreator(Protocol):
    """Action 生成器協議，帶有 type 屬性以便 reducer 識別。"""

    type: str

    def __call__(self, *args: Any, **kwargs: Any) -> Any: ...


class ActionCreatorWithoutPayload(Protocol):
    type: str

    def __call__(self) -> Any: ...


class ActionCreatorWithPayload(Protocol[P_contra]):
    type: str

    def __call__(self, payload: P_contra) -> Any: ...


# reducer: (state | None, action) -> state
ReducerFunction = Callable[[Any, Any], Any]
ActionHandler = Callable[[Any, Any], Any]
HandlerMap = Dict[str, ActionHandler]

# 訂閱者與取消訂閱
Listener = Callable[[], None]
Unsubscribe = Callable[[], None]

StateSelector = Callable[[Any], Any]
ResultSelector = Callable[..., Any]
