import logging
import threading
from typing import Any, Callable, Generic, Optional, TypeVar

from reactivex import Observable, Subject
from reactivex import operators as ops

from .actions import Action, init_store, is_action
from .config import StoreConfig
from .errors import ErrorHandler, ReducerError, StoreError, global_error_handler
from .reducers import Reducer
from .subscriptions import SubscriberRegistry, Subscription
from .types import Listener

_logger = logging.getLogger(__name__)

S = TypeVar("S")
T = TypeVar("T")


class Store(Generic[S]):
    """
    狀態容器，持有唯一的當前狀態，並在每次 dispatch 後通知訂閱者。

    所有狀態變更都必須經由 dispatch 與建構時綁定的 reducer 完成。
    reducer 在 Store 的整個生命週期內固定不變。
    """

    def __init__(
        self,
        reducer: Reducer[S],
        config: Optional[StoreConfig] = None,
        error_handler: Optional[ErrorHandler] = None,
    ):
        """
        建立 Store，並以 reducer(None, init_store()) 的結果作為初始狀態。

        Args:
            reducer: 純函數 (state, action) -> state。
            config: Store 配置，預設為 StoreConfig()。
            error_handler: reducer 失敗時的錯誤處理器，預設為全域處理器。

        Raises:
            StoreError: reducer 不可呼叫。
            ReducerError: strict 模式下 reducer 返回 None 作為初始狀態。
        """
        if not callable(reducer):
            raise StoreError("reducer must be callable", operation="__init__", reducer=reducer)

        self._reducer = reducer
        self._config = config or StoreConfig()
        self._error_handler = error_handler or global_error_handler
        # 訂閱者登記表
        self._listeners = SubscriberRegistry()
        # 狀態流，發送 (old_state, new_state)
        self._state_subject: Subject = Subject()
        # 序列化跨執行緒的 dispatch；同一執行緒可重入
        self._lock = threading.RLock()
        self._is_reducing = False
        self._closed = False

        with self._lock:
            self._state: S = self._reduce(None, init_store())
        _logger.debug("[%s] initialized with %r", self._config.name, self._state)

    @property
    def config(self) -> StoreConfig:
        return self._config

    @property
    def state(self) -> S:
        """當前狀態的快照。"""
        return self._state

    def get_state(self) -> S:
        """
        讀取當前狀態。

        在訂閱者的 callback 中呼叫時，返回觸發此次通知的 dispatch 所安裝的狀態。
        """
        return self._state

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def _reduce(self, state: Optional[S], action: Action[Any]) -> S:
        self._is_reducing = True
        try:
            next_state = self._reducer(state, action)
        except Exception as err:
            self._error_handler.handle(err)
            raise
        finally:
            self._is_reducing = False

        if next_state is None and self._config.strict:
            error = ReducerError(
                "reducer returned None",
                reducer_name=getattr(self._reducer, "__qualname__", repr(self._reducer)),
                action_type=action.type,
                state=state,
            )
            self._error_handler.handle(error)
            raise error
        return next_state

    def dispatch(self, action: Action[Any]) -> Action[Any]:
        """
        分發一個動作：計算新狀態、安裝新狀態，然後依註冊順序通知訂閱者。

        reducer 拋出的異常會原樣傳遞給呼叫者，狀態保持為 dispatch 之前的值，
        且不會通知任何訂閱者。

        Args:
            action: 要分發的 Action。

        Returns:
            傳入的 Action。

        Raises:
            StoreError: action 格式不正確、在 reducer 內部呼叫 dispatch，
                或 Store 已經被 teardown。
        """
        if not is_action(action):
            raise StoreError(
                "actions must have a string 'type' and a 'payload'",
                operation="dispatch",
                action=action,
            )

        with self._lock:
            if self._closed:
                raise StoreError("store has been torn down", operation="dispatch", action_type=action.type)
            if self._is_reducing:
                raise StoreError("reducers may not dispatch actions", operation="dispatch",
                                 action_type=action.type)

            old_state = self._state
            _logger.debug("[%s] dispatching %s", self._config.name, action.type)
            next_state = self._reduce(old_state, action)
            self._state = next_state

            self._emit(old_state, next_state)
            called = self._listeners.notify()
            _logger.debug("[%s] %s notified %d listener(s)", self._config.name, action.type, called)

        return action

    def _emit(self, old_state: S, new_state: S) -> None:
        # select 串流的失敗交給錯誤處理器，不影響訂閱者的通知
        try:
            self._state_subject.on_next((old_state, new_state))
        except Exception as err:
            self._error_handler.handle(err)

    def subscribe(self, listener: Listener) -> Subscription:
        """
        註冊一個無參數的 listener，在每次 dispatch 完成狀態更新後被呼叫。

        Args:
            listener: 無參數的 callback。

        Returns:
            此次註冊的 Subscription；呼叫它或其 dispose() 即取消這一次註冊。
        """
        if not callable(listener):
            raise StoreError("listener must be callable", operation="subscribe", listener=listener)
        with self._lock:
            if self._closed:
                raise StoreError("store has been torn down", operation="subscribe")
            return self._listeners.add(listener)

    def select(self, selector: Optional[Callable[[S], T]] = None) -> Observable:
        """
        以 Observable 的形式觀察狀態變化。

        每次 dispatch 成功安裝新狀態後發送一次 (old, new)。
        selector 或觀察者拋出的異常會交給錯誤處理器，該串流隨之終止，
        訂閱者仍會照常被通知。

        Args:
            selector: 從整個狀態中取出部分的函數；提供時只在選出的新值改變時發送。

        Returns:
            發送 (old, new) 元組的 Observable。
        """
        if selector is None:
            return self._state_subject.pipe(ops.as_observable())

        return self._state_subject.pipe(
            ops.map(lambda pair: (selector(pair[0]), selector(pair[1]))),
            # 只有當新狀態變化時才發出
            ops.distinct_until_changed(lambda pair: pair[1]),
        )

    def teardown(self) -> None:
        """取消所有訂閱並完成狀態流；之後的 dispatch 與 subscribe 會失敗。"""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            self._listeners.clear()
            self._state_subject.on_completed()
        _logger.debug("[%s] torn down", self._config.name)

    def __enter__(self) -> "Store[S]":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.teardown()

    def __repr__(self) -> str:
        return f"<Store {self._config.name!r} listeners={self.listener_count}>"


def create_store(
    reducer: Reducer[S],
    config: Optional[StoreConfig] = None,
    error_handler: Optional[ErrorHandler] = None,
) -> Store[S]:
    """
    創建一個新的 Store 實例。

    Args:
        reducer: 綁定到 Store 的 reducer。
        config: 可選的 Store 配置。
        error_handler: 可選的錯誤處理器。

    Returns:
        Store: 新創建的 Store 實例。
    """
    return Store(reducer, config=config, error_handler=error_handler)
