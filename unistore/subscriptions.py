"""
訂閱者登記表。

Store 透過此模組管理 listener。每次 subscribe 都會產生一個獨立的
Subscription，即使同一個 callback 被註冊多次也互不影響。
通知時先對登記表取快照，之後新增的訂閱不參與本輪通知，
本輪尚未執行就被取消的訂閱則會被跳過。
"""
import threading
from typing import Callable, List, Optional, Tuple

from reactivex.abc import DisposableBase

from .types import Listener


class Subscription(DisposableBase):
    """
    單一註冊的句柄。

    可以直接呼叫或呼叫 dispose() 來取消訂閱；重複取消不會有任何效果。
    """

    __slots__ = ("listener", "_active", "_on_dispose")

    def __init__(self, listener: Listener, on_dispose: Callable[["Subscription"], None]) -> None:
        self.listener = listener
        self._active = True
        self._on_dispose: Optional[Callable[["Subscription"], None]] = on_dispose

    @property
    def active(self) -> bool:
        return self._active

    @property
    def is_disposed(self) -> bool:
        return not self._active

    def dispose(self) -> None:
        if not self._active:
            return
        self._active = False
        on_dispose, self._on_dispose = self._on_dispose, None
        if on_dispose is not None:
            on_dispose(self)

    def __call__(self) -> None:
        self.dispose()

    def __repr__(self) -> str:
        state = "active" if self._active else "disposed"
        name = getattr(self.listener, "__qualname__", repr(self.listener))
        return f"<Subscription {name} {state}>"


class SubscriberRegistry:
    """有序的訂閱登記表。"""

    def __init__(self) -> None:
        self._entries: List[Subscription] = []
        self._lock = threading.RLock()

    def add(self, listener: Listener) -> Subscription:
        """
        新增一個註冊並返回其句柄。

        Args:
            listener: 無參數的 callback。

        Returns:
            對應此次註冊的 Subscription。
        """
        subscription = Subscription(listener, self._remove)
        with self._lock:
            self._entries.append(subscription)
        return subscription

    def _remove(self, subscription: Subscription) -> None:
        with self._lock:
            # 以身分比對，同一個 callback 的其他註冊不受影響
            self._entries = [entry for entry in self._entries if entry is not subscription]

    def snapshot(self) -> Tuple[Subscription, ...]:
        """返回目前所有註冊的快照，順序與註冊順序相同。"""
        with self._lock:
            return tuple(self._entries)

    def notify(self) -> int:
        """
        對快照中的每個註冊呼叫 listener。

        在通知過程中被取消且尚未執行的註冊會被跳過。

        Returns:
            實際被呼叫的 listener 數量。
        """
        called = 0
        for subscription in self.snapshot():
            if not subscription.active:
                continue
            subscription.listener()
            called += 1
        return called

    def clear(self) -> None:
        for subscription in self.snapshot():
            subscription.dispose()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
