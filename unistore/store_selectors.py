import time
from typing import Any, Callable, List, Optional, Tuple, overload

from .errors import SelectorError, handle_error
from .types import Input, Output, R, StateSelector, ResultSelector


@overload
def create_selector(selector: Callable[[Input], Output], *, deep: bool = False, ttl: Optional[float] = None, maxsize: int = 128, unpack_pairs: bool = True) -> Callable[[Input], Output]:
    """單一選擇器重載"""
    ...


@overload
def create_selector(*selectors: StateSelector, result_fn: Callable[..., R], deep: bool = False, ttl: Optional[float] = None, maxsize: int = 128, unpack_pairs: bool = True) -> Callable[[Any], R]:
    """組合多個選擇器重載"""
    ...


def create_selector(*selectors: StateSelector, result_fn: Optional[ResultSelector] = None, deep: bool = False, ttl: Optional[float] = None, maxsize: int = 128, unpack_pairs: bool = True) -> StateSelector:
    """
    創建一個複合選擇器，支援記憶化、深淺比較與 TTL 控制

    Args:
        *selectors: 多個輸入選擇器，這些函數會從 state 中提取對應的值
        result_fn: 處理輸出結果的函數，將多個選擇器的輸出進行處理
        deep: 是否進行深度比較（預設為 False，以物件身分比較）
        ttl: 快取有效時間（秒），若超過此時間則重新計算，預設為無限
        maxsize: 緩存的最大條目數，預設為 128
        unpack_pairs: 是否把長度為 2 的元組視為 Store.select 發出的 (old, new)
            並只使用新狀態。狀態本身就是二元組時應設為 False。

    Returns:
        經過快取優化的 selector 函數

    Raises:
        SelectorError: 沒有提供任何選擇器，或輸入 / 結果計算失敗
    """
    if not selectors:
        raise SelectorError("create_selector needs at least one input selector")
    if maxsize < 1:
        raise SelectorError("maxsize must be at least 1", maxsize=maxsize)

    # 如果沒有 result_fn 且只有一個選擇器，直接返回該選擇器
    if result_fn is None and len(selectors) == 1:
        return selectors[0]

    if result_fn is None:
        result_fn = lambda *args: args  # noqa: E731

    name = getattr(result_fn, "__name__", "selector")
    # (時間戳, 輸入值, 結果)
    cache: List[Tuple[float, Tuple[Any, ...], Any]] = []
    stats = {"hits": 0, "misses": 0}

    @handle_error
    def selector(state: Any) -> Any:
        """
        經過快取優化的選擇器函數

        Args:
            state: 當前的狀態；unpack_pairs 開啟時也可以是 (old, new) 的元組

        Returns:
            計算結果，可能來自快取或重新計算
        """
        # 處理 state 為 (old, new) 的元組情況，僅使用新狀態
        if unpack_pairs and isinstance(state, tuple) and len(state) == 2:
            _, new_state = state
        else:
            new_state = state

        try:
            inputs = tuple(select(new_state) for select in selectors)
        except Exception as err:
            raise SelectorError(f"input selector failed: {err}", selector_name=name,
                                input_state=new_state) from err

        now = time.monotonic()
        if ttl is not None:
            # 清除過期項
            cache[:] = [item for item in cache if now - item[0] <= ttl]

        for _, cached_inputs, cached_result in cache:
            if deep:
                matched = _safe_deep_equals(inputs, cached_inputs)
            else:
                matched = len(inputs) == len(cached_inputs) and all(
                    a is b for a, b in zip(inputs, cached_inputs)
                )
            if matched:
                stats["hits"] += 1
                return cached_result

        stats["misses"] += 1
        try:
            result = result_fn(*inputs)
        except Exception as err:
            raise SelectorError(f"result function failed: {err}", selector_name=name,
                                input_state=new_state) from err

        # 維護緩存大小
        while len(cache) >= maxsize:
            cache.pop(0)
        cache.append((now, inputs, result))
        return result

    def cache_info() -> Tuple[int, int, int, int]:
        """返回 (hits, misses, maxsize, currsize)。"""
        return (stats["hits"], stats["misses"], maxsize, len(cache))

    def cache_clear() -> None:
        cache.clear()
        stats["hits"] = stats["misses"] = 0

    selector.cache_info = cache_info  # type: ignore[attr-defined]
    selector.cache_clear = cache_clear  # type: ignore[attr-defined]

    return selector


def _safe_deep_equals(a: Any, b: Any) -> bool:
    """安全的深度比較，無法比較時返回 False"""
    if a is b:
        return True
    if type(a) != type(b):
        return False
    if isinstance(a, dict):
        if len(a) != len(b):
            return False
        return all(key in b and _safe_deep_equals(a[key], b[key]) for key in a)
    if isinstance(a, (list, tuple)):
        if len(a) != len(b):
            return False
        return all(_safe_deep_equals(x, y) for x, y in zip(a, b))
    try:
        return bool(a == b)
    except Exception:
        return False
