"""
UniStore 錯誤處理模組。

定義所有 UniStore 專用的異常類別，以及集中式的錯誤處理器。
錯誤處理器只負責記錄與轉發，不會吞掉異常。
"""
import functools
import logging
import traceback
from typing import Any, Callable, Dict, List, Optional, TypeVar, Union

_logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


class UnistoreError(Exception):
    """所有 UniStore 異常的基礎類。"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.traceback = "".join(traceback.format_stack()[:-1])

    def to_dict(self) -> Dict[str, Any]:
        """
        將異常轉換為可序列化的字典。

        Returns:
            包含錯誤類型、訊息與細節的字典。
        """
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "details": dict(self.details),
            "traceback": self.traceback,
        }

    def __str__(self) -> str:
        if not self.details:
            return self.message
        extra = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
        return f"{self.message} ({extra})"


class ActionError(UnistoreError):
    """與 Action 建立相關的錯誤。"""

    def __init__(self, message: str, action_type: str, payload: Any = None, **kwargs: Any) -> None:
        super().__init__(message, {"action_type": action_type, "payload": payload, **kwargs})


class ReducerError(UnistoreError):
    """Reducer 違反契約，例如返回 None 作為新狀態。"""

    def __init__(self, message: str, reducer_name: str, action_type: str, state: Any = None, **kwargs: Any) -> None:
        super().__init__(
            message,
            {"reducer_name": reducer_name, "action_type": action_type, "state": state, **kwargs},
        )


class SelectorError(UnistoreError):
    """選擇器計算失敗。"""

    def __init__(self, message: str, selector_name: Optional[str] = None, input_state: Any = None, **kwargs: Any) -> None:
        super().__init__(message, {"selector_name": selector_name, "input_state": input_state, **kwargs})


class StoreError(UnistoreError):
    """Store 操作被錯誤地使用。"""

    def __init__(self, message: str, operation: str, **kwargs: Any) -> None:
        super().__init__(message, {"operation": operation, **kwargs})


class ConfigurationError(UnistoreError):
    """配置相關的錯誤。"""

    def __init__(self, message: str, component: str, config_key: Optional[str] = None, **kwargs: Any) -> None:
        super().__init__(message, {"component": component, "config_key": config_key, **kwargs})


class ErrorHandler:
    """
    集中式錯誤處理器，用於日誌記錄和錯誤轉發。

    每個錯誤都會寫入日誌，然後依序交給已註冊的處理函數。
    """

    def __init__(self, log_to_console: bool = True, log_to_file: bool = False, log_file: Optional[str] = None) -> None:
        """
        初始化錯誤處理器。

        Args:
            log_to_console: 是否透過模組 logger 記錄錯誤。
            log_to_file: 是否額外寫入檔案。
            log_file: 日誌檔案路徑，log_to_file 為 True 時必填。
        """
        if log_to_file and not log_file:
            raise ConfigurationError("log_file is required when log_to_file is enabled",
                                     component="ErrorHandler", config_key="log_file")
        self.log_to_console = log_to_console
        self.log_to_file = log_to_file
        self.log_file = log_file
        self.handlers: List[Callable[[UnistoreError], None]] = []
        self._file_logger: Optional[logging.Logger] = None
        self._file_handler: Optional[logging.FileHandler] = None
        if log_to_file:
            self._file_logger = logging.getLogger(f"{__name__}.file.{id(self)}")
            self._file_logger.propagate = False
            self._file_handler = logging.FileHandler(log_file, encoding="utf-8")
            self._file_logger.addHandler(self._file_handler)

    def register_handler(self, handler: Callable[[UnistoreError], None]) -> None:
        """註冊一個錯誤處理函數。"""
        self.handlers.append(handler)

    def unregister_handler(self, handler: Callable[[UnistoreError], None]) -> None:
        if handler in self.handlers:
            self.handlers.remove(handler)

    def handle(self, error: Union[UnistoreError, Exception]) -> None:
        """
        處理錯誤：記錄並轉發給所有已註冊的處理函數。

        Args:
            error: UniStore 異常，或任意異常（會被包裝為 UnistoreError 後轉發）。
        """
        if not isinstance(error, UnistoreError):
            wrapped = UnistoreError(str(error), {"original_type": error.__class__.__name__})
            wrapped.__cause__ = error
            error = wrapped

        if self.log_to_console:
            _logger.error("%s: %s", error.__class__.__name__, error)
        if self._file_logger is not None:
            self._file_logger.error("%s: %s", error.__class__.__name__, error)

        for handler in list(self.handlers):
            # 處理函數本身的失敗只記錄，原始錯誤仍由呼叫端決定如何傳遞
            try:
                handler(error)
            except Exception:
                _logger.exception("error handler %r failed while handling %s",
                                  handler, error.__class__.__name__)

    def close(self) -> None:
        """關閉檔案日誌並釋放對應的 handler；重複呼叫不會有任何效果。"""
        if self._file_logger is None or self._file_handler is None:
            return
        self._file_logger.removeHandler(self._file_handler)
        self._file_handler.close()
        self._file_handler = None
        self._file_logger = None


# 單例錯誤處理器
global_error_handler = ErrorHandler()


def handle_error(func: F) -> F:
    """
    裝飾器：被裝飾函數拋出的 UnistoreError 會先交給全域錯誤處理器，再重新拋出。
    """
    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except UnistoreError as err:
            global_error_handler.handle(err)
            raise

    return wrapper  # type: ignore[return-value]
