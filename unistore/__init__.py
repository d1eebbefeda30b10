"""
UniStore：以 reducer 驅動、以訂閱通知的單向資料流狀態容器。
"""

from .errors import (
    UnistoreError, ActionError, ReducerError, SelectorError, StoreError,
    ConfigurationError, ErrorHandler, global_error_handler, handle_error
)
from .actions import Action, create_action, init_store, INIT_STORE
from .reducers import create_reducer, on, combine_reducers
from .config import StoreConfig
from .subscriptions import Subscription
from .store import Store, create_store
from .store_selectors import create_selector
from .immutable_utils import to_immutable, to_dict, to_pydantic

__version__ = "0.1.0"

# 匯出所有公開 API
__all__ = [
    # Errors
    "UnistoreError", "ActionError", "ReducerError", "SelectorError",
    "StoreError", "ConfigurationError", "ErrorHandler", "global_error_handler",
    "handle_error",

    # Actions
    "Action", "create_action", "init_store", "INIT_STORE",

    # Reducers
    "create_reducer", "on", "combine_reducers",

    # Store
    "Store", "StoreConfig", "Subscription", "create_store",

    # Selectors
    "create_selector",

    # Immutable Utils
    "to_immutable", "to_dict", "to_pydantic",
]
