from typing import Optional

from unistore import Store, StoreConfig, create_store

from .todo_reducers import TodoState, todo_reducer


def create_todo_store(config: Optional[StoreConfig] = None) -> Store[TodoState]:
    """建立一個獨立的 todo Store。"""
    return create_store(todo_reducer, config=config or StoreConfig(name="todos"))
