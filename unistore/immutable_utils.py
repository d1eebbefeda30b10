# unistore/immutable_utils.py
from typing import Any, Type, TypeVar

from immutables import Map
from pydantic import BaseModel

T = TypeVar('T', bound=BaseModel)


def to_immutable(obj: Any) -> Any:
    """將任何對象遞迴轉換為不可變形式 (包括 Pydantic 模型)"""
    if isinstance(obj, Map):
        return Map({k: to_immutable(v) for k, v in obj.items()})
    if isinstance(obj, BaseModel):
        return Map({k: to_immutable(v) for k, v in obj.model_dump().items()})
    if isinstance(obj, dict):
        return Map({k: to_immutable(v) for k, v in obj.items()})
    if isinstance(obj, (list, tuple)):
        return tuple(to_immutable(i) for i in obj)
    if isinstance(obj, (set, frozenset)):
        return frozenset(to_immutable(i) for i in obj)
    return obj


def to_dict(obj: Any) -> Any:
    """將 Map 及其巢狀結構轉換回普通字典 / 列表"""
    if isinstance(obj, Map):
        return {k: to_dict(v) for k, v in obj.items()}
    if isinstance(obj, tuple):
        return [to_dict(i) for i in obj]
    if isinstance(obj, frozenset):
        return {to_dict(i) for i in obj}
    return obj


def to_pydantic(map_obj: Map, model_class: Type[T]) -> T:
    """將 Map 轉換回 Pydantic 模型"""
    return model_class.model_validate(to_dict(map_obj))
