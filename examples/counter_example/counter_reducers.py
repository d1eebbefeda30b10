from unistore import create_reducer, on

from .counter_actions import add, reset


# ====== Handlers ======
def add_handler(state: int, action) -> int:
    return state + action.payload


def reset_handler(state: int, action) -> int:
    return action.payload


# ====== Reducer ======
# 初始狀態為 0，未知的 action 直接返回原狀態
counter_reducer = create_reducer(
    0,
    on(add, add_handler),
    on(reset, reset_handler),
)
