from unistore import StoreConfig, create_store

from .counter_actions import add
from .counter_reducers import counter_reducer


def run() -> int:
    store = create_store(counter_reducer, config=StoreConfig(name="counter"))

    # 訂閱數值變化 (old, new)
    store.select(lambda count: count).subscribe(
        on_next=lambda pair: print(f"計數變化: {pair[0]} -> {pair[1]}")
    )

    store.dispatch(add(3))
    store.dispatch(add(-1))
    print(f"目前計數: {store.get_state()}")

    unsubscribe = store.subscribe(lambda: print(f"listener 看到: {store.get_state()}"))
    store.dispatch(add(5))
    unsubscribe()
    store.dispatch(add(1))

    print(f"最終狀態: {store.state}")
    store.teardown()
    return store.state


if __name__ == "__main__":
    run()
