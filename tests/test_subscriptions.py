from __future__ import annotations

from reactivex.abc import DisposableBase

from unistore.subscriptions import SubscriberRegistry, Subscription


def test_each_add_returns_a_distinct_handle() -> None:
    registry = SubscriberRegistry()

    def listener() -> None:
        pass

    first = registry.add(listener)
    second = registry.add(listener)

    assert first is not second
    assert len(registry) == 2
    assert registry.snapshot() == (first, second)


def test_dispose_removes_only_its_own_registration() -> None:
    registry = SubscriberRegistry()
    calls = []

    def listener() -> None:
        calls.append(1)

    first = registry.add(listener)
    second = registry.add(listener)
    first.dispose()

    assert registry.snapshot() == (second,)
    assert registry.notify() == 1
    assert calls == [1]


def test_dispose_is_idempotent() -> None:
    registry = SubscriberRegistry()
    subscription = registry.add(lambda: None)
    keep = registry.add(lambda: None)

    subscription()
    subscription()
    subscription.dispose()

    assert subscription.is_disposed
    assert not subscription.active
    assert registry.snapshot() == (keep,)


def test_notify_skips_registrations_removed_mid_round() -> None:
    registry = SubscriberRegistry()
    calls = []
    handles = {}

    def remover() -> None:
        calls.append("remover")
        handles["later"].dispose()

    registry.add(remover)
    handles["later"] = registry.add(lambda: calls.append("later"))

    assert registry.notify() == 1
    assert calls == ["remover"]


def test_notify_ignores_registrations_added_mid_round() -> None:
    registry = SubscriberRegistry()
    calls = []

    def adder() -> None:
        calls.append("adder")
        registry.add(lambda: calls.append("added"))

    registry.add(adder)

    assert registry.notify() == 1
    assert calls == ["adder"]
    assert len(registry) == 2


def test_clear_disposes_everything() -> None:
    registry = SubscriberRegistry()
    handles = [registry.add(lambda: None) for _ in range(3)]

    registry.clear()

    assert len(registry) == 0
    assert all(handle.is_disposed for handle in handles)


def test_subscription_is_a_reactivex_disposable() -> None:
    registry = SubscriberRegistry()
    subscription = registry.add(lambda: None)

    assert isinstance(subscription, DisposableBase)
    with subscription:
        assert subscription.active
    assert subscription.is_disposed


def test_repr_shows_state() -> None:
    def on_change() -> None:
        pass

    subscription = Subscription(on_change, lambda _: None)
    assert "on_change" in repr(subscription)
    assert "active" in repr(subscription)
    subscription.dispose()
    assert "disposed" in repr(subscription)
