from __future__ import annotations

import pytest
from immutables import Map

from unistore import INIT_STORE, Action, ActionError, create_action, init_store
from unistore.actions import is_action


def test_action_creator_without_payload() -> None:
    increment = create_action("[Counter] Increment")

    action = increment()

    assert increment.type == "[Counter] Increment"
    assert action == Action("[Counter] Increment")
    assert action.payload is None


def test_action_creator_with_prepare_fn() -> None:
    add = create_action("[Counter] Add", lambda amount: amount * 2)
    assert add(5).payload == 10


def test_single_argument_becomes_payload() -> None:
    rename = create_action("rename")
    assert rename("bob").payload == "bob"


def test_multiple_arguments_are_packed_into_a_map() -> None:
    move = create_action("move")

    action = move(1, 2, speed="fast")

    assert isinstance(action.payload, Map)
    assert action.payload == Map({0: 1, 1: 2, "speed": "fast"})


def test_dict_payloads_are_frozen() -> None:
    configure = create_action("configure")

    action = configure({"nested": {"flag": True}, "items": [1, 2]})

    assert isinstance(action.payload, Map)
    assert isinstance(action.payload["nested"], Map)
    assert action.payload["items"] == (1, 2)


def test_actions_are_immutable() -> None:
    action = Action("x", 1)
    with pytest.raises(AttributeError):
        action.type = "y"
    with pytest.raises(AttributeError):
        action.extra = True
    with pytest.raises(AttributeError):
        del action.payload


def test_actions_compare_and_hash_by_value() -> None:
    assert Action("x", 1) == Action("x", 1)
    assert Action("x", 1) != Action("x", 2)
    assert Action("x", 1) != "x"
    assert len({Action("x", 1), Action("x", 1)}) == 1
    assert repr(Action("x", 1)) == "Action(type='x', payload=1)"


@pytest.mark.parametrize("action_type", ["", None, 3])
def test_action_type_must_be_non_empty_string(action_type) -> None:
    with pytest.raises(ActionError):
        create_action(action_type)


def test_prepare_fn_failures_become_action_errors() -> None:
    set_id = create_action("set_id", lambda value: int(value))

    with pytest.raises(ActionError) as excinfo:
        set_id("abc")

    assert excinfo.value.details["action_type"] == "set_id"
    assert isinstance(excinfo.value.__cause__, ValueError)


def test_init_store_action() -> None:
    assert init_store() == Action(INIT_STORE)


def test_is_action_accepts_duck_typed_records() -> None:
    class Custom:
        type = "custom"
        payload = None

    assert is_action(Action("x"))
    assert is_action(Custom())
    assert not is_action({"type": "x"})
