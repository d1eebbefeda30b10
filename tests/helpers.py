from unistore import create_action

add = create_action("ADD", lambda amount: amount)


def counter_reducer(state=None, action=None):
    if state is None:
        state = 0
    if action is not None and action.type == "ADD":
        return state + action.payload
    return state
