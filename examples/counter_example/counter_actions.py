from unistore import create_action

add = create_action("ADD", lambda amount: int(amount))
reset = create_action("RESET", lambda value=0: int(value))
