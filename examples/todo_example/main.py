import logging
import sys

from .todo_view import TodoApp

HELP = "commands: add <text> | toggle <id> | delete <id> | filter all|active|completed | quit"


def main(argv=None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    logging.basicConfig(level=logging.DEBUG if "-v" in argv else logging.WARNING)

    app = TodoApp()
    print(HELP)
    try:
        for line in sys.stdin:
            if line.strip().lower() in ("quit", "exit"):
                break
            app.handle(line)
    except KeyboardInterrupt:
        pass
    finally:
        app.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
