"""REPL with prompt_toolkit for driving the bench."""

import os
import sys
from prompt_toolkit import PromptSession
from prompt_toolkit.history import InMemoryHistory

from cli.bench import Bench
from cli.commands import (
    handle_read,
    handle_run,
    handle_status,
    handle_tick,
    handle_write,
)
from cli.completer import BenchCompleter
from cli.constants import (
    HELP_TEXT,
    PROMPT_TEXT,
    STYLE,
    WELCOME_HELP,
    WELCOME_TITLE,
)
from cli.models import (
    ReadCommand,
    RunCommand,
    StatusCommand,
    TickCommand,
    WriteCommand,
)
from cli.parser import ParseError, parse_command


def clear_screen() -> None:
    """Clear the terminal screen (cross-platform)."""
    if sys.platform == "win32":
        os.system("cls")
    else:
        os.system("clear")


def show_welcome() -> None:
    print(WELCOME_TITLE)
    print(WELCOME_HELP)


def dispatch_command(cmd_obj, bench: Bench) -> str:
    """Dispatch parsed command to appropriate handler."""
    if isinstance(cmd_obj, TickCommand):
        return handle_tick(cmd_obj, bench)
    elif isinstance(cmd_obj, RunCommand):
        return handle_run(cmd_obj, bench)
    elif isinstance(cmd_obj, ReadCommand):
        return handle_read(cmd_obj, bench)
    elif isinstance(cmd_obj, WriteCommand):
        return handle_write(cmd_obj, bench)
    elif isinstance(cmd_obj, StatusCommand):
        return handle_status(cmd_obj, bench)
    else:
        return f"Unknown command type: {type(cmd_obj)}"


def repl_loop(bench: Bench) -> None:
    """Start interactive REPL with prompt_toolkit."""
    history = InMemoryHistory()
    session: PromptSession = PromptSession(
        completer=BenchCompleter(bench.block_names), history=history, style=STYLE
    )

    clear_screen()
    show_welcome()

    while True:
        try:
            user_input = session.prompt([("class:prompt", PROMPT_TEXT)])

            if not user_input.strip():
                continue

            if user_input.strip() == "exit":
                print("Goodbye!")
                break

            if user_input.strip() == "help":
                print(HELP_TEXT)
                continue

            if user_input.strip() == "clear":
                clear_screen()
                show_welcome()
                continue

            cmd_obj = parse_command(user_input)
            result = dispatch_command(cmd_obj, bench)
            print(result)

        except ParseError as e:
            print(f"Error: {e}")
        except KeyboardInterrupt:
            continue
        except EOFError:
            print("\nGoodbye!")
            break
