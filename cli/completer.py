"""Custom completer for the bench CLI with block name completion."""

from typing import Callable, Iterable, List

from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.document import Document

from cli.constants import BLOCK_COMMANDS, COMMANDS


class BenchCompleter(Completer):
    """
    Custom completer that provides:
    - Command name completion for the first token
    - Block name completion for the first argument of 'read' and 'write'
    """

    def __init__(self, block_names: Callable[[], List[str]]):
        """
        Initialize the completer.

        Args:
            block_names: Callable returning the names of surface blocks
        """
        self.block_names = block_names

    def get_completions(
        self, document: Document, complete_event
    ) -> Iterable[Completion]:
        text = document.text_before_cursor
        tokens = text.split()

        is_typing_new_token = text.endswith(" ") or not tokens

        if not tokens or (len(tokens) == 1 and not is_typing_new_token):
            yield from self._complete_commands(tokens[0] if tokens else "")
            return

        if tokens[0].lower() not in BLOCK_COMMANDS:
            return

        argument_position = len(tokens) if is_typing_new_token else len(tokens) - 1
        if argument_position != 1:
            return

        current_word = "" if is_typing_new_token else tokens[-1]
        yield from self._complete_blocks(current_word)

    def _complete_commands(self, partial: str) -> Iterable[Completion]:
        """Complete command names matching the partial input."""
        partial_lower = partial.lower()
        for cmd in COMMANDS:
            if cmd.startswith(partial_lower):
                yield Completion(cmd, start_position=-len(partial))

    def _complete_blocks(self, partial: str) -> Iterable[Completion]:
        """Complete block names; names with spaces are quoted."""
        partial_lower = partial.lower().lstrip("'\"")
        for name in sorted(self.block_names()):
            if name.lower().startswith(partial_lower):
                text = f"'{name}'" if " " in name else name
                yield Completion(text, start_position=-len(partial))
