"""
Command-line input source of the skirmish engine.

Reads the player's tokens with prompt_toolkit, showing the available choices
as a rich table.
"""

import re

from core.utils import ccapture
from prompt_toolkit import ANSI, PromptSession
from rich.table import Table

from ui.input_source import SKIP_TOKEN, InputSource

# Matches the "(k) Label" options embedded in the prompts.
_OPTION_PATTERN = re.compile(r"\((\w)\) (\w+)")


class PromptInputSource(InputSource):
    """
    Interactive input source backed by a prompt_toolkit session.

    The session is created on first use, so building the source does not
    require a terminal.
    """

    def __init__(self) -> None:
        self._session: PromptSession | None = None

    @property
    def session(self) -> PromptSession:
        # One session keeps history.
        if self._session is None:
            self._session = PromptSession(erase_when_done=True)
        return self._session

    def build_prompt(self, prompt: str) -> str:
        """
        Turns a prompt into the text shown to the user.

        The question is kept as a header and its options are listed in a
        table of key and label.
        """
        options = _OPTION_PATTERN.findall(prompt)
        if not options:
            return "\n" + prompt + "\n> "
        header = prompt.split("(", 1)[0].rstrip(" :")
        table = Table(title="Choices", pad_edge=False)
        table.add_column("Key", style="cyan", no_wrap=True)
        table.add_column("Choice", style="bold")
        for key, label in options:
            table.add_row(key, label)
        return "\n" + header + "\n" + ccapture(table) + "\n> "

    def read_token(self, prompt: str) -> str:
        text = self.build_prompt(prompt)
        while True:
            try:
                answer = self.session.prompt(ANSI(text))
            except (EOFError, KeyboardInterrupt):
                return SKIP_TOKEN
            # Keep asking until the user provides some input.
            if answer.strip():
                return answer.strip().lower()
