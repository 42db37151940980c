"""
Input sources feeding the player's decisions.

The engine reads a small closed vocabulary of tokens: action choices
(m, a, l, s) and directions (w, a, s, d).
"""

from abc import ABC, abstractmethod
from collections import deque
from collections.abc import Iterable

from core.logging import log_debug

SKIP_TOKEN = "s"


class InputSource(ABC):
    """Blocking source of input tokens."""

    @abstractmethod
    def read_token(self, prompt: str) -> str:
        """
        Shows a prompt and returns the next token, stripped and lower-cased.

        Args:
            prompt (str): The question shown to the user.

        Returns:
            str: The token typed by the user.

        """


class ScriptedInputSource(InputSource):
    """
    Replays a fixed sequence of tokens.

    Once the script is exhausted every read returns the skip token, so an
    automated run always terminates its turns.
    """

    def __init__(self, tokens: Iterable[str] = ()) -> None:
        self._tokens: deque[str] = deque(tokens)
        self.prompts: list[str] = []

    def push(self, *tokens: str) -> None:
        """Appends tokens to the end of the script."""
        self._tokens.extend(tokens)

    @property
    def remaining(self) -> int:
        return len(self._tokens)

    def read_token(self, prompt: str) -> str:
        self.prompts.append(prompt)
        token = self._tokens.popleft() if self._tokens else SKIP_TOKEN
        log_debug(f"Scripted input: {token!r}", {"prompt": prompt})
        return token.strip().lower()
