from dataclasses import dataclass
from typing import Callable


class InvalidInput(ValueError):
    """Raised when the user types something that is not a number."""


@dataclass
class Command:
    choice: str
    ask: Callable[[str], str | None]

    def get(self, prompt: str) -> str:
        """Ask for one more line of input. End of input stops the shell."""
        if prompt is None:
            raise ValueError("Prompt cannot be None")

        line = self.ask(prompt)
        if line is None:
            raise EOFError("Input ended while reading an argument")
        return line.strip()

    def get_int(self, prompt: str) -> int:
        text = self.get(prompt)
        try:
            return int(text)
        except ValueError:
            raise InvalidInput(f"Not an integer: {text!r}") from None
