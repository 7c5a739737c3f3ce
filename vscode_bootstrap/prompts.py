"""Console dialogs: confirmations, a selection menu and notifications."""

import logging
from typing import Callable, Optional, Sequence, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Prompter:
    """
    Terminal stand-in for the editor's message boxes and quick pick.

    With assume_yes every question is answered with its first choice, which is
    always the accepting one. End of input counts as dismissing the dialog.
    """

    def __init__(
        self,
        assume_yes: bool = False,
        input_func: Callable[[str], str] = input,
        output_func: Callable[[str], None] = print,
    ):
        self.assume_yes = assume_yes
        self._input = input_func
        self._print = output_func

    def _read(self, prompt: str) -> Optional[str]:
        try:
            return self._input(prompt).strip()
        except EOFError:
            return None

    def info(self, message: str) -> None:
        self._print(message)

    def warning(self, message: str) -> None:
        self._print(f"Warning: {message}")

    def error(self, message: str) -> None:
        self._print(f"Error: {message}")

    def ask(self, message: str, *choices: str, warning: bool = False) -> Optional[str]:
        """Show message with button-like choices. Returns the chosen label or None."""
        if warning:
            self.warning(message)
        else:
            self.info(message)
        if self.assume_yes:
            self._print(f"[{choices[0]}]")
            return choices[0]

        labels = " / ".join(f"{idx}) {choice}" for idx, choice in enumerate(choices, 1))
        answer = self._read(f"{labels}: ")
        if not answer:
            return None
        if answer.isdigit() and 1 <= int(answer) <= len(choices):
            return choices[int(answer) - 1]
        for choice in choices:
            if answer.lower() == choice.lower():
                return choice
        # "y" only stands in for a plain "Yes"; cleanup-style buttons need their full label
        if answer.lower() == "y" and choices[0] == "Yes":
            return choices[0]
        return None

    def pick(self, items: Sequence[T], label: Callable[[T], str], placeholder: str) -> Optional[T]:
        """Numbered selection menu. Returns the selected item or None."""
        self._print(placeholder)
        for idx, item in enumerate(items, 1):
            self._print(f"  {idx}) {label(item)}")
        answer = self._read("> ")
        if answer and answer.isdigit() and 1 <= int(answer) <= len(items):
            return items[int(answer) - 1]
        if answer:
            logger.debug(f"Ignoring menu answer {answer!r}")
        return None
