from abc import ABC, abstractmethod

import click


class Prompter(ABC):
    """Blocking operator input. There is no timeout."""

    @abstractmethod
    def ask(self, message: str, hide_input: bool = False) -> str:
        pass

    @abstractmethod
    def confirm(self, message: str) -> bool:
        pass


class ClickPrompter(Prompter):
    def ask(self, message: str, hide_input: bool = False) -> str:
        return click.prompt(message, hide_input=hide_input, default="", show_default=False)

    def confirm(self, message: str) -> bool:
        return click.confirm(message, default=False)
