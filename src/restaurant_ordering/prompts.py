"""Prompt configuration and the interaction drivers that answer prompts.

The session graph never talks to the terminal directly. It describes each
question as a PromptSpec and hands it to an InteractionDriver, which keeps
asking until the answer passes the prompt's validator.
"""

from typing import Any, Callable, Protocol

from loguru import logger
from pydantic import BaseModel, ConfigDict, model_validator
from rich.console import Console, RenderableType
from rich.prompt import Confirm, Prompt
from rich.text import Text

from .enums import PromptKind

DEFAULT_ERROR_MESSAGE = "Invalid input, please try again."


class PromptSpec(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: PromptKind
    message: str
    choices: list[str] | None = None
    validator: Callable[[str], bool] | None = None
    default: str | bool | None = None
    error_message: str = DEFAULT_ERROR_MESSAGE

    @model_validator(mode="after")
    def check_choices(self) -> "PromptSpec":
        if self.kind == PromptKind.LIST and not self.choices:
            raise ValueError("list prompts need at least one choice")
        return self

    def accepts(self, value: str) -> bool:
        return self.validator is None or self.validator(value)


def list_prompt(message: str, choices: list[str]) -> PromptSpec:
    return PromptSpec(kind=PromptKind.LIST, message=message, choices=choices)


def text_prompt(
    message: str,
    validator: Callable[[str], bool] | None = None,
    error_message: str = DEFAULT_ERROR_MESSAGE,
) -> PromptSpec:
    return PromptSpec(kind=PromptKind.TEXT, message=message, validator=validator, error_message=error_message)


def masked_prompt(
    message: str,
    validator: Callable[[str], bool] | None = None,
    error_message: str = DEFAULT_ERROR_MESSAGE,
) -> PromptSpec:
    return PromptSpec(kind=PromptKind.MASKED, message=message, validator=validator, error_message=error_message)


def confirm_prompt(message: str, default: bool = False) -> PromptSpec:
    return PromptSpec(kind=PromptKind.CONFIRM, message=message, default=default)


class InteractionDriver(Protocol):
    """Anything that can ask the customer a question and show them text."""

    def ask(self, prompt: PromptSpec) -> Any:
        """Return the chosen label (list), the typed text (text/masked) or a bool (confirm)."""
        ...

    def say(self, message: RenderableType, style: str | None = None) -> None: ...


class ConsoleDriver:
    """InteractionDriver backed by a rich Console."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console(highlight=False)

    def say(self, message: RenderableType, style: str | None = None) -> None:
        self.console.print(message, style=style, markup=False)

    def ask(self, prompt: PromptSpec) -> Any:
        if prompt.kind == PromptKind.CONFIRM:
            return Confirm.ask(Text(prompt.message), default=bool(prompt.default), console=self.console)
        if prompt.kind == PromptKind.LIST:
            return self._ask_choice(prompt)
        return self._ask_text(prompt)

    def _ask_choice(self, prompt: PromptSpec) -> str:
        choices = prompt.choices or []
        self.console.print(Text(prompt.message, style="bold"))
        for number, choice in enumerate(choices, start=1):
            self.console.print(Text(f"  {number}. {choice}"))
        numbers = [str(number) for number in range(1, len(choices) + 1)]
        # rich re-asks on its own until one of the numbers is typed
        answer = Prompt.ask(Text("Enter a number"), choices=numbers, show_choices=False, console=self.console)
        return choices[int(answer) - 1]

    def _ask_text(self, prompt: PromptSpec) -> str:
        password = prompt.kind == PromptKind.MASKED
        while True:
            if isinstance(prompt.default, str):
                value = Prompt.ask(
                    Text(prompt.message), password=password, default=prompt.default, console=self.console
                )
            else:
                value = Prompt.ask(Text(prompt.message), password=password, console=self.console)
            if prompt.accepts(value):
                return value
            logger.debug("Rejected answer for prompt: {}", prompt.message)
            self.console.print(Text(prompt.error_message, style="red"))
