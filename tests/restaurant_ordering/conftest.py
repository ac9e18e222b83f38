"""Shared pytest fixtures for ordering tests."""

from collections import deque

import pytest

from restaurant_ordering.enums import PromptKind
from restaurant_ordering.models import Customer, MenuCatalog, OrderBook
from restaurant_ordering.prompts import PromptSpec


class ScriptedDriver:
    """InteractionDriver that answers prompts from a fixed script.

    Answers failing a prompt's validator are recorded in ``rejected`` and the
    next answer is tried, the same way a console user is asked again.
    """

    def __init__(self, answers):
        self.answers = deque(answers)
        self.asked: list[PromptSpec] = []
        self.rejected: list[tuple[str, str]] = []
        self.said: list = []

    def ask(self, prompt: PromptSpec):
        self.asked.append(prompt)
        while True:
            if not self.answers:
                raise AssertionError(f"No scripted answer left for: {prompt.message}")
            answer = self.answers.popleft()
            if prompt.kind == PromptKind.CONFIRM:
                return bool(answer)
            if prompt.accepts(answer):
                return answer
            self.rejected.append((prompt.message, answer))

    def say(self, message, style=None):
        self.said.append(message)

    @property
    def said_text(self) -> list[str]:
        return [message for message in self.said if isinstance(message, str)]

    def asked_messages(self) -> list[str]:
        return [prompt.message for prompt in self.asked]


@pytest.fixture
def catalog() -> MenuCatalog:
    """Two-item catalog used by the checkout scenarios."""
    catalog = MenuCatalog()
    catalog.seed([{"name": "Pasta Carbonara", "price": 1299}, {"name": "Kheer", "price": 799}])
    return catalog


@pytest.fixture
def order_book(catalog: MenuCatalog) -> OrderBook:
    return OrderBook(name="Swad's Delight", location="123 Main St", catalog=catalog)


@pytest.fixture
def customer() -> Customer:
    return Customer(name="Ayesha", email="ayesha@example.com", phone="03001234567")


@pytest.fixture
def customer_answers() -> list[str]:
    """Answers for the name / email / phone prompts."""
    return ["Ayesha", "ayesha@example.com", "03001234567"]


@pytest.fixture
def make_driver():
    return ScriptedDriver
