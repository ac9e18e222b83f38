"""Input validators used by the ordering prompts.

Each validator is a predicate over the raw text the customer typed. A
rejected answer is simply asked again by the driver.
"""

import re
from typing import Callable

_BANK_ACCOUNT = re.compile(r"[0-9]{13}")
_CREDIT_CARD = re.compile(r"[0-9]{16}")
_PIN = re.compile(r"[0-9]{4}")
_DIGITS = re.compile(r"[0-9]+")


def is_positive_quantity(value: str) -> bool:
    """Accept whole numbers greater than zero ("2", " 3 "), reject "0", "-1", "3.5"."""
    try:
        return int(value) > 0
    except ValueError:
        return False


def is_bank_account(value: str) -> bool:
    return _BANK_ACCOUNT.fullmatch(value) is not None


def is_credit_card(value: str) -> bool:
    return _CREDIT_CARD.fullmatch(value) is not None


def is_pin(value: str) -> bool:
    return _PIN.fullmatch(value) is not None


def is_easypaisa_account(value: str) -> bool:
    return _DIGITS.fullmatch(value) is not None


def exact_amount(total: int) -> Callable[[str], bool]:
    """Build a validator accepting only the exact total, written as digits.

    Compares digit strings, so arbitrarily long answers are rejected without
    an integer conversion.
    """
    expected = str(total)

    def validate(value: str) -> bool:
        text = value.strip()
        return _DIGITS.fullmatch(text) is not None and (text.lstrip("0") or "0") == expected

    return validate
