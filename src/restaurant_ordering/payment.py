"""Payment method selection and per-method detail collection.

No money moves here: each branch only gathers and checks the customer's
details and produces the description stored on the order.
"""

from loguru import logger

from .enums import PaymentMethod
from .prompts import InteractionDriver, list_prompt, masked_prompt, text_prompt
from .rendering import format_price
from .validators import (
    exact_amount,
    is_bank_account,
    is_credit_card,
    is_easypaisa_account,
    is_pin,
)


def choose_payment_method(driver: InteractionDriver) -> PaymentMethod:
    answer = driver.ask(list_prompt("Select your payment method:", [method.value for method in PaymentMethod]))
    return PaymentMethod(answer)


def ask_amount_to_pay(driver: InteractionDriver, total: int) -> int:
    """Ask for the amount to pay; only the exact total is accepted."""
    answer = driver.ask(
        text_prompt(
            f"Enter the amount to pay ({format_price(total)}):",
            validator=exact_amount(total),
            error_message=f"The amount must be exactly {format_price(total)}.",
        )
    )
    return int(answer)


def mask_card_number(number: str) -> str:
    return "*" * (len(number) - 4) + number[-4:]


def collect_payment(driver: InteractionDriver, method: PaymentMethod, total: int) -> str:
    """Collect the fields for ``method`` and return the payment description."""
    if method == PaymentMethod.CASH_ON_DELIVERY:
        return PaymentMethod.CASH_ON_DELIVERY.value

    if method == PaymentMethod.BANK_ACCOUNT:
        account = driver.ask(
            text_prompt(
                "Enter your bank account number (13 digits):",
                validator=is_bank_account,
                error_message="A bank account number has exactly 13 digits.",
            )
        )
        amount = ask_amount_to_pay(driver, total)
        details = f"Bank Account: {account}, Amount Paid: {format_price(amount)}"

    elif method == PaymentMethod.CREDIT_CARD:
        card_number = driver.ask(
            text_prompt(
                "Enter your credit card number (16 digits):",
                validator=is_credit_card,
                error_message="A credit card number has exactly 16 digits.",
            )
        )
        # The PIN is checked but never kept.
        driver.ask(
            masked_prompt(
                "Enter your 4-digit PIN code:",
                validator=is_pin,
                error_message="The PIN code has exactly 4 digits.",
            )
        )
        amount = ask_amount_to_pay(driver, total)
        details = f"Credit Card: {mask_card_number(card_number)}, Amount Paid: {format_price(amount)}"

    elif method == PaymentMethod.EASYPAISA:
        account = driver.ask(
            text_prompt(
                "Enter your EasyPaisa account number:",
                validator=is_easypaisa_account,
                error_message="An EasyPaisa account number contains digits only.",
            )
        )
        amount = ask_amount_to_pay(driver, total)
        details = f"EasyPaisa: {account}, Amount Paid: {format_price(amount)}"

    else:
        raise ValueError(f"Unsupported payment method: {method}")

    logger.debug("Collected {} payment for {}", method.value, format_price(total))
    return details
