"""Purchasable unit catalog and currency-credit hook.

Payment itself happens elsewhere; the purchase flow calls back into
:func:`credit` (or :func:`schedule_credit`) with the amount to add to a
balance the caller owns.
"""

import logging
import threading
from decimal import Decimal
from typing import Callable

from moodcapsule.domain.entities import PurchasableUnit
from moodcapsule.domain.errors import ValidationError

logger = logging.getLogger(__name__)

CreditHook = Callable[[int], None]

CATALOG: tuple[PurchasableUnit, ...] = (
    PurchasableUnit(price=Decimal("8.00"), credited_amount=1200),
    PurchasableUnit(price=Decimal("15.00"), credited_amount=2888, is_popular=True, discount_percent=15),
    PurchasableUnit(price=Decimal("22.00"), credited_amount=3600),
    PurchasableUnit(price=Decimal("28.00"), credited_amount=5000),
)

PURCHASE_DELAY_SECONDS = 1.5


def credit(hook: CreditHook, amount: int) -> None:
    """Pass a positive currency amount to the balance hook.

    Raises:
        ValidationError: If amount is not a positive integer
    """
    if isinstance(amount, bool) or not isinstance(amount, int) or amount <= 0:
        raise ValidationError(f"Credit amount must be a positive integer, got {amount!r}")
    logger.info("Crediting %d", amount)
    hook(amount)


def schedule_credit(
    hook: CreditHook, amount: int, delay: float = PURCHASE_DELAY_SECONDS
) -> threading.Timer:
    """Credit ``amount`` after ``delay`` seconds on a background timer.

    Cancelling the returned timer before it fires skips the credit. This is
    best effort: a timer that has already fired cannot be undone.

    Raises:
        ValidationError: If amount is not a positive integer
    """
    if isinstance(amount, bool) or not isinstance(amount, int) or amount <= 0:
        raise ValidationError(f"Credit amount must be a positive integer, got {amount!r}")
    timer = threading.Timer(delay, credit, args=(hook, amount))
    timer.daemon = True
    timer.start()
    return timer
