"""
Per-slot payment apportioning.

A reservation over several slots receives one payment. Each resulting booking
records what was received for its own slot and what is still owed at the
venue, so the payment is split across slots before any booking is written.
"""

from typing import Optional, Sequence

import attrs

from src.platform.exception.exceptions import InvalidInputError


@attrs.define(frozen=True)
class SlotCharge:
    received: int
    remaining: int


def split_evenly(*, amount: int, parts: int) -> list[int]:
    """Integer split; the remainder goes one unit at a time to the earliest parts"""
    share, remainder = divmod(amount, parts)
    return [share + 1 if index < remainder else share for index in range(parts)]


def apportion_payment(
    *,
    amount: int,
    slot_count: int,
    base_price: int,
    advance_amount: int,
    amounts_per_slot: Optional[Sequence[int]] = None,
) -> list[SlotCharge]:
    if slot_count <= 0:
        raise InvalidInputError('At least one slot is required')
    if amount < 0:
        raise InvalidInputError('Amount cannot be negative')

    if amounts_per_slot is None:
        shares = split_evenly(amount=amount, parts=slot_count)
    else:
        shares = list(amounts_per_slot)
        if len(shares) != slot_count:
            raise InvalidInputError('amounts_per_slot must have one entry per slot')
        if sum(shares) != amount:
            raise InvalidInputError('amounts_per_slot must add up to the amount paid')

    for share in shares:
        if share < advance_amount:
            raise InvalidInputError(
                f'Each slot requires an advance of at least {advance_amount}, got {share}'
            )
        if share > base_price:
            raise InvalidInputError(f'Payment of {share} exceeds the slot price of {base_price}')

    return [SlotCharge(received=share, remaining=base_price - share) for share in shares]
