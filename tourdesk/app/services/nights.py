"""Redistribution of a voucher's fixed nights after one stay is edited."""

import logging
from collections.abc import Sequence

from tourdesk.app.errors import NightAllocationError
from tourdesk.app.models.voucher import VoucherHotelStay
from tourdesk.app.utils.metrics import night_reallocations_total

logger = logging.getLogger(__name__)


def _absorb_remainder(nights: list[int], start: int, remaining: int) -> None:
    """Fit stays after the edited one into the remaining budget.

    Every stay but the last keeps its nights up to what is left. The last stay
    takes exactly the leftover, which keeps the total intact.
    """
    last = len(nights) - 1
    for i in range(start, last):
        nights[i] = min(nights[i], remaining)
        remaining -= nights[i]
    nights[last] = remaining


def allocate_nights(
    stays: Sequence[VoucherHotelStay],
    edited_index: int,
    requested_value: int,
    total_nights: int,
) -> list[VoucherHotelStay]:
    """Apply an edit to one stay's nights and rebalance the stays after it.

    Stays before edited_index are returned unchanged. The edited stay gets
    requested_value clamped into [0, budget left after the preceding stays].
    Later stays shrink to fit what remains and the last one absorbs the rest,
    so the nights always add up to total_nights. When the edited stay is the
    last one it takes the whole remaining budget.

    Args:
        stays: Ordered hotel stays; not modified
        edited_index: Position of the stay the user changed
        requested_value: Nights the user typed
        total_nights: Fixed nights budget of the voucher

    Returns:
        New list of stays, same length and order

    Raises:
        NightAllocationError: On negative total_nights or stay nights, an
            out-of-range edited_index, or preceding stays over the budget
    """
    if total_nights < 0:
        raise NightAllocationError(f"total_nights must be >= 0, got {total_nights}")
    if not 0 <= edited_index < len(stays):
        raise NightAllocationError(
            f"edited_index {edited_index} out of range for {len(stays)} stays"
        )

    nights = [stay.nights for stay in stays]
    if any(n < 0 for n in nights):
        raise NightAllocationError("stay nights must be >= 0")

    preceding_sum = sum(nights[:edited_index])
    available = total_nights - preceding_sum
    if available < 0:
        raise NightAllocationError(
            f"stays before index {edited_index} already use {preceding_sum} "
            f"of {total_nights} nights"
        )

    clamped = min(max(requested_value, 0), available)

    if edited_index == len(nights) - 1:
        # The last stay always carries whatever budget is left
        nights[edited_index] = available
    else:
        nights[edited_index] = clamped
        _absorb_remainder(nights, edited_index + 1, available - clamped)

    adjusted = nights[edited_index] != requested_value
    night_reallocations_total.labels(clamped=str(adjusted).lower()).inc()
    if adjusted:
        logger.debug(
            f"Nights for stay {edited_index} set to {nights[edited_index]} "
            f"instead of requested {requested_value}"
        )

    return [stay.model_copy(update={"nights": nights[i]}) for i, stay in enumerate(stays)]
