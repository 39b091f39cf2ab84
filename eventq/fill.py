"""
Turn fill events into prices and sizes.
"""

from __future__ import annotations

from attrs import define

from .queue import decode_event_queue

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .entry import Event
    from .layout import QueueLayout

__all__ = ["Fill", "load_fills", "parse_fill"]


@define(frozen=True)
class Fill:
    """
    A fill, in token units.

    ``price`` is ``None`` if the event doesn't carry the quantity it would
    be divided by. ``fee_cost`` is negative for maker rebates.
    """

    event: Event
    side: str
    price: float | None
    size: float
    fee_cost: float


def _div(a: int, b: int) -> float | None:
    if not b:
        return None
    return a / b


def parse_fill(event: Event, base_multiplier: int, quote_multiplier: int) -> Fill:
    """
    Interpret a fill event.

    The multipliers are ``10 ** decimals`` of the base and quote tokens.
    """
    fee = event.native_fee_or_rebate
    if event.is_bid:
        side = "buy"
        paid = event.native_qty_paid + fee if event.is_maker else event.native_qty_paid - fee
        price = _div(paid * base_multiplier, quote_multiplier * event.native_qty_released)
        size = event.native_qty_released / base_multiplier
    else:
        side = "sell"
        got = (
            event.native_qty_released - fee
            if event.is_maker
            else event.native_qty_released + fee
        )
        price = _div(got * base_multiplier, quote_multiplier * event.native_qty_paid)
        size = event.native_qty_paid / base_multiplier

    fee_cost = fee / quote_multiplier
    if event.is_maker:
        fee_cost = -fee_cost
    return Fill(event=event, side=side, price=price, size=size, fee_cost=fee_cost)


def load_fills(
    data,
    base_multiplier: int,
    quote_multiplier: int,
    limit: int = 100,
    layout: QueueLayout | str = "event_queue",
) -> list[Fill]:
    """
    Return the fills among the newest @limit events of an event queue
    snapshot, newest first.
    """
    return [
        parse_fill(ev, base_multiplier, quote_multiplier)
        for ev in decode_event_queue(data, limit, layout=layout)
        if ev.is_fill and ev.native_qty_paid > 0
    ]
