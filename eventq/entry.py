"""
Slot records of the order-book queues.
"""

from __future__ import annotations

# struct Event
# {
#  uint8_t event_flags;   // fill, out, bid, maker
#  uint8_t open_orders_slot;
#  uint8_t fee_tier;
#  uint8_t _pad[5];
#  uint64_t native_qty_released;
#  uint64_t native_qty_paid;
#  uint64_t native_fee_or_rebate;
#  uint128_t order_id;
#  uint8_t open_orders[32];
#  uint64_t client_order_id;
# } __attribute__((packed));
#
# struct Request has the same head, then
#  uint64_t max_base_size_or_cancel_id;
#  uint64_t native_quote_qty_locked;
# followed by order_id, open_orders and client_order_id.
from dataclasses import dataclass, field
from enum import IntFlag
from struct import Struct

from typing import ClassVar

__all__ = [
    "Event",
    "EventFlags",
    "RawEntry",
    "Request",
    "RequestFlags",
    "entry_codec",
]

try:
    _dcc = dataclass(slots=True)
except TypeError:
    _dcc = dataclass()


class EventFlags(IntFlag):
    "Flag byte of an event-queue slot"

    fill = 0x01
    out = 0x02
    bid = 0x04
    maker = 0x08


class RequestFlags(IntFlag):
    "Flag byte of a request-queue slot"

    new_order = 0x01
    cancel_order = 0x02
    bid = 0x04
    post_only = 0x08
    ioc = 0x10


def _u128(b: bytes) -> int:
    return int.from_bytes(b, "little")


def _b128(n: int) -> bytes:
    return n.to_bytes(16, "little")


@_dcc
class Event:
    "A fill or out event"

    flags: EventFlags = EventFlags(0)
    open_orders_slot: int = 0
    fee_tier: int = 0
    native_qty_released: int = 0
    native_qty_paid: int = 0
    native_fee_or_rebate: int = 0
    order_id: int = 0
    open_orders: bytes = bytes(32)
    client_order_id: int = 0

    # not part of the record; filled in by the queue decoder
    seq_num: int | None = field(default=None, compare=False)

    S: ClassVar = Struct("<BBB5xQQQ16s32sQ")

    @property
    def is_fill(self) -> bool:  # noqa:D102
        return bool(self.flags & EventFlags.fill)

    @property
    def is_bid(self) -> bool:  # noqa:D102
        return bool(self.flags & EventFlags.bid)

    @property
    def is_maker(self) -> bool:  # noqa:D102
        return bool(self.flags & EventFlags.maker)

    @classmethod
    def from_bytes(cls, data):  # noqa:D102
        self = cls()
        (
            fl,
            self.open_orders_slot,
            self.fee_tier,
            self.native_qty_released,
            self.native_qty_paid,
            self.native_fee_or_rebate,
            oid,
            self.open_orders,
            self.client_order_id,
        ) = self.S.unpack(data)
        self.flags = EventFlags(fl)
        self.order_id = _u128(oid)
        return self

    def to_bytes(self) -> bytes:  # noqa:D102
        return self.S.pack(
            int(self.flags),
            self.open_orders_slot,
            self.fee_tier,
            self.native_qty_released,
            self.native_qty_paid,
            self.native_fee_or_rebate,
            _b128(self.order_id),
            self.open_orders,
            self.client_order_id,
        )


@_dcc
class Request:
    "A new-order or cancel request"

    flags: RequestFlags = RequestFlags(0)
    open_orders_slot: int = 0
    fee_tier: int = 0
    max_base_size_or_cancel_id: int = 0
    native_quote_qty_locked: int = 0
    order_id: int = 0
    open_orders: bytes = bytes(32)
    client_order_id: int = 0

    seq_num: int | None = field(default=None, compare=False)

    S: ClassVar = Struct("<BBB5xQQ16s32sQ")

    @classmethod
    def from_bytes(cls, data):  # noqa:D102
        self = cls()
        (
            fl,
            self.open_orders_slot,
            self.fee_tier,
            self.max_base_size_or_cancel_id,
            self.native_quote_qty_locked,
            oid,
            self.open_orders,
            self.client_order_id,
        ) = self.S.unpack(data)
        self.flags = RequestFlags(fl)
        self.order_id = _u128(oid)
        return self

    def to_bytes(self) -> bytes:  # noqa:D102
        return self.S.pack(
            int(self.flags),
            self.open_orders_slot,
            self.fee_tier,
            self.max_base_size_or_cancel_id,
            self.native_quote_qty_locked,
            _b128(self.order_id),
            self.open_orders,
            self.client_order_id,
        )


class RawEntry:
    """
    Codec for slots whose content we don't interpret.

    Instances stand in for a record class: ``from_bytes`` returns the
    slot's bytes unchanged.
    """

    def __init__(self, size: int):
        if size <= 0:
            raise ValueError(f"Entry size must be positive, not {size}")
        self.S = Struct(f"{size}s")

    def __repr__(self):
        return f"<RawEntry:{self.S.size}>"

    def from_bytes(self, data) -> bytes:  # noqa:D102
        return bytes(data)


_codecs = {
    "event": Event,
    "request": Request,
}


def entry_codec(name: str, size: int | None = None):
    """
    Return the record codec called @name.

    ``raw`` needs a slot size.
    """
    if name == "raw":
        if size is None:
            raise ValueError("raw entries need a size")
        return RawEntry(size)
    try:
        return _codecs[name]
    except KeyError:
        raise ValueError(f"Unknown entry type {name!r}") from None
