"""
Tests for fill interpretation.
"""

from __future__ import annotations

import pytest

from eventq import Event, EventFlags, get_layout, load_fills, parse_fill

F = EventFlags


def test_taker_buy():  # noqa:D103
    ev = Event(
        flags=F.fill | F.bid, native_qty_released=5, native_qty_paid=1000, native_fee_or_rebate=10
    )
    f = parse_fill(ev, 10, 100)
    assert f.side == "buy"
    assert f.price == pytest.approx(19.8)
    assert f.size == pytest.approx(0.5)
    assert f.fee_cost == pytest.approx(0.1)
    assert f.event is ev


def test_maker_sell():  # noqa:D103
    ev = Event(
        flags=F.fill | F.maker, native_qty_released=2000, native_qty_paid=10, native_fee_or_rebate=20
    )
    f = parse_fill(ev, 10, 100)
    assert f.side == "sell"
    assert f.price == pytest.approx(19.8)
    assert f.size == pytest.approx(1.0)
    assert f.fee_cost == pytest.approx(-0.2)


def test_no_price():  # noqa:D103
    ev = Event(flags=F.fill | F.bid, native_qty_paid=1000)
    assert parse_fill(ev, 10, 100).price is None


def test_load_fills():  # noqa:D103
    layout = get_layout("event_queue")
    events = [
        Event(flags=F.fill | F.bid, native_qty_released=5, native_qty_paid=1000, order_id=0),
        Event(flags=F.out, native_qty_released=3, order_id=1),
        Event(flags=F.fill, native_qty_released=500, native_qty_paid=0, order_id=2),
        Event(flags=F.fill, native_qty_released=500, native_qty_paid=5, order_id=3),
    ]
    b = bytearray(layout.blob_size(4))
    layout.header.pack_into(b, 0, layout.flag_mask, 0, 4, 4)
    for i, ev in enumerate(events):
        pos = layout.header_size + i * layout.slot_size
        b[pos : pos + layout.slot_size] = ev.to_bytes()

    fills = load_fills(b, 10, 100)
    assert [f.event.order_id for f in fills] == [3, 0]
    assert [f.side for f in fills] == ["sell", "buy"]
    assert [f.event.seq_num for f in fills] == [3, 0]

    assert [f.event.order_id for f in load_fills(b, 10, 100, limit=2)] == [3]
