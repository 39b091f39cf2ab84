from __future__ import annotations  # noqa: D100

import pytest

from eventq import get_layout

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from eventq import QueueLayout


def queue_with(
    index: int,
    count: int,
    seq_num: int,
    size: int = 4,
    layout: QueueLayout | str = "minimal",
    flags: int | None = None,
) -> bytes:
    """
    Build a queue snapshot with @size slots.

    @index goes into the header's ring index field. Each slot's order ID
    is its physical index, for easy tests.
    """
    layout = get_layout(layout)
    if flags is None:
        flags = layout.flag_mask
    b = bytearray(layout.blob_size(size))
    layout.header.pack_into(b, 0, flags, index, count, seq_num)
    hs = layout.header_size
    for i in range(size):
        pos = hs + i * layout.slot_size
        b[pos : pos + layout.slot_size] = layout.codec(order_id=i).to_bytes()
    return bytes(b)


@pytest.fixture
def queue():
    "fixture for the snapshot builder"
    return queue_with
