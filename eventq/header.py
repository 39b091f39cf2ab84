"""
Queue header parser.
"""

from __future__ import annotations

import logging

from attrs import define

from .errors import CapacityMismatch, MalformedHeader

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .layout import QueueLayout

logger = logging.getLogger(__name__)

__all__ = ["QueueHeader", "parse_header"]


@define(frozen=True)
class QueueHeader:
    """
    The decoded ring header.

    ``head`` is the slot the next entry goes to, ``tail`` the oldest live
    slot; stepping ``count`` slots from ``tail`` reaches ``head``.
    ``seq_num`` is the sequence number of the next entry.
    """

    flags: int
    head: int
    tail: int
    count: int
    seq_num: int
    capacity: int

    @property
    def oldest_seq(self) -> int:
        "sequence number of the oldest live entry"
        return self.seq_num - self.count

    @property
    def newest_seq(self) -> int:
        "sequence number of the newest live entry"
        return self.seq_num - 1


def parse_header(data, layout: QueueLayout) -> tuple[QueueHeader, int]:
    """
    Decode the header of a queue snapshot.

    Returns the header and the offset of the first slot.
    """
    hs = layout.header_size
    if len(data) < hs + layout.suffix:
        raise MalformedHeader(f"Need {hs + layout.suffix} bytes, got {len(data)}")

    flags, index, count, seq_num = layout.header.unpack_from(data, 0)
    mask = layout.flag_mask
    if flags & mask != mask:
        raise MalformedHeader(f"Flags {flags:#x} lack {mask:#x}")

    capacity, rest = divmod(len(data) - hs - layout.suffix, layout.slot_size)
    if rest or not capacity:
        raise CapacityMismatch(
            f"{len(data) - hs - layout.suffix} bytes for {layout.slot_size}-byte slots"
        )
    if count > capacity:
        raise MalformedHeader(f"Count {count} exceeds capacity {capacity}")
    if index >= capacity:
        raise MalformedHeader(f"{layout.index.capitalize()} {index} exceeds capacity {capacity}")

    if layout.index == "head":
        head, tail = index, (index - count) % capacity
    else:
        head, tail = (index + count) % capacity, index

    hdr = QueueHeader(
        flags=flags, head=head, tail=tail, count=count, seq_num=seq_num, capacity=capacity
    )
    logger.debug("Header %s: %r", layout.name, hdr)
    return hdr, hs
