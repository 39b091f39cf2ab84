"""
Reader for a snapshot of a circular event queue.

The producer writes fixed-size entries into a ring of slots. Its header
holds a ring index, the number of live entries and the next sequence
number. Slots outside the live window still contain whatever an evicted
entry left there; they are reported as `Stale` and never decoded.

Sequence numbers increase by one per slot: the slot ``d`` steps after the
oldest live one has number ``seq_num - count + d``.
"""

from __future__ import annotations

import logging

from attrs import define, field

from .errors import DecodeError
from .header import parse_header
from .layout import get_layout

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence
    from typing import Any

    from .header import QueueHeader
    from .layout import QueueLayout

logger = logging.getLogger(__name__)

__all__ = ["Live", "RingReader", "Stale", "missed", "physical_slot"]


@define(frozen=True)
class Live:
    """
    A live slot with its decoded entry.

    Equality only looks at ``index`` and ``seq``; the entry is not compared.
    """

    index: int
    seq: int
    entry: Any = field(eq=False)

    live = True


@define(frozen=True)
class Stale:
    """
    A slot outside the live window.

    ``seq`` is the number of the evicted entry that last used the slot,
    projected backwards from the live window. It may be negative and need
    not belong to any entry that was actually written.
    """

    index: int
    seq: int

    live = False


def physical_slot(tail: int, capacity: int, offset: int) -> int:
    "Physical index of the slot @offset steps after @tail."
    if offset < 0:
        raise ValueError(f"Offset must not be negative, not {offset}")
    return (tail + offset) % capacity


def missed(events: Sequence[Live], last_seen: int | None) -> int:
    """
    Count the entries lost between @last_seen and the first of @events.

    @events is the result of `RingReader.decode_since`.
    """
    if not events or last_seen is None:
        return 0
    return max(0, events[0].seq - last_seen - 1)


class RingReader:
    """
    Decode one snapshot of a queue account.

    The reader never modifies @data and keeps no state beyond the parsed
    header, so create a new one for every snapshot.

    Raises `MalformedHeader` or `CapacityMismatch` if the snapshot is
    unusable.
    """

    layout: QueueLayout
    header: QueueHeader

    def __init__(self, data, layout: QueueLayout | str = "minimal"):
        self.layout = get_layout(layout)
        self._data = memoryview(data).toreadonly()
        self.header, self._off = parse_header(self._data, self.layout)

    @classmethod
    def probe(cls, data, layout: QueueLayout | str = "minimal") -> RingReader | DecodeError:
        """
        Like the constructor, but returns a decoding error instead of
        raising it.
        """
        try:
            return cls(data, layout)
        except DecodeError as exc:
            logger.debug("Unusable snapshot: %r", exc)
            return exc

    def __len__(self):
        return self.header.count

    def __repr__(self):
        h = self.header
        return f"<Ring:{h.count}/{h.capacity} @{h.seq_num}>"

    @property
    def capacity(self) -> int:  # noqa:D102
        return self.header.capacity

    def physical_slot(self, offset: int) -> int:
        "Physical index of the slot @offset steps after the oldest live one."
        return physical_slot(self.header.tail, self.header.capacity, offset)

    def _entry(self, index: int) -> Any:
        size = self.layout.slot_size
        pos = self._off + index * size
        return self.layout.codec.from_bytes(self._data[pos : pos + size])

    def _live(self, offset: int) -> Live:
        idx = self.physical_slot(offset)
        return Live(idx, self.header.oldest_seq + offset, self._entry(idx))

    def slot(self, offset: int) -> Live | Stale:
        """
        The slot @offset steps after the oldest live one.

        Offsets wrap around the ring. Slots beyond the live window are
        returned as `Stale`, numbered like the evicted entry that last
        used them.
        """
        h = self.header
        idx = self.physical_slot(offset)
        offset %= h.capacity
        if offset < h.count:
            return self._live(offset)
        return Stale(idx, h.oldest_seq + offset - h.capacity)

    def decode_valid(self, limit: int | None = None) -> list[Live]:
        """
        Return the live entries.

        Without @limit: all of them, oldest first.
        With @limit: the newest @limit entries, newest first.
        """
        count = self.header.count
        if limit is None:
            res = [self._live(d) for d in range(count)]
        else:
            n = min(max(limit, 0), count)
            res = [self._live(d) for d in range(count - 1, count - 1 - n, -1)]
        logger.debug("%r: %d valid, limit %s", self, len(res), limit)
        return res

    def decode_since(self, last_seen: int | None) -> list[Live]:
        """
        Return the live entries whose sequence number is above @last_seen,
        oldest first.

        Entries that have already been overwritten are silently skipped.
        Use `missed` to find out how many.
        """
        h = self.header
        if last_seen is None:
            first = h.oldest_seq
        elif last_seen >= h.newest_seq:
            return []
        else:
            first = max(last_seen + 1, h.oldest_seq)
        res = [self._live(seq - h.oldest_seq) for seq in range(first, h.seq_num)]
        if last_seen is not None and first > last_seen + 1:
            logger.debug("%r: skipped %d entries after %d", self, first - last_seen - 1, last_seen)
        return res

    def dump(self, n: int | None = None) -> Iterator[Live | Stale]:
        """
        Walk back from the newest slot over @n physical slots (default:
        all of them), newest first.

        This is for diagnostics. Only `Live` results are real entries.
        """
        h = self.header
        n = h.capacity if n is None else min(max(n, 0), h.capacity)
        for i in range(n):
            if i < h.count:
                yield self._live(h.count - 1 - i)
            else:
                yield Stale((h.head - 1 - i) % h.capacity, h.seq_num - 1 - i)
