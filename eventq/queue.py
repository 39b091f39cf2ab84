"""
Decoders for the order-book event and request queues.

These return the slot records themselves, with ``seq_num`` filled in.
"""

from __future__ import annotations

from .ring import RingReader

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .entry import Event, Request
    from .layout import QueueLayout
    from .ring import Live

__all__ = ["decode_event_queue", "decode_events_since", "decode_request_queue"]


def _entries(slots: Iterable[Live]) -> list:
    res = []
    for s in slots:
        s.entry.seq_num = s.seq
        res.append(s.entry)
    return res


def decode_event_queue(
    data, history: int | None = None, layout: QueueLayout | str = "event_queue"
) -> list[Event]:
    """
    Decode the live events of an event queue account.

    Without @history the result is oldest first. Otherwise it holds the
    newest @history events, newest first.
    """
    return _entries(RingReader(data, layout).decode_valid(history))


def decode_events_since(
    data, last_seen: int | None, layout: QueueLayout | str = "event_queue"
) -> list[Event]:
    """
    Decode the events after @last_seen, oldest first.
    """
    return _entries(RingReader(data, layout).decode_since(last_seen))


def decode_request_queue(
    data, history: int | None = None, layout: QueueLayout | str = "request_queue"
) -> list[Request]:
    """
    Decode the live requests of a request queue account.
    """
    return _entries(RingReader(data, layout).decode_valid(history))
