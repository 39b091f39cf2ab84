"""
This library decodes snapshots of fixed-capacity circular event queues,
as found in order-book accounts.

`RingReader` parses one snapshot. It returns the live entries
(`RingReader.decode_valid`) or the ones newer than a sequence number you
already processed (`RingReader.decode_since`). Overwritten slots are never
returned as data.

`EventFollower` keeps track of the last sequence number across snapshots
and counts lost entries.
"""

from __future__ import annotations

from .entry import Event as Event
from .entry import EventFlags as EventFlags
from .entry import Request as Request
from .entry import RequestFlags as RequestFlags
from .errors import CapacityMismatch as CapacityMismatch
from .errors import DecodeError as DecodeError
from .errors import MalformedHeader as MalformedHeader
from .fill import Fill as Fill
from .fill import load_fills as load_fills
from .fill import parse_fill as parse_fill
from .follow import EventFollower as EventFollower
from .header import QueueHeader as QueueHeader
from .header import parse_header as parse_header
from .layout import QueueLayout as QueueLayout
from .layout import get_layout as get_layout
from .layout import load_layouts as load_layouts
from .queue import decode_event_queue as decode_event_queue
from .queue import decode_events_since as decode_events_since
from .queue import decode_request_queue as decode_request_queue
from .ring import Live as Live
from .ring import RingReader as RingReader
from .ring import Stale as Stale
from .ring import missed as missed
from .ring import physical_slot as physical_slot

__all__ = [
    "CapacityMismatch",
    "DecodeError",
    "Event",
    "EventFlags",
    "EventFollower",
    "Fill",
    "Live",
    "MalformedHeader",
    "QueueHeader",
    "QueueLayout",
    "Request",
    "RequestFlags",
    "RingReader",
    "Stale",
    "decode_event_queue",
    "decode_events_since",
    "decode_request_queue",
    "get_layout",
    "load_fills",
    "load_layouts",
    "missed",
    "parse_fill",
    "parse_header",
    "physical_slot",
]
