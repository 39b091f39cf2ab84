"""
Incremental reading of successive queue snapshots.
"""

from __future__ import annotations

import logging

from .layout import get_layout
from .ring import RingReader, missed

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .layout import QueueLayout
    from .ring import Live

logger = logging.getLogger(__name__)

__all__ = ["EventFollower"]


class EventFollower:
    """
    Feed this object consecutive snapshots of a queue account; it returns
    the entries you haven't seen yet.

    ``last_seen`` is the sequence number of the newest entry returned so
    far, or ``None``. ``lost`` counts the entries that were overwritten
    before a snapshot caught them.

    Only ``last_seen`` is kept. Persist it yourself if you need to resume
    after a restart.
    """

    def __init__(self, layout: QueueLayout | str = "minimal", last_seen: int | None = None):
        self.layout = get_layout(layout)
        self.last_seen = last_seen
        self.lost = 0

    def __repr__(self):
        return f"<{self.__class__.__name__}:{self.layout.name} @{self.last_seen} lost={self.lost}>"

    def feed(self, data) -> list[Live]:
        """
        Decode a snapshot and return the new entries, oldest first.

        Raises `DecodeError` if the snapshot is unusable; the follower's
        state is unchanged in that case.
        """
        rd = RingReader(data, self.layout)
        res = rd.decode_since(self.last_seen)
        if not res:
            if self.last_seen is not None and self.last_seen > rd.header.newest_seq:
                logger.warning(
                    "%s: last seen %d is ahead of the queue (newest %d), producer restarted?",
                    self.layout.name,
                    self.last_seen,
                    rd.header.newest_seq,
                )
            return res

        n = missed(res, self.last_seen)
        if n:
            logger.warning(
                "%s: lost %d entries between %d and %d",
                self.layout.name,
                n,
                self.last_seen,
                res[0].seq,
            )
            self.lost += n
        self.last_seen = res[-1].seq
        return res
