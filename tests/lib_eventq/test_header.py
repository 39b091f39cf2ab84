"""
Tests for header parsing and snapshot validation.
"""

from __future__ import annotations

import pytest

from eventq import (
    CapacityMismatch,
    DecodeError,
    MalformedHeader,
    RingReader,
    get_layout,
    parse_header,
)


def test_minimal_header(queue):  # noqa:D103
    layout = get_layout("minimal")
    hdr, off = parse_header(queue(2, 4, 6), layout)
    assert off == 16
    assert hdr.flags == 3
    assert (hdr.head, hdr.tail, hdr.count, hdr.seq_num) == (2, 2, 4, 6)
    assert hdr.capacity == 4
    assert (hdr.oldest_seq, hdr.newest_seq) == (2, 5)


def test_short_blob():  # noqa:D103
    layout = get_layout("minimal")
    with pytest.raises(MalformedHeader):
        parse_header(b"\x03\x00\x00\x00\x00\x00", layout)
    with pytest.raises(MalformedHeader):
        RingReader(b"")


@pytest.mark.parametrize("flags", [0, 1, 2, 4, 0x100])
def test_missing_flags(queue, flags):  # noqa:D103
    with pytest.raises(MalformedHeader):
        RingReader(queue(0, 0, 0, flags=flags))


def test_extra_flags(queue):  # noqa:D103
    rd = RingReader(queue(0, 1, 1, flags=0xFF))
    assert len(rd) == 1


def test_capacity_mismatch(queue):  # noqa:D103
    with pytest.raises(CapacityMismatch):
        RingReader(queue(0, 0, 0) + b"\x00")
    with pytest.raises(CapacityMismatch):
        RingReader(queue(0, 0, 0)[:-1])


def test_no_slots(queue):  # noqa:D103
    with pytest.raises(CapacityMismatch):
        RingReader(queue(0, 0, 0, size=0))


def test_bad_counts(queue):  # noqa:D103
    with pytest.raises(MalformedHeader):
        RingReader(queue(0, 5, 5))
    with pytest.raises(MalformedHeader):
        RingReader(queue(4, 0, 0))


def test_errors_are_value_errors():  # noqa:D103
    assert issubclass(MalformedHeader, DecodeError)
    assert issubclass(CapacityMismatch, DecodeError)
    assert issubclass(DecodeError, ValueError)


def test_probe(queue):  # noqa:D103
    rd = RingReader.probe(queue(2, 4, 6))
    assert isinstance(rd, RingReader)
    assert len(rd) == 4

    err = RingReader.probe(queue(2, 4, 6)[:-3])
    assert isinstance(err, CapacityMismatch)
    err = RingReader.probe(b"\x01")
    assert isinstance(err, MalformedHeader)


class TestSerumHeader:
    """The Serum queue header stores the tail."""

    def test_event_queue(self, queue):
        """37-byte header, index is the oldest slot."""
        layout = get_layout("event_queue")
        assert layout.header_size == 37
        b = queue(1, 2, 9, layout=layout)
        assert len(b) == 37 + 4 * 88 + 7
        assert b[37 + 4 * 88 :] == bytes(7)

        hdr, off = parse_header(b, layout)
        assert off == 37
        assert (hdr.tail, hdr.head, hdr.count, hdr.seq_num) == (1, 3, 2, 9)
        assert hdr.flags == 0x11

    def test_wrong_queue_kind(self, queue):
        """A request queue is not an event queue."""
        b = queue(0, 0, 0, layout="request_queue")
        with pytest.raises(DecodeError):
            RingReader(b, "event_queue")
        rq = get_layout("request_queue")
        with pytest.raises(MalformedHeader):
            RingReader(queue(0, 0, 0, layout="event_queue", flags=rq.flag_mask))
