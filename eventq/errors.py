"""
Errors raised while decoding a queue snapshot.
"""

from __future__ import annotations

__all__ = ["CapacityMismatch", "DecodeError", "MalformedHeader"]


class DecodeError(ValueError):
    """
    The snapshot cannot be decoded.

    The caller should discard it and fetch a new one.
    """


class MalformedHeader(DecodeError):
    "Header too short, inconsistent, or required flags missing"


class CapacityMismatch(DecodeError):
    "The slot area is not a whole number of entries"
