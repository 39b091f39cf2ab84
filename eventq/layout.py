"""
Queue account layouts.

A layout describes the header fields of a queue account and the record
type that lives in its slots. The built-in layouts are read from
``_cfg.yaml`` in this package; more can be loaded from any YAML file.
"""

from __future__ import annotations

import logging
from importlib.resources import files
from pathlib import Path
from struct import Struct

import ruyaml as yaml
from attrs import define, field

from .entry import entry_codec

from collections.abc import Mapping
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import Any, TextIO

logger = logging.getLogger(__name__)

__all__ = ["QueueLayout", "get_layout", "load_layouts", "yload"]

_flag_fmt = {4: "I", 8: "Q"}
_seq_fmt = {32: "I", 64: "Q"}


def yload(stream: TextIO | str) -> Any:
    """
    Load a YAML document.
    """
    y = yaml.YAML(typ="safe")
    return y.load(stream)


def _check_in(allowed):
    def _chk(inst, attr, value):
        if value not in allowed:
            raise ValueError(f"{attr.name} must be one of {sorted(allowed)}, not {value!r}")

    return _chk


@define(frozen=True)
class QueueLayout:
    """
    Geometry of a queue account.

    The header is, in this order: ``prefix`` opaque bytes, the account
    flags (``flags_size`` bytes), the stored ring index, the entry count
    and the sequence counter. Index and count are u32; each of the three
    fields occupies at least ``field_size`` bytes, the rest being zero
    padding. The sequence counter is ``seq_width`` bits wide.

    ``index`` names the ring index the producer stores: ``head`` (next
    slot to write) or ``tail`` (oldest live slot).
    """

    name: str = field(default="custom")
    prefix: int = field(default=0)
    suffix: int = field(default=0)
    flags_size: int = field(default=4, validator=_check_in(_flag_fmt))
    field_size: int = field(default=4)
    seq_width: int = field(default=32, validator=_check_in(_seq_fmt))
    index: str = field(default="head", validator=_check_in({"head", "tail"}))
    required: tuple[int, ...] = field(default=(0, 1), converter=tuple)
    entry: str = field(default="event")
    entry_size: int | None = field(default=None)

    header: Struct = field(init=False, eq=False, repr=False)
    codec: Any = field(init=False, eq=False, repr=False)

    def __attrs_post_init__(self):
        if self.prefix < 0 or self.suffix < 0 or self.field_size < 4:
            raise ValueError(f"Bad header geometry in layout {self.name!r}")

        fmt = "<"
        if self.prefix:
            fmt += f"{self.prefix}x"
        fmt += _flag_fmt[self.flags_size]
        pad = self.field_size - 4
        fmt += ("I" + (f"{pad}x" if pad else "")) * 2
        fmt += _seq_fmt[self.seq_width]
        pad = self.field_size - self.seq_width // 8
        if pad > 0:
            fmt += f"{pad}x"

        codec = entry_codec(self.entry, self.entry_size)
        if self.entry_size is not None and self.entry_size != codec.S.size:
            raise ValueError(
                f"Layout {self.name!r}: {self.entry} entries are {codec.S.size} bytes, "
                f"not {self.entry_size}"
            )

        # frozen
        object.__setattr__(self, "header", Struct(fmt))
        object.__setattr__(self, "codec", codec)

    @property
    def header_size(self) -> int:
        "size of the header, in bytes"
        return self.header.size

    @property
    def slot_size(self) -> int:
        "size of one slot, in bytes"
        return self.codec.S.size

    @property
    def flag_mask(self) -> int:
        "flag bits that must be set"
        mask = 0
        for bit in self.required:
            mask |= 1 << bit
        return mask

    def blob_size(self, capacity: int) -> int:
        "size of an account with @capacity slots"
        return self.header_size + capacity * self.slot_size + self.suffix

    @classmethod
    def from_cfg(cls, cfg: Mapping, name: str | None = None) -> QueueLayout:
        """
        Build a layout from a config mapping.

        Unknown keys are rejected.
        """
        cfg = dict(cfg)
        if name is not None:
            cfg.setdefault("name", name)
        try:
            return cls(**cfg)
        except TypeError as exc:
            raise ValueError(f"Layout {name!r}: {exc}") from None


def load_layouts(src: TextIO | str | Path | Mapping) -> dict[str, QueueLayout]:
    """
    Read a set of named layouts.

    @src is a `Path`, an open stream, YAML text, or an already-loaded
    mapping, with a top-level ``layouts`` key.
    """
    if isinstance(src, Path):
        with src.open("r", encoding="utf-8") as f:
            cfg = yload(f)
    elif isinstance(src, Mapping):
        cfg = src
    else:
        cfg = yload(src)

    if not isinstance(cfg, Mapping) or not isinstance(cfg.get("layouts"), Mapping):
        raise ValueError("Layout config needs a 'layouts' mapping")
    res = {}
    for name, lc in cfg["layouts"].items():
        res[name] = QueueLayout.from_cfg(lc, name=name)
        logger.debug("Layout %s: %r", name, res[name])
    return res


_layouts: dict[str, QueueLayout] | None = None


def get_layout(name: str | QueueLayout) -> QueueLayout:
    """
    Return the built-in layout called @name.

    Layout objects are passed through.
    """
    global _layouts  # noqa:PLW0603
    if isinstance(name, QueueLayout):
        return name
    if _layouts is None:
        _layouts = load_layouts(files("eventq").joinpath("_cfg.yaml").read_text(encoding="utf-8"))
    try:
        return _layouts[name]
    except KeyError:
        raise KeyError(f"Unknown layout {name!r}") from None
