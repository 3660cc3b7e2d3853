"""Descriptor file parser.

A descriptor is a line-oriented UTF-8 text file describing a batch of
photos (``<TAB>`` stands for a literal tab character)::

    # comment
    sourceType: slr            <- common attribute, applies to every item
    *                          <- starts a new item
    <TAB>res-0-img: a.jpg      <- per-item attribute
    <TAB>res-0: 4000,3000
    sourceType: drone          <- after the first item: an override that
    *                             changes the common value for later items
    <TAB>res-0-img: b.jpg

Baking replays the recorded timeline so every item sees the common values
as they stood when it was declared.
"""

from __future__ import annotations

import codecs
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from ..config import SET_VALUED_KEYS, TOKEN_SET_SEPARATOR
from ..errors import DescriptorError
from ..utils.logging import get_logger

LOGGER = get_logger()

AttributeMap = Dict[str, str]


def combine_set_tokens(existing: str, addition: str) -> str:
    """Append *addition* to the comma separated set *existing*."""

    if not existing:
        return addition
    if not addition:
        return existing
    if existing.endswith(TOKEN_SET_SEPARATOR):
        return existing + addition
    return f"{existing}{TOKEN_SET_SEPARATOR} {addition}"


@dataclass(slots=True, frozen=True)
class TimelineEntry:
    """Position of one item or override in authored order."""

    is_override: bool
    index: int


def _split_key_value(text: str) -> Optional[Tuple[str, str]]:
    key, separator, value = text.partition(":")
    if not separator:
        return None
    return key.strip(), value.strip()


@dataclass
class DescriptorFile:
    """Parsed but not yet baked contents of one descriptor file."""

    common: AttributeMap = field(default_factory=dict)
    overrides: List[AttributeMap] = field(default_factory=list)
    items: List[AttributeMap] = field(default_factory=list)
    timeline: List[TimelineEntry] = field(default_factory=list)
    source: Optional[Path] = None

    # ------------------------------------------------------------------
    # Parsing
    # ------------------------------------------------------------------
    @classmethod
    def read(cls, path: Path) -> "DescriptorFile":
        """Parse the descriptor at *path*, raising when it cannot be read."""

        try:
            payload = path.read_bytes()
        except OSError as exc:
            raise DescriptorError(f"Could not read descriptor file {path}: {exc}") from exc
        return cls.parse_lines(_decode_lines(payload, path), source=path)

    @classmethod
    def load(cls, path: Path) -> "DescriptorFile":
        """Parse the descriptor at *path*.

        Unreadable files produce an empty descriptor and a warning.
        """

        try:
            return cls.read(path)
        except DescriptorError as exc:
            LOGGER.warning("%s", exc)
            return cls(source=path)

    @classmethod
    def parse(cls, text: str, source: Optional[Path] = None) -> "DescriptorFile":
        return cls.parse_lines(enumerate(text.split("\n"), start=1), source=source)

    @classmethod
    def parse_lines(
        cls, lines: Iterable[Tuple[int, str]], source: Optional[Path] = None
    ) -> "DescriptorFile":
        descriptor = cls(source=source)
        pending: AttributeMap = {}
        have_pending = False
        seen_item_marker = False

        def _flush() -> None:
            nonlocal pending, have_pending
            if have_pending:
                descriptor.timeline.append(TimelineEntry(False, len(descriptor.items)))
                descriptor.items.append(pending)
                have_pending = False
            pending = {}

        for line_number, raw_line in lines:
            line = raw_line.rstrip("\r")
            if not line.strip() or line.startswith("#"):
                continue

            if line.startswith("*"):
                seen_item_marker = True
                _flush()
                continue

            is_item_value = line.startswith("\t")
            parsed = _split_key_value(line[1:] if is_item_value else line)
            if parsed is None:
                descriptor._warn(line_number, "missing ':' separator")
                continue
            key, value = parsed
            if not key:
                descriptor._warn(line_number, "empty attribute key")
                continue

            if is_item_value:
                pending[key] = value
                have_pending = True
            elif not seen_item_marker:
                descriptor.common[key] = value
            else:
                _flush()
                descriptor.timeline.append(TimelineEntry(True, len(descriptor.overrides)))
                descriptor.overrides.append({key: value})

        _flush()
        return descriptor

    def _warn(self, line_number: int, reason: str) -> None:
        LOGGER.warning(
            "Skipping line %d of descriptor %s: %s",
            line_number,
            self.source or "<memory>",
            reason,
        )

    # ------------------------------------------------------------------
    # Baking
    # ------------------------------------------------------------------
    def iter_baked_items(self) -> Iterator[AttributeMap]:
        """Yield every item merged with the common values in effect for it.

        Keys of each yielded map are in lexicographic order.
        """

        local_common = dict(self.common)
        for entry in self.timeline:
            if entry.is_override:
                local_common.update(self.overrides[entry.index])
                continue

            baked = dict(local_common)
            for key, value in self.items[entry.index].items():
                if key in SET_VALUED_KEYS:
                    baked[key] = combine_set_tokens(baked.get(key, ""), value)
                else:
                    baked[key] = value
            yield dict(sorted(baked.items()))

    def baked_items(self) -> List[AttributeMap]:
        return list(self.iter_baked_items())


def _decode_lines(payload: bytes, path: Path) -> Iterator[Tuple[int, str]]:
    if payload.startswith(codecs.BOM_UTF8):
        payload = payload[len(codecs.BOM_UTF8) :]
    for line_number, raw in enumerate(payload.split(b"\n"), start=1):
        try:
            yield line_number, raw.decode("utf-8")
        except UnicodeDecodeError:
            LOGGER.warning("Skipping line %d of descriptor %s: not valid UTF-8", line_number, path)


def parse_descriptor(path: Path) -> Iterator[AttributeMap]:
    """Return the lazily baked items of the descriptor at *path*."""

    return DescriptorFile.load(path).iter_baked_items()


__all__ = [
    "AttributeMap",
    "DescriptorFile",
    "TimelineEntry",
    "combine_set_tokens",
    "parse_descriptor",
]
