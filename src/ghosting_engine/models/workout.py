"""Workout definition tree: Workout → Pattern → Shot | Message.

Every node is frozen. Raw ``config`` mappings are kept as loaded so that the
config resolver can merge them per field. Repeat counts and limits are
normalized by the loader into ``repeat`` / ``limits`` and are never
inherited from a parent node.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Union

from ghosting_engine.models.config import Limits, PositionLock, RepeatSpec
from ghosting_engine.models.enums import EntryType

_EMPTY: Mapping[str, Any] = MappingProxyType({})


@dataclass(frozen=True, eq=False)
class Shot:
    """A single drill movement, announced by name and closed with a beep.

    Entries compare by identity: the same shot may appear twice in a pattern
    with identical fields and the scheduler must tell the copies apart.
    """

    id: str
    name: str
    config: Mapping[str, Any] = field(default_factory=lambda: _EMPTY)
    position: PositionLock = field(default_factory=PositionLock)
    repeat: RepeatSpec | None = None

    entry_type = EntryType.SHOT


@dataclass(frozen=True, eq=False)
class Message:
    """A spoken message, optionally followed by a countdown. Never repeats."""

    id: str
    name: str
    config: Mapping[str, Any] = field(default_factory=lambda: _EMPTY)
    position: PositionLock = field(default_factory=PositionLock)

    entry_type = EntryType.MESSAGE

    @property
    def text(self) -> str:
        message = self.config.get("message")
        return message if isinstance(message, str) else ""


Entry = Union[Shot, Message]


@dataclass(frozen=True)
class Pattern:
    """An ordered group of entries played as one or more runs."""

    id: str
    name: str
    entries: tuple[Entry, ...] = field(default_factory=tuple)
    config: Mapping[str, Any] = field(default_factory=lambda: _EMPTY)
    position: PositionLock = field(default_factory=PositionLock)
    repeat: RepeatSpec | None = None
    limits: Limits = field(default_factory=Limits)

    @property
    def shots(self) -> tuple[Shot, ...]:
        return tuple(e for e in self.entries if e.entry_type == EntryType.SHOT)


@dataclass(frozen=True)
class Workout:
    """Top-level workout definition."""

    name: str
    patterns: tuple[Pattern, ...] = field(default_factory=tuple)
    config: Mapping[str, Any] = field(default_factory=lambda: _EMPTY)
    limits: Limits = field(default_factory=Limits)
