"""Notification settings, sounds and logged notification events."""

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional, Union

from sniffkit.protocols import ByteMultiple, from_char_to_multiple
from sniffkit.traffic import DataInfoHost, Host

_UNSIGNED = re.compile(r"\+?[0-9]+")


def _parse_unsigned(text: str, bits: int) -> Optional[int]:
    """Parse an unsigned integer of the given width strictly, or return None."""
    if not _UNSIGNED.fullmatch(text):
        return None
    number = int(text)
    return number if number < 1 << bits else None


class Sound(Enum):
    """Sounds that can accompany a notification."""

    GULP = "Gulp"
    POP = "Pop"
    SWHOOSH = "Swhoosh"
    NONE = "None"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class PacketsNotification:
    """Notification emitted when the packets in an interval exceed a threshold."""

    threshold: Optional[int] = None
    sound: Sound = Sound.GULP
    previous_threshold: int = 750

    @classmethod
    def from_str(
        cls, value: str, existing: Optional[PacketsNotification] = None
    ) -> PacketsNotification:
        """Build from user text, falling back to ``existing`` (or defaults) when unparsable."""
        base = existing if existing is not None else cls()
        if not value:
            threshold = 0
        else:
            parsed = _parse_unsigned(value, 32)
            threshold = base.previous_threshold if parsed is None else parsed
        return replace(base, threshold=threshold, previous_threshold=threshold)


@dataclass(frozen=True)
class BytesNotification:
    """Notification emitted when the bytes in an interval exceed a threshold."""

    threshold: Optional[int] = None
    byte_multiple: ByteMultiple = ByteMultiple.KB
    sound: Sound = Sound.POP
    previous_threshold: int = 800_000

    @classmethod
    def from_str(
        cls, value: str, existing: Optional[BytesNotification] = None
    ) -> BytesNotification:
        """Build from user text such as ``"500k"``, falling back to ``existing`` when unparsable."""
        base = existing if existing is not None else cls()
        multiple = ByteMultiple.B
        if not value:
            threshold = 0
        elif all(ch.isnumeric() for ch in value.strip()):
            parsed = _parse_unsigned(value, 64)
            threshold = base.previous_threshold if parsed is None else parsed
        else:
            multiple = from_char_to_multiple(value[-1])
            amount_text = value[:-1].strip()
            amount = _parse_unsigned(amount_text, 64)
            if amount is not None and amount * multiple.get_multiplier() < 1 << 64:
                threshold = amount * multiple.get_multiplier()
            elif not amount_text:
                multiple = ByteMultiple.B
                threshold = 0
            else:
                multiple = base.byte_multiple
                threshold = base.previous_threshold
        return replace(
            base,
            threshold=threshold,
            previous_threshold=threshold,
            byte_multiple=multiple,
        )


@dataclass(frozen=True)
class FavoriteNotification:
    """Notification emitted when a favorite host exchanges data."""

    notify_on_favorite: bool = False
    sound: Sound = Sound.SWHOOSH

    @classmethod
    def on(cls, sound: Sound) -> FavoriteNotification:
        """An enabled favorite notification with the given sound."""
        return cls(notify_on_favorite=True, sound=sound)

    @classmethod
    def off(cls, sound: Sound) -> FavoriteNotification:
        """A disabled favorite notification that still remembers its sound."""
        return cls(notify_on_favorite=False, sound=sound)


@dataclass(frozen=True)
class Notifications:
    """The user's notification configuration."""

    volume: int = 60
    packets_notification: PacketsNotification = field(default_factory=PacketsNotification)
    bytes_notification: BytesNotification = field(default_factory=BytesNotification)
    favorite_notification: FavoriteNotification = field(default_factory=FavoriteNotification)


@dataclass
class PacketsThresholdExceeded:
    """Logged event: the packets threshold was exceeded."""

    threshold: int
    incoming: int
    outgoing: int
    timestamp: str


@dataclass
class BytesThresholdExceeded:
    """Logged event: the bytes threshold was exceeded."""

    threshold: int
    byte_multiple: ByteMultiple
    incoming: int
    outgoing: int
    timestamp: str


@dataclass
class FavoriteTransmitted:
    """Logged event: a favorite host exchanged data."""

    host: Host
    data_info_host: DataInfoHost
    timestamp: str


LoggedNotification = Union[
    PacketsThresholdExceeded, BytesThresholdExceeded, FavoriteTransmitted
]