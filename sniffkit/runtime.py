"""Runtime statistics of a capture and emission of notifications."""

from __future__ import annotations

import copy
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Callable, Optional

from sniffkit.notifications import (
    BytesThresholdExceeded,
    FavoriteTransmitted,
    LoggedNotification,
    Notifications,
    PacketsThresholdExceeded,
    Sound,
)
from sniffkit.traffic import InfoTraffic

_MAX_LOGGED = 30
_U32_LIMIT = 1 << 32

PlaySound = Callable[[Sound, int], None]


class Status(Enum):
    """State of the sniffing process."""

    INIT = "Init"
    RUNNING = "Running"


@dataclass
class RunTimeData:
    """Traffic statistics shown to the user and the log of notifications."""

    all_bytes: int = 0
    all_packets: int = 0
    tot_sent_bytes: int = 0
    tot_received_bytes: int = 0
    tot_sent_packets: int = 0
    tot_received_packets: int = 0
    dropped_packets: int = 0
    tot_sent_bytes_prev: int = 0
    tot_received_bytes_prev: int = 0
    tot_sent_packets_prev: int = 0
    tot_received_packets_prev: int = 0
    logged_notifications: deque[LoggedNotification] = field(default_factory=deque)
    tot_emitted_notifications: int = 0


def _timestamp() -> str:
    return datetime.now().strftime("%H:%M:%S")


def _as_u32(value: int) -> int:
    if not 0 <= value < _U32_LIMIT:
        raise OverflowError(f"value does not fit in 32 bits: {value}")
    return value


def _log(runtime_data: RunTimeData, notification: LoggedNotification) -> None:
    log = runtime_data.logged_notifications
    if len(log) >= _MAX_LOGGED:
        log.pop()
    log.appendleft(notification)


def notify_and_log(
    runtime_data: RunTimeData,
    notifications: Notifications,
    info_traffic: InfoTraffic,
    play_sound: Optional[PlaySound] = None,
) -> int:
    """Log the notifications due for the last interval and return how many were emitted.

    ``play_sound`` is called with a sound and the volume; at most one sound is played.
    """
    emitted = 0
    sound_played = False

    def play(sound: Sound) -> None:
        if play_sound is not None:
            play_sound(sound, notifications.volume)

    packets = notifications.packets_notification
    if packets.threshold is not None:
        sent = runtime_data.tot_sent_packets - runtime_data.tot_sent_packets_prev
        received = runtime_data.tot_received_packets - runtime_data.tot_received_packets_prev
        if sent + received > packets.threshold:
            emitted += 1
            _log(
                runtime_data,
                PacketsThresholdExceeded(
                    threshold=packets.previous_threshold,
                    incoming=_as_u32(received),
                    outgoing=_as_u32(sent),
                    timestamp=_timestamp(),
                ),
            )
            if packets.sound is not Sound.NONE:
                play(packets.sound)
                sound_played = True

    byte_settings = notifications.bytes_notification
    if byte_settings.threshold is not None:
        sent = runtime_data.tot_sent_bytes - runtime_data.tot_sent_bytes_prev
        received = runtime_data.tot_received_bytes - runtime_data.tot_received_bytes_prev
        if sent + received > byte_settings.threshold:
            emitted += 1
            _log(
                runtime_data,
                BytesThresholdExceeded(
                    threshold=byte_settings.previous_threshold,
                    byte_multiple=byte_settings.byte_multiple,
                    incoming=_as_u32(received),
                    outgoing=_as_u32(sent),
                    timestamp=_timestamp(),
                ),
            )
            if not sound_played and byte_settings.sound is not Sound.NONE:
                play(byte_settings.sound)
                sound_played = True

    favorite = notifications.favorite_notification
    if favorite.notify_on_favorite and info_traffic.favorites_last_interval:
        for host in list(info_traffic.favorites_last_interval):
            emitted += 1
            _log(
                runtime_data,
                FavoriteTransmitted(
                    host=host,
                    data_info_host=copy.deepcopy(info_traffic.hosts[host]),
                    timestamp=_timestamp(),
                ),
            )
        if not sound_played and favorite.sound is not Sound.NONE:
            play(favorite.sound)

    return emitted